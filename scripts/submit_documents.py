"""CLI entry point for submitting a batch of documents through a shared gate.

Usage::

    python scripts/submit_documents.py --config profile.yaml --items batch.jsonl
    python scripts/submit_documents.py --config profile.yaml --items batch.jsonl \\
        --workers 8 --log-level DEBUG
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from docgate.client.documents import DocumentClient
from docgate.config.profile import ClientProfile
from docgate.exceptions import DocGateError
from docgate.logger import set_log_level
from docgate.schemas.documents import SubmissionItem

app = typer.Typer(help="docgate batch submission CLI.")
console = Console()


def _submit_all(
    client: DocumentClient, items: list[SubmissionItem], workers: int
) -> list[tuple[SubmissionItem, str | None]]:
    """Submit items from a thread pool; every worker shares the client's gate.

    Args:
        client: Client whose gate paces all workers.
        items: Documents to submit.
        workers: Number of worker threads.

    Returns:
        (item, error message or None) pairs in completion order.
    """
    results: list[tuple[SubmissionItem, str | None]] = []

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
    ) as progress:
        task = progress.add_task(
            f"Submitting {len(items)} document(s)...", total=len(items)
        )

        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {
                pool.submit(
                    client.create_document, item.document, item.signature
                ): item
                for item in items
            }
            for future in as_completed(futures):
                item = futures[future]
                try:
                    future.result()
                    results.append((item, None))
                except DocGateError as exc:
                    results.append((item, str(exc)))
                progress.update(task, advance=1)

    return results


def _print_summary(results: list[tuple[SubmissionItem, str | None]]) -> None:
    table = Table(title="Submission Summary")
    table.add_column("doc_id", justify="left")
    table.add_column("status", justify="left")

    for item, error in results:
        status = "[green]ok[/green]" if error is None else f"[red]{error}[/red]"
        table.add_row(item.document.doc_id or "-", status)

    console.print(table)


@app.callback(invoke_without_command=True)
def run(
    config: Path = typer.Option(
        ..., "--config", exists=True, help="YAML client profile (gate + client)."
    ),
    items: Path = typer.Option(
        ..., "--items", exists=True, help="JSONL file of {document, signature} items."
    ),
    workers: int = typer.Option(
        4, "--workers", min=1, max=64, help="Concurrent submitting threads."
    ),
    log_level: str = typer.Option(
        "INFO", "--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)."
    ),
) -> None:
    """Submit every document in a batch file, paced by the profile's gate."""
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        console.print(f"[red]Invalid log level: {log_level}[/red]")
        raise SystemExit(1)
    set_log_level(log_level.upper())

    try:
        profile = ClientProfile.from_yaml(config)
    except DocGateError as exc:
        console.print(f"[red]Invalid config: {exc}[/red]")
        raise SystemExit(1) from exc

    try:
        batch = SubmissionItem.load_items(items)
    except ValueError as exc:
        console.print(f"[red]Failed to load items: {exc}[/red]")
        raise SystemExit(1) from exc

    if not batch:
        console.print("[red]No items found in file.[/red]")
        raise SystemExit(2)

    console.print(
        f"[bold]docgate[/bold]: {len(batch)} item(s), "
        f"{profile.gate.capacity} per {profile.gate.window:g}s, "
        f"workers: {workers}"
    )

    with DocumentClient.from_config(profile) as client:
        results = _submit_all(client, batch, workers)

    _print_summary(results)

    failed = sum(1 for _, error in results if error is not None)
    if failed:
        console.print(f"[red]{failed} of {len(results)} submission(s) failed.[/red]")
        raise SystemExit(3)
    console.print(f"\n[green]All {len(results)} document(s) submitted.[/green]")


if __name__ == "__main__":
    app()
