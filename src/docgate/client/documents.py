"""Rate-limited client for the document creation API.

Every submission is admitted through an AdmissionGate before the HTTP
request is sent, so concurrent callers sharing one client (or one gate)
never exceed the configured request rate.
"""

from typing import Any

import requests

from docgate.config.profile import DEFAULT_API_URL, ClientProfile
from docgate.exceptions import SubmissionError
from docgate.gate.admission import AdmissionGate
from docgate.logger import get_logger, mask_sensitive
from docgate.schemas.documents import CreateDocumentRequest, Document

logger = get_logger(__name__)


class DocumentClient:
    """Submit documents to the API, paced by an admission gate.

    Attributes:
        api_url: Document creation endpoint.
        timeout: Per-request timeout in seconds.
        gate: Gate admitting each submission.
    """

    def __init__(
        self,
        auth_token: str,
        *,
        gate: AdmissionGate,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        """Initialize the client.

        Args:
            auth_token: Bearer token for the Authorization header.
            gate: Gate shared by every caller drawing on the same quota.
            api_url: Document creation endpoint.
            timeout: Per-request timeout in seconds.
            session: Optional HTTP session; one is created and owned otherwise.
        """
        self.api_url = api_url
        self.timeout = timeout
        self.gate = gate
        self._auth_token = auth_token
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

        logger.info(
            "Document client ready: url=%s, token=%s, gate=%r",
            api_url,
            mask_sensitive(auth_token),
            gate,
        )

    @classmethod
    def from_config(
        cls, profile: ClientProfile, session: requests.Session | None = None
    ) -> "DocumentClient":
        """Create a client and its gate from a profile.

        Args:
            profile: Gate and client configuration.
            session: Optional HTTP session.

        Returns:
            Configured client owning a fresh gate.
        """
        return cls(
            profile.client.auth_token.get_secret_value(),
            gate=AdmissionGate.from_config(profile.gate),
            api_url=profile.client.api_url,
            timeout=profile.client.timeout,
            session=session,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._auth_token}",
        }

    def create_document(self, document: Document, signature: str) -> dict[str, Any]:
        """Submit a goods introduction document.

        Blocks until the gate admits the request.

        Args:
            document: Document to submit.
            signature: Detached signature of the document.

        Returns:
            Decoded JSON response body ({} when the body is empty).

        Raises:
            SubmissionError: If the request fails or the API does not return 200.
        """
        self.gate.acquire()

        body = CreateDocumentRequest.from_document(document, signature).to_json()
        logger.debug(
            "Submitting document: doc_id=%s, bytes=%d", document.doc_id, len(body)
        )

        try:
            response = self._session.post(
                self.api_url,
                data=body.encode("utf-8"),
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Document submission failed: url=%s", self.api_url)
            logger.debug("Transport error details: %s", e, exc_info=True)
            raise SubmissionError(f"Request to {self.api_url} failed", cause=e) from e

        if response.status_code != 200:
            logger.error(
                "Document rejected: doc_id=%s, status=%d",
                document.doc_id,
                response.status_code,
            )
            logger.debug("Rejection body: %s", response.text)
            raise SubmissionError(
                f"API request failed: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        logger.info("Document submitted: doc_id=%s", document.doc_id)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise SubmissionError(
                "API returned a non-JSON body",
                status_code=response.status_code,
                body=response.text,
                cause=e,
            ) from e

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "DocumentClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
