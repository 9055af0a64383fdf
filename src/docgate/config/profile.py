"""Gate and client configuration profiles.

Profiles are Pydantic V2 models that can be loaded from and written to
YAML files.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    ValidationError,
    field_validator,
)

from docgate.exceptions import InvalidConfigurationError
from docgate.gate.units import TimeUnit

DEFAULT_API_URL = "https://ismp.crpt.ru/api/v3/lk/documents/create"


class GateConfig(BaseModel):
    """Configuration for an admission gate.

    Attributes:
        capacity: Maximum operations admitted per window.
        window_seconds: Window length in seconds.
        time_unit: Optional unit name; when set the window is one unit long
            and ``window_seconds`` is ignored.
    """

    model_config = ConfigDict(strict=True, extra="forbid")

    capacity: int = Field(
        ...,
        gt=0,
        description="Maximum operations admitted per window",
    )
    window_seconds: float = Field(
        default=1.0,
        gt=0.0,
        description="Window length in seconds",
    )
    time_unit: str | None = Field(
        default=None,
        description="Window expressed as one unit (second, minute, hour, ...)",
    )

    @field_validator("time_unit")
    @classmethod
    def time_unit_must_be_known(cls, v: str | None) -> str | None:
        """Normalize the unit name to its canonical upper-case form.

        Raises:
            ValueError: If the unit name is unknown.
        """
        if v is None:
            return v
        try:
            return TimeUnit.parse(v).name
        except InvalidConfigurationError as e:
            raise ValueError(e.message) from e

    @property
    def window(self) -> float:
        """Effective window length in seconds."""
        if self.time_unit is not None:
            return TimeUnit[self.time_unit].seconds
        return self.window_seconds


class ClientConfig(BaseModel):
    """Configuration for the document API client.

    Attributes:
        api_url: Endpoint receiving document creation requests.
        auth_token: Bearer token sent with every request.
        timeout: Per-request timeout in seconds.
    """

    model_config = ConfigDict(strict=True, extra="forbid")

    api_url: str = Field(
        default=DEFAULT_API_URL,
        description="Document creation endpoint",
    )
    auth_token: SecretStr = Field(
        ...,
        strict=False,
        description="Bearer token for the Authorization header",
    )
    timeout: float = Field(
        default=30.0,
        gt=0.0,
        le=300.0,
        description="Request timeout in seconds",
    )

    @field_validator("api_url")
    @classmethod
    def api_url_must_be_http(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("api_url must start with http:// or https://")
        return v


class ClientProfile(BaseModel):
    """Complete configuration for a rate-limited document client.

    Attributes:
        gate: Admission gate settings.
        client: API client settings.
    """

    model_config = ConfigDict(strict=True, extra="forbid")

    gate: GateConfig = Field(..., description="Admission gate configuration")
    client: ClientConfig = Field(..., description="API client configuration")

    @classmethod
    def from_yaml(cls, path: Path) -> "ClientProfile":
        """Load a profile from a YAML file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            Validated ClientProfile instance.

        Raises:
            FileNotFoundError: If the file does not exist.
            InvalidConfigurationError: If YAML is invalid or validation fails.
        """
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidConfigurationError(f"Invalid YAML syntax: {e}") from e

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Any) -> "ClientProfile":
        """Validate a plain mapping into a profile.

        Raises:
            InvalidConfigurationError: If validation fails. ``field_path``
                points at the first offending field.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            first = e.errors()[0]
            field_path = ".".join(str(p) for p in first["loc"]) or None
            raise InvalidConfigurationError(
                f"Configuration validation failed: {first['msg']}",
                field_path=field_path,
                cause=e,
            ) from e

    def to_yaml(self, path: Path, reveal_secrets: bool = False) -> None:
        """Export the profile to a YAML file.

        Args:
            path: Output file path.
            reveal_secrets: Write the auth token in clear text. When False the
                token is written masked and the file cannot be reloaded as-is.
        """
        data = self.model_dump(mode="json")
        if reveal_secrets:
            data["client"]["auth_token"] = self.client.auth_token.get_secret_value()

        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                data,
                f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )
