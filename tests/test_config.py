"""Unit tests for configuration profiles."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from docgate.config.profile import (
    DEFAULT_API_URL,
    ClientConfig,
    ClientProfile,
    GateConfig,
)
from docgate.exceptions import InvalidConfigurationError


@pytest.mark.unit
class TestGateConfig:
    """Tests for GateConfig validation and defaults."""

    def test_defaults_should_use_one_second_window(self) -> None:
        config = GateConfig(capacity=5)

        assert config.window_seconds == 1.0
        assert config.time_unit is None
        assert config.window == 1.0

    @pytest.mark.parametrize("capacity", [0, -1])
    def test_non_positive_capacity_should_fail(self, capacity: int) -> None:
        with pytest.raises(ValidationError):
            GateConfig(capacity=capacity)

    def test_non_positive_window_should_fail(self) -> None:
        with pytest.raises(ValidationError):
            GateConfig(capacity=1, window_seconds=0.0)

    def test_string_capacity_should_fail_in_strict_mode(self) -> None:
        with pytest.raises(ValidationError):
            GateConfig(capacity="5")  # type: ignore[arg-type]

    def test_time_unit_should_be_normalized_and_override_seconds(self) -> None:
        config = GateConfig(capacity=3, window_seconds=10.0, time_unit="minutes")

        assert config.time_unit == "MINUTE"
        assert config.window == 60.0

    def test_unknown_time_unit_should_fail(self) -> None:
        with pytest.raises(ValidationError, match="Unknown time unit"):
            GateConfig(capacity=3, time_unit="fortnight")

    def test_extra_fields_should_be_forbidden(self) -> None:
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            GateConfig(capacity=1, burst=2)  # type: ignore[call-arg]


@pytest.mark.unit
class TestClientConfig:
    """Tests for ClientConfig validation and defaults."""

    def test_defaults_should_target_document_endpoint(self) -> None:
        config = ClientConfig(auth_token="token-123")

        assert config.api_url == DEFAULT_API_URL
        assert config.timeout == 30.0

    def test_token_should_be_hidden_in_repr(self) -> None:
        config = ClientConfig(auth_token="super-secret-token")

        assert "super-secret-token" not in repr(config)
        assert config.auth_token.get_secret_value() == "super-secret-token"

    def test_non_http_url_should_fail(self) -> None:
        with pytest.raises(ValidationError, match="http"):
            ClientConfig(auth_token="t", api_url="ftp://example.test")

    @pytest.mark.parametrize("timeout", [0.0, -1.0, 301.0])
    def test_out_of_range_timeout_should_fail(self, timeout: float) -> None:
        with pytest.raises(ValidationError):
            ClientConfig(auth_token="t", timeout=timeout)


@pytest.mark.unit
class TestClientProfile:
    """Tests for ClientProfile YAML loading and export."""

    def test_from_yaml_should_load_valid_profile(self, profile_yaml: Path) -> None:
        profile = ClientProfile.from_yaml(profile_yaml)

        assert profile.gate.capacity == 100
        assert profile.gate.window == 1.0
        assert profile.client.api_url.startswith("https://example.test")
        assert profile.client.auth_token.get_secret_value() == "secret-token-value"
        assert profile.client.timeout == 5.0

    def test_from_yaml_should_raise_when_file_missing(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            ClientProfile.from_yaml(tmp_path / "missing.yaml")

    def test_from_yaml_should_wrap_yaml_syntax_errors(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("gate: [unclosed\n", encoding="utf-8")

        with pytest.raises(InvalidConfigurationError, match="Invalid YAML"):
            ClientProfile.from_yaml(path)

    def test_from_yaml_should_report_invalid_field_path(self, tmp_path: Path) -> None:
        """
        Scenario: Profile whose gate capacity is zero.
        Action: Load it.
        Then: InvalidConfigurationError names gate.capacity.
        """
        path = tmp_path / "zero.yaml"
        path.write_text(
            "gate:\n  capacity: 0\nclient:\n  auth_token: t\n", encoding="utf-8"
        )

        with pytest.raises(InvalidConfigurationError) as exc_info:
            ClientProfile.from_yaml(path)

        assert exc_info.value.field_path == "gate.capacity"
        assert isinstance(exc_info.value.cause, ValidationError)

    def test_from_dict_should_reject_missing_sections(self) -> None:
        with pytest.raises(InvalidConfigurationError) as exc_info:
            ClientProfile.from_dict({"gate": {"capacity": 1}})

        assert exc_info.value.field_path == "client"

    def test_to_yaml_should_mask_token_by_default(
        self, profile_yaml: Path, tmp_path: Path
    ) -> None:
        profile = ClientProfile.from_yaml(profile_yaml)
        out = tmp_path / "exported.yaml"

        profile.to_yaml(out)

        assert "secret-token-value" not in out.read_text(encoding="utf-8")

    def test_to_yaml_with_secrets_should_reload_identically(
        self, profile_yaml: Path, tmp_path: Path
    ) -> None:
        profile = ClientProfile.from_yaml(profile_yaml)
        out = tmp_path / "exported.yaml"

        profile.to_yaml(out, reveal_secrets=True)
        reloaded = ClientProfile.from_yaml(out)

        assert reloaded == profile
