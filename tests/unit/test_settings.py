import pytest
from pydantic import ValidationError

from reconciler.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings(_env_file=None)
        assert s.app_env == "dev"

    def test_default_extraction_provider(self) -> None:
        s = Settings(_env_file=None)
        assert s.extraction_provider == "openrouter"

    def test_default_extraction_temperature(self) -> None:
        s = Settings(_env_file=None)
        assert s.extraction_temperature == 0.1

    def test_default_debounce(self) -> None:
        s = Settings(_env_file=None)
        assert s.analysis_debounce_seconds == 1.0

    def test_default_imei_caps(self) -> None:
        s = Settings(_env_file=None)
        assert s.registration_imei_max_length == 20
        assert s.reconciliation_imei_max_length == 15

    def test_default_policy_flags(self) -> None:
        s = Settings(_env_file=None)
        assert s.allow_pending_validation is True
        assert s.suppress_mismatch_on_swap is False
        assert s.require_extracted_imei is True
        assert s.send_operator_hint is False


class TestSettingsFromEnv:
    def test_loads_app_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        s = Settings(_env_file=None)
        assert s.app_env == "production"

    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings(_env_file=None)
        assert s.log_level == "DEBUG"

    def test_loads_extraction_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EXTRACTION_PROVIDER", "example")
        s = Settings(_env_file=None)
        assert s.extraction_provider == "example"

    def test_loads_debounce(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANALYSIS_DEBOUNCE_SECONDS", "0.25")
        s = Settings(_env_file=None)
        assert s.analysis_debounce_seconds == 0.25

    def test_loads_swap_suppression(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUPPRESS_MISMATCH_ON_SWAP", "true")
        s = Settings(_env_file=None)
        assert s.suppress_mismatch_on_swap is True


class TestSettingsValidation:
    def test_invalid_timeout_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EXTRACTION_TIMEOUT_SECONDS", "not_a_number")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_invalid_flag_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ALLOW_PENDING_VALIDATION", "maybe")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)
