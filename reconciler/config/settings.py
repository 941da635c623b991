from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    extraction_provider: str = "openrouter"
    extraction_timeout_seconds: int = 30
    extraction_temperature: float = 0.1
    extraction_max_tokens: int = 300

    extraction_openai_api_key: str = ""
    extraction_openai_model_name: str = "gpt-4o-mini"

    extraction_openrouter_api_key: str = ""
    extraction_openrouter_model_name: str = "google/gemini-flash-1.5"

    extraction_openai_compatible_base_url: str = ""
    extraction_openai_compatible_api_key: str = ""
    extraction_openai_compatible_model_name: str = ""

    analysis_debounce_seconds: float = 1.0

    registration_imei_max_length: int = 20
    reconciliation_imei_max_length: int = 15
    serial_max_length: int = 20

    allow_pending_validation: bool = True
    suppress_mismatch_on_swap: bool = False
    require_extracted_imei: bool = True
    send_operator_hint: bool = False

    registry_base_url: str = "http://localhost:8000/api"
    registry_api_token: str = ""
    registry_timeout_seconds: int = 10
