from typing import ClassVar

from reconciler.config.settings import Settings
from reconciler.extraction.base import BaseIdentifierExtractor
from reconciler.extraction.example_client_adapter import ExampleVisionClientAdapter
from reconciler.extraction.extractor import IdentifierExtractor
from reconciler.extraction.openai_client_adapter import OpenAIVisionClientAdapter
from reconciler.normalization.builder import NormalizationLimits


class ExtractorFactory:
    """Creates the configured identifier extractor."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
    }
    PROVIDER_HEADERS: ClassVar[dict[str, dict[str, str]]] = {
        "openrouter": {"X-Title": "device-reconciler"},
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseIdentifierExtractor:
        """Create a configured extractor from application settings."""
        provider = settings.extraction_provider.lower()
        limits = NormalizationLimits(
            imei_max_length=settings.reconciliation_imei_max_length,
            serial_max_length=settings.serial_max_length,
        )
        if provider == "example":
            return IdentifierExtractor(
                client=ExampleVisionClientAdapter(),
                model="example",
                temperature=0.0,
                timeout_seconds=settings.extraction_timeout_seconds,
                limits=limits,
            )
        client = OpenAIVisionClientAdapter(
            api_key=cls._resolve_api_key(provider, settings),
            timeout_seconds=settings.extraction_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
            default_headers=cls.PROVIDER_HEADERS.get(provider),
        )
        return IdentifierExtractor(
            client=client,
            model=cls._resolve_model_name(provider, settings),
            temperature=settings.extraction_temperature,
            max_tokens=settings.extraction_max_tokens,
            timeout_seconds=settings.extraction_timeout_seconds,
            limits=limits,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = (settings.extraction_openai_compatible_base_url or "").strip()
            if not url:
                raise ValueError(
                    "extraction_openai_compatible_base_url is required for "
                    "extraction_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown extraction provider '{provider}'. Choose from: {supported}"
        )

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "openai": settings.extraction_openai_api_key,
            "openai_compatible": settings.extraction_openai_compatible_api_key,
            "openrouter": settings.extraction_openrouter_api_key,
        }
        return key_map.get(provider, "") or ""

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "openai": settings.extraction_openai_model_name,
            "openai_compatible": settings.extraction_openai_compatible_model_name,
            "openrouter": settings.extraction_openrouter_model_name,
        }
        return key_map.get(provider, "") or ""
