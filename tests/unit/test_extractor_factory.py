from unittest.mock import MagicMock, patch

import pytest

from reconciler.extraction.example_client_adapter import ExampleVisionClientAdapter
from reconciler.extraction.extractor import IdentifierExtractor
from reconciler.extraction.factory import ExtractorFactory


def _settings(**overrides: object) -> MagicMock:
    defaults: dict[str, object] = {
        "extraction_provider": "openrouter",
        "extraction_timeout_seconds": 30,
        "extraction_temperature": 0.1,
        "extraction_max_tokens": 300,
        "extraction_openai_api_key": "openai-key",
        "extraction_openai_model_name": "gpt-4o-mini",
        "extraction_openrouter_api_key": "router-key",
        "extraction_openrouter_model_name": "google/gemini-flash-1.5",
        "extraction_openai_compatible_base_url": "",
        "extraction_openai_compatible_api_key": "",
        "extraction_openai_compatible_model_name": "",
        "reconciliation_imei_max_length": 15,
        "serial_max_length": 20,
    }
    defaults.update(overrides)
    return MagicMock(**defaults)


class TestExtractorFactory:
    def test_example_provider_needs_no_network(self) -> None:
        extractor = ExtractorFactory.create(_settings(extraction_provider="example"))
        assert isinstance(extractor, IdentifierExtractor)
        assert isinstance(extractor._client, ExampleVisionClientAdapter)

    def test_openrouter_uses_default_base_url(self) -> None:
        with patch("reconciler.extraction.factory.OpenAIVisionClientAdapter") as adapter_cls:
            ExtractorFactory.create(_settings())
        kwargs = adapter_cls.call_args.kwargs
        assert kwargs["base_url"] == "https://openrouter.ai/api/v1"
        assert kwargs["api_key"] == "router-key"
        assert kwargs["default_headers"] == {"X-Title": "device-reconciler"}

    def test_openai_uses_sdk_default_base_url(self) -> None:
        with patch("reconciler.extraction.factory.OpenAIVisionClientAdapter") as adapter_cls:
            extractor = ExtractorFactory.create(_settings(extraction_provider="OpenAI"))
        assert adapter_cls.call_args.kwargs["base_url"] is None
        assert adapter_cls.call_args.kwargs["api_key"] == "openai-key"
        assert isinstance(extractor, IdentifierExtractor)
        assert extractor._model == "gpt-4o-mini"

    def test_openai_compatible_requires_base_url(self) -> None:
        with pytest.raises(ValueError, match="base_url is required"):
            ExtractorFactory.create(_settings(extraction_provider="openai_compatible"))

    def test_openai_compatible_with_base_url(self) -> None:
        settings = _settings(
            extraction_provider="openai_compatible",
            extraction_openai_compatible_base_url=" http://localhost:11434/v1 ",
            extraction_openai_compatible_model_name="llava",
        )
        with patch("reconciler.extraction.factory.OpenAIVisionClientAdapter") as adapter_cls:
            extractor = ExtractorFactory.create(settings)
        assert adapter_cls.call_args.kwargs["base_url"] == "http://localhost:11434/v1"
        assert isinstance(extractor, IdentifierExtractor)
        assert extractor._model == "llava"

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown extraction provider"):
            ExtractorFactory.create(_settings(extraction_provider="nope"))
