"""Tests for the IdentifierExtractor (AI-powered extraction)."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from reconciler.extraction.exceptions import (
    ExtractionNetworkError,
    ExtractionResponseError,
    ExtractionTimeoutError,
)
from reconciler.extraction.extractor import IdentifierExtractor
from reconciler.extraction.models import ImagePayload
from reconciler.normalization.models import IdentifierSet

IMAGE = ImagePayload(data_url="data:image/png;base64,AAAA", mime="image/png", name="shot.png")


def _make_extractor(client: MagicMock, **kwargs: object) -> IdentifierExtractor:
    return IdentifierExtractor(client=client, model="test-model", **kwargs)  # type: ignore[arg-type]


def _mock_client(content: str) -> MagicMock:
    client = MagicMock()
    client.create_vision_completion = AsyncMock(return_value=content)
    return client


class TestExtractSuccess:
    def test_returns_extraction_result(self) -> None:
        client = _mock_client(json.dumps({"imei1": "356938035643809", "imei2": None}))
        result = asyncio.run(_make_extractor(client).extract(IMAGE, "imei"))
        assert result.identifiers.imei1 == "356938035643809"
        assert result.imei_count == 1

    def test_sends_image_and_model(self) -> None:
        client = _mock_client("{}")
        asyncio.run(_make_extractor(client, max_tokens=123).extract(IMAGE, "imei"))
        kwargs = client.create_vision_completion.call_args.kwargs
        assert kwargs["image_data_url"] == IMAGE.data_url
        assert kwargs["model"] == "test-model"
        assert kwargs["max_tokens"] == 123

    def test_prompt_depends_on_kind(self) -> None:
        client = _mock_client("{}")
        asyncio.run(_make_extractor(client).extract(IMAGE, "specs"))
        prompt = client.create_vision_completion.call_args.kwargs["prompt"]
        assert "RAM" in prompt
        assert "{hint}" not in prompt

    def test_hint_is_rendered_into_prompt(self) -> None:
        client = _mock_client("{}")
        hint = IdentifierSet(imei1="356938035643809")
        asyncio.run(_make_extractor(client).extract(IMAGE, "imei", hint))
        prompt = client.create_vision_completion.call_args.kwargs["prompt"]
        assert "IMEI1: 356938035643809" in prompt

    def test_temperature_is_clamped(self) -> None:
        client = _mock_client("{}")
        asyncio.run(_make_extractor(client, temperature=0.9).extract(IMAGE, "imei"))
        assert client.create_vision_completion.call_args.kwargs["temperature"] == 0.2


class TestResponseParsing:
    def test_strips_code_fences(self) -> None:
        client = _mock_client('```json\n{"serialNumber": "ABC123"}\n```')
        result = asyncio.run(_make_extractor(client).extract(IMAGE, "serial"))
        assert result.identifiers.serial_number == "ABC123"

    def test_finds_object_inside_prose(self) -> None:
        client = _mock_client('Here you go: {"imei1": "356938035643809"} hope it helps')
        result = asyncio.run(_make_extractor(client).extract(IMAGE, "imei"))
        assert result.identifiers.imei1 == "356938035643809"

    def test_raises_when_no_json(self) -> None:
        client = _mock_client("I cannot read this image")
        with pytest.raises(ExtractionResponseError, match="no JSON object"):
            asyncio.run(_make_extractor(client).extract(IMAGE, "imei"))

    def test_raises_when_not_an_object(self) -> None:
        client = _mock_client('["356938035643809"]')
        with pytest.raises(ExtractionResponseError, match="must be an object"):
            asyncio.run(_make_extractor(client).extract(IMAGE, "imei"))


class TestExtractFailures:
    def test_propagates_network_error(self) -> None:
        client = MagicMock()
        client.create_vision_completion = AsyncMock(
            side_effect=ExtractionNetworkError("down")
        )
        with pytest.raises(ExtractionNetworkError):
            asyncio.run(_make_extractor(client).extract(IMAGE, "imei"))

    def test_times_out(self) -> None:
        async def hang(**_: object) -> str:
            await asyncio.sleep(10)
            return "{}"

        client = MagicMock()
        client.create_vision_completion = hang
        extractor = _make_extractor(client, timeout_seconds=0.01)
        with pytest.raises(ExtractionTimeoutError, match="did not finish"):
            asyncio.run(extractor.extract(IMAGE, "imei"))
