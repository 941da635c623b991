"""AI-powered identifier extractor."""

import asyncio
import json
import re
from pathlib import Path

from reconciler.extraction.base import BaseIdentifierExtractor
from reconciler.extraction.client_base import BaseVisionClient
from reconciler.extraction.exceptions import ExtractionResponseError, ExtractionTimeoutError
from reconciler.extraction.models import ExtractionKind, ExtractionResult, ImagePayload
from reconciler.extraction.prompt_loader import load_prompt_template, render_hint
from reconciler.extraction.validator import validate_and_build
from reconciler.logging.logger import Log
from reconciler.normalization.builder import RECONCILIATION_LIMITS, NormalizationLimits
from reconciler.normalization.models import IdentifierSet

_JSON_OBJECT = re.compile(r"\{[^{}]*\}", re.DOTALL)


class IdentifierExtractor(BaseIdentifierExtractor):
    """Extracts IMEIs, serial numbers and specs from screenshots using a vision provider."""

    def __init__(
        self,
        *,
        client: BaseVisionClient,
        model: str,
        temperature: float = 0.1,
        max_tokens: int = 300,
        timeout_seconds: float = 30.0,
        limits: NormalizationLimits = RECONCILIATION_LIMITS,
        prompt_dir: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._max_tokens = max_tokens
        self._timeout_seconds = timeout_seconds
        self._limits = limits
        self._prompt_dir = prompt_dir

    async def extract(
        self,
        image: ImagePayload,
        expected_kind: ExtractionKind,
        hint: IdentifierSet | None = None,
    ) -> ExtractionResult:
        prompt = self._build_prompt(expected_kind, hint)
        Log.debug(f"Extraction prompt:\n{prompt}", kind=expected_kind)

        raw_response = await self._call_ai(prompt, image)
        Log.debug(f"AI raw response:\n{raw_response}", kind=expected_kind)

        parsed = self._parse_json(raw_response)
        result = validate_and_build(parsed, expected_kind, self._limits)

        Log.info(
            f"Extraction complete: {result.imei_count} IMEI(s) detected",
            kind=expected_kind,
            image=image.name or "-",
            raw_errors=len(result.raw_errors),
        )
        return result

    def _build_prompt(self, kind: ExtractionKind, hint: IdentifierSet | None) -> str:
        template = load_prompt_template(kind, self._prompt_dir)
        return template.format(hint=render_hint(hint)).strip()

    async def _call_ai(self, prompt: str, image: ImagePayload) -> str:
        try:
            return await asyncio.wait_for(
                self._client.create_vision_completion(
                    model=self._model,
                    temperature=self._temperature,
                    max_tokens=self._max_tokens,
                    prompt=prompt,
                    image_data_url=image.data_url,
                ),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise ExtractionTimeoutError(
                f"Image analysis did not finish within {self._timeout_seconds}s"
            ) from exc

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError:
            match = _JSON_OBJECT.search(cleaned)
            if match is None:
                raise ExtractionResponseError(
                    "Vision provider response contains no JSON object"
                ) from None
            try:
                parsed = json.loads(match.group(0))
            except json.JSONDecodeError as exc:
                raise ExtractionResponseError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ExtractionResponseError("JSON response must be an object")
        return parsed
