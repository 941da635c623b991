"""Example vision client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseVisionClient and register the provider in ExtractorFactory.
"""

import json
from typing import ClassVar

from reconciler.extraction.client_base import BaseVisionClient


class ExampleVisionClientAdapter(BaseVisionClient):
    """Example adapter that returns a fixed dual-SIM extraction.

    No network calls. Useful for local development, tests, and as a template
    for building real provider adapters.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "imei1": "356938035643809",
        "imei2": "356938035643817",
        "serialNumber": "R58N12ABCDE",
        "ram": "8GB",
        "storage": "128GB",
    }

    def __init__(self, response: dict[str, object] | None = None) -> None:
        self._response = response if response is not None else self.DEFAULT_RESPONSE

    async def create_vision_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        prompt: str,
        image_data_url: str,
    ) -> str:
        _ = model, temperature, max_tokens, prompt, image_data_url
        return json.dumps(self._response)
