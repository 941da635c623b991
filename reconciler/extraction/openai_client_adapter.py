import httpx
import openai

from reconciler.extraction.client_base import BaseVisionClient
from reconciler.extraction.exceptions import (
    ExtractionNetworkError,
    ExtractionResponseError,
    ExtractionTimeoutError,
)


def describe_status_error(status_code: int, reason: str = "") -> str:
    """Human-readable message for a failed provider HTTP status."""
    if status_code == 401:
        return "Invalid vision provider API key. Check the extraction configuration."
    if status_code == 403:
        return "Access denied by the vision provider. Check the API key permissions."
    if status_code == 429:
        return "Vision provider quota exceeded. Please try again later."
    if status_code >= 500:
        return f"Vision provider server error ({status_code}). Please try again later."
    return f"Vision provider error ({status_code}): {reason}".rstrip(": ")


class OpenAIVisionClientAdapter(BaseVisionClient):
    """Vision client adapter built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        default_headers: dict[str, str] | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            default_headers=default_headers,
            max_retries=0,
        )

    async def create_vision_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        prompt: str,
        image_data_url: str,
    ) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": prompt},
                            {"type": "image_url", "image_url": {"url": image_data_url}},
                        ],
                    }
                ],
            )
        except (openai.APITimeoutError, httpx.TimeoutException) as exc:
            raise ExtractionTimeoutError(
                f"Vision provider timed out: {exc}"
            ) from exc
        except (openai.APIConnectionError, httpx.ConnectError) as exc:
            raise ExtractionNetworkError(
                f"Vision provider network error: {exc}"
            ) from exc
        except openai.APIStatusError as exc:
            raise ExtractionNetworkError(
                describe_status_error(exc.status_code, exc.message)
            ) from exc
        except openai.APIError as exc:
            raise ExtractionNetworkError(
                f"Vision provider API error: {exc}"
            ) from exc

        if not response.choices:
            raise ExtractionResponseError("Vision provider returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise ExtractionResponseError("Vision provider returned an empty response")
        return content
