from abc import ABC, abstractmethod


class BaseVisionClient(ABC):
    """Contract for provider-specific vision clients."""

    @abstractmethod
    async def create_vision_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        prompt: str,
        image_data_url: str,
    ) -> str:
        """Return provider response as plain text."""
