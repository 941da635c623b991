import base64
import mimetypes
from pathlib import Path

from reconciler.extraction.exceptions import ExtractionError
from reconciler.extraction.models import ImagePayload

_DEFAULT_MIME = "image/jpeg"


def image_from_bytes(data: bytes, mime: str = _DEFAULT_MIME, name: str = "") -> ImagePayload:
    """Encode raw image bytes as a base64 data URL."""
    if not mime.startswith("image/"):
        raise ExtractionError(f"Unsupported file type '{mime}': an image is required")
    encoded = base64.b64encode(data).decode("utf-8")
    return ImagePayload(data_url=f"data:{mime};base64,{encoded}", mime=mime, name=name)


def load_image(path: Path | str) -> ImagePayload:
    """Read an image file from disk.

    Raises:
        FileNotFoundError: if the file does not exist.
        ExtractionError: if the file is not an image.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")
    mime, _ = mimetypes.guess_type(str(path))
    return image_from_bytes(path.read_bytes(), mime or _DEFAULT_MIME, name=path.name)
