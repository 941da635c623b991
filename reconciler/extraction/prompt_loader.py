from pathlib import Path

from reconciler.extraction.exceptions import ExtractionError
from reconciler.extraction.models import EXTRACTION_KINDS
from reconciler.normalization.models import IdentifierSet

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(kind: str, prompt_dir: Path | None = None) -> str:
    """Load the extraction prompt template for one kind of screenshot.

    Args:
        kind: One of "imei", "serial", "specs".
        prompt_dir: Directory holding ``{kind}_prompt.txt`` files.
                    Defaults to the bundled prompts directory.

    Returns:
        The raw template string with a ``{hint}`` placeholder.

    Raises:
        ExtractionError: if the kind is unknown or the file cannot be read.
    """
    if kind not in EXTRACTION_KINDS:
        raise ExtractionError(
            f"Unknown extraction kind '{kind}'. Choose from: {sorted(EXTRACTION_KINDS)}"
        )
    path = (prompt_dir or _DEFAULT_PROMPT_DIR) / f"{kind}_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExtractionError(f"Failed to load prompt template: {exc}") from exc


def render_hint(hint: IdentifierSet | None) -> str:
    """Describe the operator-entered values, if any, for the prompt."""
    if hint is None:
        return ""
    known = [
        f"{label}: {value}"
        for label, value in (
            ("IMEI1", hint.imei1),
            ("IMEI2", hint.imei2),
            ("serial number", hint.serial_number),
        )
        if value
    ]
    if not known:
        return ""
    return (
        "For orientation only, the operator typed "
        + ", ".join(known)
        + ". Report exactly what the image shows, even if it differs."
    )
