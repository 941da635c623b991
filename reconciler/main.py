import argparse
import asyncio
import json
import sys
from dataclasses import asdict

from reconciler.config.settings import Settings
from reconciler.extraction.exceptions import ExtractionError
from reconciler.extraction.factory import ExtractorFactory
from reconciler.extraction.image import load_image
from reconciler.logging.logger import Log
from reconciler.registry.factory import RegistryClientFactory
from reconciler.registry.verifier import RegistryVerifier
from reconciler.slots.form import FlowProfile, SlotDefinition, UploadForm
from reconciler.slots.models import ValidationState

_SLOT_ID = "upload"
_INPUT_FIELDS = ("imei1", "imei2", "serial_number", "ram", "storage")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reconciler-check",
        description="Extract identifiers from a device screenshot and compare them "
        "with the values typed by the operator.",
    )
    parser.add_argument("--image", required=True, help="Path to the screenshot")
    parser.add_argument("--kind", choices=("imei", "serial", "specs"), default="imei")
    parser.add_argument(
        "--context",
        choices=("registration", "reconciliation"),
        default="reconciliation",
        help="Normalization context that decides the IMEI length cap",
    )
    parser.add_argument("--imei1", default="")
    parser.add_argument("--imei2", default="")
    parser.add_argument("--serial", dest="serial_number", default="")
    parser.add_argument("--ram", default="")
    parser.add_argument("--storage", default="")
    parser.add_argument(
        "--verify-registry",
        action="store_true",
        help="Also look up the extracted identifiers in the device registry",
    )
    return parser


async def run_check(args: argparse.Namespace, settings: Settings) -> int:
    """Run one slot to completion and print its status as JSON.

    Returns the process exit code: 0 when the analysis completed and the
    identifiers match, 1 otherwise.
    """
    profile = FlowProfile(
        name="cli",
        slots=(SlotDefinition(_SLOT_ID, args.kind),),
        context=args.context,
    )
    form = UploadForm.from_settings(profile, ExtractorFactory.create(settings), settings)
    for name in _INPUT_FIELDS:
        value = getattr(args, name)
        if value:
            form.update_field(name, value)

    form.assign_file(_SLOT_ID, load_image(args.image))
    await form.settle()

    slot = form.machine(_SLOT_ID).slot
    output: dict[str, object] = {
        "validation_state": slot.validation_state.value,
        "error_message": slot.error_message,
        "is_valid": slot.last_result.is_valid if slot.last_result else None,
        "result": asdict(slot.last_result) if slot.last_result else None,
        "extraction": asdict(slot.last_extraction) if slot.last_extraction else None,
    }

    if args.verify_registry and slot.last_extraction is not None:
        client = RegistryClientFactory.create(settings)
        try:
            report = await RegistryVerifier(client).verify_extracted(
                slot.last_extraction.identifiers
            )
        finally:
            await client.aclose()
        output["registry"] = asdict(report)

    print(json.dumps(output, indent=2, ensure_ascii=False))
    passed = (
        slot.validation_state is ValidationState.SUCCESS
        and slot.last_result is not None
        and slot.last_result.is_valid
    )
    return 0 if passed else 1


def main(argv: list[str] | None = None) -> int:
    """Entry point: settings -> logging -> extractor -> one reconciliation run."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    try:
        return asyncio.run(run_check(args, settings))
    except (FileNotFoundError, ExtractionError, ValueError) as exc:
        Log.error(str(exc))
        return 2


if __name__ == "__main__":
    sys.exit(main())
