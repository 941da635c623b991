from dataclasses import dataclass


@dataclass(frozen=True)
class IdentifierSet:
    """Normalized device identifiers.

    A present field is never an empty string: ``""`` is stored as ``None``,
    meaning "not detected" or "not entered".
    """

    imei1: str | None = None
    imei2: str | None = None
    serial_number: str | None = None

    def __post_init__(self) -> None:
        for name in ("imei1", "imei2", "serial_number"):
            if getattr(self, name) == "":
                object.__setattr__(self, name, None)

    @property
    def imeis(self) -> tuple[str, ...]:
        """Present IMEIs in slot order."""
        return tuple(imei for imei in (self.imei1, self.imei2) if imei)

    @property
    def imei_count(self) -> int:
        return len(self.imeis)


@dataclass(frozen=True)
class DeviceSpecs:
    """Normalized hardware figures read from a settings screen."""

    ram: str | None = None
    storage: str | None = None

    def __post_init__(self) -> None:
        for name in ("ram", "storage"):
            if getattr(self, name) == "":
                object.__setattr__(self, name, None)


@dataclass
class UserInput:
    """Raw values typed by the operator, as captured from the form fields."""

    imei1: str = ""
    imei2: str = ""
    serial_number: str = ""
    ram: str = ""
    storage: str = ""
