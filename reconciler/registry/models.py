from dataclasses import dataclass, field


@dataclass(frozen=True)
class RegistryStatus:
    """Authoritative registry record for one identifier."""

    identifier: str
    found: bool
    status: str = "unknown"  # "normal", "stolen", "lost" or "unknown"
    brand: str | None = None
    model: str | None = None
    serial_number: str | None = None


@dataclass(frozen=True)
class RegistryCheck:
    """Outcome of looking up one identifier; exactly one of status/error is set."""

    field: str  # "imei1", "imei2" or "serial_number"
    identifier: str
    status: RegistryStatus | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class VerificationReport:
    checks: tuple[RegistryCheck, ...] = field(default_factory=tuple)

    @property
    def failures(self) -> tuple[RegistryCheck, ...]:
        return tuple(check for check in self.checks if not check.ok)

    @property
    def flagged(self) -> tuple[RegistryCheck, ...]:
        """Checks whose record is reported stolen or lost."""
        return tuple(
            check
            for check in self.checks
            if check.status is not None and check.status.status in ("stolen", "lost")
        )
