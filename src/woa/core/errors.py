"""Domain-specific errors for woa."""


class WoaError(Exception):
    """Base error for woa."""


class ConfigError(WoaError):
    """Raised for unparsable or invalid configuration."""


class MachineNotFoundError(WoaError, LookupError):
    """Raised when no configured machine matches the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"machine with name '{name}' not found")
        self.name = name


class AddressParseError(WoaError, ValueError):
    """Raised when MAC text does not parse to exactly 6 octets."""

    def __init__(self, value: object, reason: str = "invalid MAC address") -> None:
        super().__init__(f"{reason}: {value!r}")
        self.value = value


class SendError(WoaError):
    """Raised when a wake packet or HTTP request cannot be sent."""


class TargetSelectionError(WoaError):
    """Raised unless exactly one of MAC address or machine name is given."""
