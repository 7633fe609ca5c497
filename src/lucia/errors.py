from typing import Optional


class LuciaError(Exception):
    """Base class for every error the bridge client surfaces."""


class TransportError(LuciaError):
    """The bridge could not be reached or answered with an HTTP error."""


class DecodeError(LuciaError):
    """The bridge answered, but not in the shape we expected."""


class BridgeError(LuciaError):
    """The bridge answered with an explicit error record."""

    def __init__(self, type_: int, description: Optional[str] = None, address: Optional[str] = None):
        self.type = type_
        self.description = description
        self.address = address
        super().__init__(f"bridge error {type_}: {description or 'no description'}"
                         + (f" ({address})" if address else ""))


class AddressParseError(LuciaError, ValueError):
    pass


class DiscoveryError(LuciaError):
    pass


class PollingTimeout(LuciaError):
    """Pairing did not succeed before the maximum poll duration elapsed."""


class ConfigurationError(LuciaError):
    """The configuration file could not be read or written."""


class ConfigurationMissing(ConfigurationError):
    pass


class InvalidRangeError(LuciaError, ValueError):
    pass
