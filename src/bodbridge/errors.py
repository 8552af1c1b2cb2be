"""Exception types raised by the bridge."""


class BridgeError(Exception):
    """Base class for failures handling a beverage-on-demand order."""


class UnsupportedRequestFormatError(BridgeError):
    """The inbound payload does not look like a BOD order notification."""


class UnsupportedDrinkError(BridgeError):
    """No configured Kai call matches the requested drink."""


class APIRequestError(BridgeError):
    """A request to the Kai API failed or returned a non-success status."""


class CredentialsError(BridgeError):
    """The Kai API credentials file is missing or incomplete."""


class ZoneSourceError(BridgeError):
    """A zone source could not produce zone file content."""


class ZoneFileCorruptError(BridgeError, ValueError):
    """The zone file could not be parsed even after rebuilding it."""
