"""Exceptions raised by the Bing geocoder client."""


class GeocoderError(Exception):
    """Base class for all geocoder errors."""


class ConfigurationError(GeocoderError):
    """Raised when the client is constructed with an unusable transport or scheme.

    This is the only error the client surfaces to callers; per-request
    failures degrade to an empty result instead.
    """

    def __init__(self, message: str, option: str = ""):
        self.message = message
        self.option = option
        super().__init__(f"[{option}] {message}" if option else message)
