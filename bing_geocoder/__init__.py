"""Bing Maps geocoding client."""

__version__ = "0.3.0"

from .client import Geocoder
from .exceptions import ConfigurationError, GeocoderError
from .legacy import LegacyDialect
from .rest import RestDialect
from .strategy import GeocodingDialect

__all__ = [
    "Geocoder",
    "GeocodingDialect",
    "RestDialect",
    "LegacyDialect",
    "GeocoderError",
    "ConfigurationError",
]
