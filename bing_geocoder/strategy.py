"""Abstract base class for the Bing Maps wire dialects."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Union

Location = Union[str, bytes]


def encode_location(location: Location) -> bytes:
    """Return ``location`` as UTF-8 bytes, whether it arrived as text or bytes."""
    if isinstance(location, bytes):
        return location
    return location.encode("utf-8")


class GeocodingDialect(ABC):
    """Abstract base class for one of the two Bing geocoding protocols.

    A dialect knows how to:
    - Build the request URI for a location
    - Repair provider quirks in the raw response text
    - Unwrap the result list from the response envelope
    """

    def __init__(self, scheme: str = "http"):
        self.scheme = scheme

    @property
    def host(self) -> str:
        return "dev.virtualearth.net"

    @abstractmethod
    def build_uri(self, location: bytes) -> str:
        """Build the request URI.

        Args:
            location: UTF-8 encoded, non-blank location text

        Returns:
            Fully-qualified request URI
        """
        pass

    def fix_payload(self, text: str) -> str:
        """Repair known defects in the response text before JSON parsing.

        The default is to leave the text alone.
        """
        return text

    @abstractmethod
    def extract_results(self, data: Any) -> List[Dict[str, Any]]:
        """Unwrap the result records from a parsed response envelope.

        Args:
            data: Parsed JSON document

        Returns:
            Result records in provider order; empty if the envelope does not
            have the expected shape.
        """
        pass

    @abstractmethod
    def get_dialect_name(self) -> str:
        """Get the dialect identifier used in log messages.

        Returns:
            'rest' or 'legacy'
        """
        pass
