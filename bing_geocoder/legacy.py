"""Deprecated Bing Maps AJAX geocode service dialect."""

import threading
from typing import Any, Dict, List, Optional, Tuple

import requests

from .strategy import GeocodingDialect

# The service rejects requests unless all of these are present, even if empty.
AUXILIARY_PARAMS = (
    "addressLine",
    "adminDistrict",
    "count",
    "countryRegion",
    "culture",
    "curLocAccuracy",
    "currentLocation",
    "district",
    "entityTypes",
    "landmark",
    "locality",
    "mapBounds",
    "postalCode",
    "postalTown",
    "rankBy",
)

_MALFORMED_TRAILER = "}.d"


class LegacyDialect(GeocodingDialect):
    """Geocoding dialect using the keyless AJAX geocode service.

    Results are PascalCase records (``Address``, ``Locations``,
    ``BestLocation``, ...) found at ``d.Results``.
    """

    PATH = "/services/v1/geocodeservice/geocodeservice.asmx/Geocode"

    def __init__(self, scheme: str = "http"):
        super().__init__(scheme)
        self._skeleton: Optional[Tuple[Tuple[str, str], ...]] = None
        self._lock = threading.Lock()

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}{self.PATH}"

    @property
    def skeleton(self) -> Tuple[Tuple[str, str], ...]:
        """Static query parameters shared by every request, built on first use."""
        if self._skeleton is None:
            with self._lock:
                if self._skeleton is None:
                    self._skeleton = (("format", "json"),) + tuple(
                        (name, "") for name in AUXILIARY_PARAMS
                    )
        return self._skeleton

    def build_uri(self, location: bytes) -> str:
        # The query must be a double-quoted string
        params = [("query", b'"' + location + b'"')]
        params.extend(self.skeleton)
        return requests.Request("GET", self.base_url, params=params).prepare().url

    def fix_payload(self, text: str) -> str:
        stripped = text.rstrip()
        if stripped.endswith(_MALFORMED_TRAILER):
            return stripped[: -len(_MALFORMED_TRAILER)] + "}"
        return text

    def extract_results(self, data: Any) -> List[Dict[str, Any]]:
        try:
            results = data["d"]["Results"]
        except (KeyError, TypeError):
            return []
        return list(results) if isinstance(results, list) else []

    def get_dialect_name(self) -> str:
        return "legacy"
