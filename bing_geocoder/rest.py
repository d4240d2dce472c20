"""Bing Maps REST Locations API dialect."""

from typing import Any, Dict, List

import requests

from .strategy import GeocodingDialect


class RestDialect(GeocodingDialect):
    """Geocoding dialect using the Bing Maps REST Locations API.

    Requirements:
    - Bing Maps API key
    - See: https://learn.microsoft.com/bingmaps/rest-services/locations/

    Results are camelCase records (``address``, ``point``, ``bbox``, ...)
    found at ``resourceSets[0].resources``.
    """

    PATH = "/REST/v1/Locations"

    def __init__(self, api_key: str, scheme: str = "http"):
        super().__init__(scheme)
        self.api_key = api_key

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}{self.PATH}"

    def build_uri(self, location: bytes) -> str:
        params = [("key", self.api_key), ("q", location)]
        return requests.Request("GET", self.base_url, params=params).prepare().url

    def extract_results(self, data: Any) -> List[Dict[str, Any]]:
        try:
            resources = data["resourceSets"][0]["resources"]
        except (KeyError, IndexError, TypeError):
            return []
        return list(resources) if isinstance(resources, list) else []

    def get_dialect_name(self) -> str:
        return "rest"
