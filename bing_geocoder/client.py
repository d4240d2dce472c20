import logging
import os
import warnings
from typing import Any, Callable, Dict, List, Optional

import requests

from .decoder import decode_response
from .legacy import LegacyDialect
from .rest import RestDialect
from .strategy import GeocodingDialect, Location, encode_location
from .transport import (
    default_transport,
    install_debug_observers,
    remove_debug_observers,
    request_logger,
    response_logger,
    validate_transport,
)

log = logging.getLogger(__name__)

API_KEY_ENV = "BING_MAPS_KEY"

MISSING_KEY_MESSAGE = "No Bing Maps API key given; using the deprecated AJAX geocode service"


class Geocoder:
    """
    Geocode addresses with the Bing Maps API.

    With an API key the REST Locations API is used; without one the client
    falls back to the deprecated AJAX geocode service and warns about it.

    Usage:
        geocoder = Geocoder(api_key="...")
        result = geocoder.geocode("Hollywood and Highland, Los Angeles, CA")
        results = geocoder.geocode_all("Hollywood and Highland, Los Angeles, CA")

    Result records are the provider's JSON objects, passed through as dicts.
    The two dialects return differently shaped records.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        transport: Any = None,
        debug: bool = False,
        secure: bool = False,
        logger: Optional[Callable[[str], None]] = None,
        _stacklevel: int = 2,
    ):
        """
        Initialize the geocoder.

        Args:
            api_key: Bing Maps key; omit to use the deprecated keyless service
            transport: Object with a ``get(url)`` method, e.g. a configured
                ``requests.Session``. Defaults to a session with this
                library's user agent.
            debug: Log every request and response verbatim
            secure: Use https instead of http
            logger: Callback for diagnostic messages

        Raises:
            ConfigurationError: If the transport cannot perform GET requests,
                or ``secure`` is requested and it cannot do TLS.
        """
        self._api_key = api_key or None
        self._secure = bool(secure)
        self._debug = bool(debug)
        self.logger = logger or log.debug

        self._transport = validate_transport(
            transport if transport is not None else default_transport(),
            secure=self._secure,
        )
        self._debug_hook = self._install_debug(self._transport) if self._debug else None

        if self._api_key:
            self._dialect: GeocodingDialect = RestDialect(self._api_key, scheme=self.scheme)
        else:
            self.logger(MISSING_KEY_MESSAGE)
            warnings.warn(MISSING_KEY_MESSAGE, FutureWarning, stacklevel=_stacklevel)
            self._dialect = LegacyDialect(scheme=self.scheme)

    @classmethod
    def from_env(cls, **kwargs: Any) -> "Geocoder":
        """Create a geocoder whose API key is read from ``BING_MAPS_KEY``."""
        kwargs.setdefault("api_key", os.environ.get(API_KEY_ENV))
        kwargs.setdefault("_stacklevel", 3)
        return cls(**kwargs)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key

    @property
    def secure(self) -> bool:
        return self._secure

    @property
    def debug(self) -> bool:
        return self._debug

    @property
    def scheme(self) -> str:
        return "https" if self._secure else "http"

    @property
    def dialect(self) -> GeocodingDialect:
        """The wire dialect selected by the presence of an API key."""
        return self._dialect

    @property
    def transport(self) -> Any:
        return self._transport

    @transport.setter
    def transport(self, transport: Any) -> None:
        validate_transport(transport, secure=self._secure)
        if self._debug:
            remove_debug_observers(self._transport, self._debug_hook)
            self._debug_hook = self._install_debug(transport)
        self._transport = transport

    def _install_debug(self, transport: Any) -> Optional[Callable[..., None]]:
        return install_debug_observers(
            transport,
            on_request=request_logger(self.logger),
            on_response=response_logger(self.logger),
        )

    # ------------------------------------------------------------------
    # Geocoding
    # ------------------------------------------------------------------

    def build_uri(self, location: Location) -> Optional[str]:
        """Return the URI that would be requested, or None for blank input."""
        if not location:
            return None
        text = location.decode("utf-8", "replace") if isinstance(location, bytes) else location
        if not text.strip():
            return None
        return self._dialect.build_uri(encode_location(location))

    def geocode_all(self, location: Location) -> List[Dict[str, Any]]:
        """
        Geocode a location and return every candidate.

        Args:
            location: Place to look up, as text or UTF-8 bytes

        Returns:
            Result records in the order the provider ranked them. Empty for
            blank input and for any request or payload failure.
        """
        uri = self.build_uri(location)
        if uri is None:
            return []

        name = self._dialect.get_dialect_name()
        try:
            response = self._transport.get(uri)
        except (requests.RequestException, OSError) as e:
            self.logger(f"Bing {name} request error: {str(e)[:120]}")
            return []

        return decode_response(response, self._dialect, logger=self.logger)

    def geocode_first(self, location: Location) -> Optional[Dict[str, Any]]:
        """Geocode a location and return the best match, or None."""
        results = self.geocode_all(location)
        return results[0] if results else None

    def geocode(self, location: Location, exactly_one: bool = True) -> Any:
        """
        Geocode a location.

        Args:
            location: Place to look up, as text or UTF-8 bytes
            exactly_one: Return only the best match (or None) instead of
                the full list

        Returns:
            A result record or None if ``exactly_one``, else a list of records.
        """
        if exactly_one:
            return self.geocode_first(location)
        return self.geocode_all(location)
