"""
HTTP transport handling for the geocoder.

The client never talks to the network directly; it hands a URI to a
transport object with a ``get`` method (a ``requests.Session`` by default)
and works with whatever ``requests.Response``-shaped object comes back.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import requests

from . import __version__
from .exceptions import ConfigurationError

log = logging.getLogger(__name__)

USER_AGENT = f"bing-geocoder/{__version__}"

RequestObserver = Callable[[requests.PreparedRequest], None]
ResponseObserver = Callable[[requests.Response], None]

_DEBUG_MARKER = "_bing_geocoder_debug"


def default_transport(user_agent: str = USER_AGENT) -> requests.Session:
    """Create a session identifying itself with ``user_agent``."""
    session = requests.Session()
    session.headers["User-Agent"] = user_agent
    return session


def validate_transport(transport: Any, secure: bool = False) -> Any:
    """
    Check that ``transport`` can perform the requests the client needs.

    Args:
        transport: Object expected to expose a callable ``get(url, ...)``.
        secure: Whether https requests will be made through it.

    Returns:
        The transport, unchanged.

    Raises:
        ConfigurationError: If ``get`` is missing, or TLS is required but
            the transport cannot provide it.
    """
    if not callable(getattr(transport, "get", None)):
        raise ConfigurationError(
            f"{type(transport).__name__} cannot perform HTTP GET requests",
            option="transport",
        )

    if secure:
        if getattr(transport, "supports_tls", True) is False:
            raise ConfigurationError(
                f"{type(transport).__name__} does not support TLS", option="secure"
            )
        get_adapter = getattr(transport, "get_adapter", None)
        if callable(get_adapter):
            try:
                get_adapter("https://")
            except requests.exceptions.InvalidSchema as e:
                raise ConfigurationError(
                    f"no https adapter mounted on transport: {e}", option="secure"
                ) from e

    return transport


# ----------------------------------------------------------------------
# Debug observers
# ----------------------------------------------------------------------

def _format_headers(headers: Any) -> str:
    return "\n".join(f"{name}: {value}" for name, value in headers.items())


def request_logger(emit: Callable[[str], None]) -> RequestObserver:
    """Build an observer that writes an outgoing request verbatim."""

    def observe(request: requests.PreparedRequest) -> None:
        emit(f"{request.method} {request.url}\n{_format_headers(request.headers)}")

    return observe


def response_logger(emit: Callable[[str], None]) -> ResponseObserver:
    """Build an observer that writes an incoming response verbatim."""

    def observe(response: requests.Response) -> None:
        body = response.content or b""
        emit(
            f"{response.status_code} {response.reason or ''}\n"
            f"{_format_headers(response.headers)}\n\n"
            f"{body.decode('utf-8', 'replace')}"
        )

    return observe


def install_debug_observers(
    transport: Any,
    on_request: Optional[RequestObserver] = None,
    on_response: Optional[ResponseObserver] = None,
) -> Optional[Callable[..., None]]:
    """
    Attach a request/response observer pair to ``transport``.

    Uses the ``response`` hook of a ``requests.Session``; the request is
    reached through ``response.request`` so both observers fire once per
    exchange, request first. Observers default to the module logger.
    A transport carries at most one debug hook; a second install is a no-op.

    Returns:
        The installed hook, to be passed to ``remove_debug_observers``, or
        None if the transport has no hook table or is already observed.
    """
    hooks = getattr(transport, "hooks", None)
    if not isinstance(hooks, dict):
        log.debug("Transport %s has no hooks; debug output disabled", type(transport).__name__)
        return None

    response_hooks = hooks.setdefault("response", [])
    if any(getattr(h, _DEBUG_MARKER, False) for h in response_hooks):
        log.debug("Transport %s already has debug observers", type(transport).__name__)
        return None

    on_request = on_request or request_logger(log.debug)
    on_response = on_response or response_logger(log.debug)

    def hook(response: requests.Response, *args: Any, **kwargs: Any) -> None:
        if response.request is not None:
            on_request(response.request)
        on_response(response)

    setattr(hook, _DEBUG_MARKER, True)
    response_hooks.append(hook)
    return hook


def remove_debug_observers(transport: Any, hook: Optional[Callable[..., None]]) -> None:
    """Detach a hook returned by ``install_debug_observers``."""
    if hook is None:
        return
    hooks = getattr(transport, "hooks", None)
    if isinstance(hooks, dict) and hook in hooks.get("response", []):
        hooks["response"].remove(hook)
