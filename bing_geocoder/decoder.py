"""
Decoding of raw transport responses into result records.

Every failure mode here (bad status, empty body, undecodable or
unexpected JSON) yields an empty list; nothing is raised.
"""

from __future__ import annotations

import codecs
import json
from typing import Any, Callable, Dict, List, Optional

from requests.structures import CaseInsensitiveDict
from requests.utils import get_encoding_from_headers

from .strategy import GeocodingDialect

DEFAULT_CHARSET = "utf-8"


def is_success(response: Any) -> bool:
    """Whether the transport reported a 2xx status."""
    ok = getattr(response, "ok", None)
    if isinstance(ok, bool) and not ok:
        return False
    status = getattr(response, "status_code", None)
    return isinstance(status, int) and 200 <= status < 300


def decode_body(response: Any) -> str:
    """
    Decode the response body using the charset declared in its headers.

    Bing labels its payload with a generic JSON media type, which some
    clients refuse to decode by charset. The bytes are always decoded here
    with the declared charset (UTF-8 if none is declared or it is unknown)
    so that non-ASCII address text survives.
    """
    headers = CaseInsensitiveDict(getattr(response, "headers", None) or {})
    charset = get_encoding_from_headers(headers) or DEFAULT_CHARSET
    try:
        codecs.lookup(charset)
    except LookupError:
        charset = DEFAULT_CHARSET
    return (response.content or b"").decode(charset, "replace")


def decode_response(
    response: Any,
    dialect: GeocodingDialect,
    logger: Optional[Callable[[str], None]] = None,
) -> List[Dict[str, Any]]:
    """
    Turn a transport response into the dialect's result records.

    Args:
        response: ``requests.Response``-shaped object
        dialect: Dialect the request was built with
        logger: Optional callback for diagnostic messages

    Returns:
        Result records in provider order, possibly empty.
    """
    logger = logger or (lambda msg: None)
    name = dialect.get_dialect_name()

    if not is_success(response):
        logger(f"Bing {name} HTTP {getattr(response, 'status_code', '?')}")
        return []
    if not getattr(response, "content", None):
        logger(f"Bing {name} returned an empty body")
        return []

    text = dialect.fix_payload(decode_body(response))

    try:
        data = json.loads(text)
    except ValueError as e:
        logger(f"Bing {name} parse error: {str(e)[:120]}")
        return []

    return dialect.extract_results(data)
