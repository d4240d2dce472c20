"""Shared fixtures: a recording fake session and response factory."""

from typing import Any, Dict, List, Optional, Union

import pytest
import requests
from requests.hooks import dispatch_hook


def make_response(
    body: Union[str, bytes] = b"",
    status: int = 200,
    content_type: Optional[str] = "application/json; charset=utf-8",
    url: str = "http://dev.virtualearth.net/",
) -> requests.Response:
    """Build a requests.Response without touching the network."""
    resp = requests.Response()
    resp.status_code = status
    resp.reason = "OK" if status == 200 else "Error"
    resp._content = body.encode("utf-8") if isinstance(body, str) else body
    if content_type is not None:
        resp.headers["Content-Type"] = content_type
    resp.url = url
    resp.request = requests.Request("GET", url).prepare()
    return resp


class FakeSession:
    """Stands in for requests.Session; records every GET."""

    def __init__(self, response: Optional[requests.Response] = None, error: Optional[Exception] = None):
        self.response = response if response is not None else make_response()
        self.error = error
        self.calls: List[str] = []
        self.hooks: Dict[str, List[Any]] = {"response": []}

    def get(self, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        self.response.url = url
        self.response.request = requests.Request("GET", url).prepare()
        return dispatch_hook("response", self.hooks, self.response)


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture(autouse=True)
def no_bing_key(monkeypatch):
    monkeypatch.delenv("BING_MAPS_KEY", raising=False)
