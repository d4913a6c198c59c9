"""Shared fakes for usb-ids lookups; no test touches the network."""

from __future__ import annotations

from typing import Dict, List, Union

import pytest

from usbnames.config import Config


BASE_URL = "http://usb-ids.test/read/UD"


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info) -> None:
        return None


class FakeSession:
    """Stand-in for requests.Session serving canned pages by URL."""

    def __init__(self, pages: Dict[str, Union[str, FakeResponse, Exception]]) -> None:
        self.pages = pages
        self.headers: Dict[str, str] = {}
        self.requested: List[str] = []
        self.timeouts: List[object] = []
        self.closed = False

    def get(self, url: str, timeout=None) -> FakeResponse:
        self.requested.append(url)
        self.timeouts.append(timeout)
        page = self.pages.get(url)
        if page is None:
            return FakeResponse("<html>Not found</html>", status_code=404)
        if isinstance(page, Exception):
            raise page
        if isinstance(page, FakeResponse):
            return page
        return FakeResponse(page)

    def close(self) -> None:
        self.closed = True


class SessionRecorder:
    """Session factory that remembers every session it built."""

    def __init__(self, pages: Dict[str, Union[str, FakeResponse, Exception]]) -> None:
        self.pages = pages
        self.sessions: List[FakeSession] = []

    def __call__(self) -> FakeSession:
        session = FakeSession(self.pages)
        self.sessions.append(session)
        return session

    @property
    def requested(self) -> List[str]:
        return [url for session in self.sessions for url in session.requested]


def page(name_line: str) -> str:
    return "\n".join(
        [
            "<html><head><title>usb-ids</title></head><body>",
            "<h1>Lookup</h1>",
            name_line,
            "<p>Name: Should never be read<br>",
            "</body></html>",
        ]
    )


@pytest.fixture
def config() -> Config:
    return Config(base_url=BASE_URL + "/", connect_timeout_sec=1.0, read_timeout_sec=2.0, max_workers=2)
