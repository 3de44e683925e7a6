"""
Shared fixtures: a recording httpx.MockTransport and a probe wired to it.
"""

import json

import httpx
import pytest

from vertexcheck.services.diagnostic_probe import DiagnosticProbe


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler):
        self.requests = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_json(self) -> dict:
        return json.loads(self.last_request.content)


@pytest.fixture
def make_probe():
    """Build (probe, transport) from a handler or a canned response."""

    def _make(handler_or_response):
        if isinstance(handler_or_response, httpx.Response):
            response = handler_or_response
            handler = lambda request: response
        else:
            handler = handler_or_response
        transport = RecordingTransport(handler)
        return DiagnosticProbe(transport=transport), transport

    return _make
