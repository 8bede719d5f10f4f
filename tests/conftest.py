"""Shared test fixtures for the Coinbase REST client."""

import io

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from cbpro.config import ClientSettings
from cbpro.exchange.coinbase_client import CoinbaseClient

TEST_URL = "https://api.test.local"
TEST_SECRET_B64 = "bXktc2VjcmV0"  # base64("my-secret")


class StubAdapter(BaseAdapter):
    """Transport adapter that records outgoing requests and replays one canned response.

    Mounted on a real requests.Session, so auth hooks, body preparation and
    response handling all run as they would against the network.
    """

    def __init__(self, status_code: int = 200, body: bytes = b"{}") -> None:
        super().__init__()
        self.status_code = status_code
        self.body = body
        self.requests: list[requests.PreparedRequest] = []
        self.bodies: list[bytes] = []
        self.timeouts: list[object] = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        body = request.body
        if hasattr(body, "read"):
            body = body.read()
        elif isinstance(body, str):
            body = body.encode("utf-8")
        self.requests.append(request)
        self.bodies.append(body or b"")
        self.timeouts.append(timeout)

        response = requests.Response()
        response.status_code = self.status_code
        response.headers = CaseInsensitiveDict({"Content-Type": "application/json"})
        response.raw = io.BytesIO(self.body)
        response._content = self.body
        response._content_consumed = True
        response.url = request.url
        response.request = request
        return response

    def close(self) -> None:
        pass


@pytest.fixture
def client_settings() -> ClientSettings:
    """Settings matching the credentials used throughout the tests."""
    return ClientSettings(
        url=TEST_URL,
        key="my-key",
        secret=TEST_SECRET_B64,  # type: ignore[arg-type]
        passphrase="my-passphrase",  # type: ignore[arg-type]
    )


@pytest.fixture
def make_client(client_settings: ClientSettings):
    """Factory returning (client, adapter) wired to a canned response."""

    def _make(status_code: int = 200, body: bytes = b"{}") -> tuple[CoinbaseClient, StubAdapter]:
        adapter = StubAdapter(status_code=status_code, body=body)
        session = requests.Session()
        session.mount(TEST_URL, adapter)
        return CoinbaseClient(client_settings, session=session), adapter

    return _make
