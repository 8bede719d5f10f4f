"""Request signing for the Coinbase REST API.

Every authenticated request carries four headers: the API key, the
passphrase, a unix timestamp and a base64 HMAC-SHA256 signature over
``timestamp + method + path_with_query + body``. The request line and the
body go through one HMAC computation; they are not signed separately.

Signing runs as a requests auth hook, so each prepared request gets a fresh
timestamp and signature.
"""

import base64
import binascii
import hashlib
import hmac
import io
import time
from dataclasses import dataclass, field
from typing import BinaryIO

from requests import PreparedRequest
from requests.auth import AuthBase

from cbpro.config import ClientSettings
from cbpro.exceptions import ConfigurationError

CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class Credentials:
    """API key material. The secret is held decoded, as raw bytes."""

    key: str
    secret: bytes = field(repr=False)
    passphrase: str = field(repr=False)

    @classmethod
    def from_base64(cls, key: str, secret: str, passphrase: str) -> "Credentials":
        """Build credentials from the base64 secret Coinbase issues.

        Raises:
            ConfigurationError: If the secret is not valid base64.
        """
        try:
            # line breaks are ignored
            decoded = base64.b64decode(
                secret.replace("\r", "").replace("\n", ""), validate=True
            )
        except (binascii.Error, ValueError) as exc:
            raise ConfigurationError(f"secret is not a valid base64 string: {exc}") from exc
        return cls(key=key, secret=decoded, passphrase=passphrase)

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> "Credentials":
        return cls.from_base64(
            settings.key,
            settings.secret.get_secret_value(),
            settings.passphrase.get_secret_value(),
        )


def unix_timestamp() -> str:
    """Current time as whole seconds since the epoch, in decimal."""
    return str(int(time.time()))


def new_digest(secret: bytes, timestamp: str, method: str, path: str) -> hmac.HMAC:
    """Start an HMAC-SHA256 over the request line; the body is fed in afterwards."""
    return hmac.new(secret, f"{timestamp}{method}{path}".encode("utf-8"), hashlib.sha256)


def sign(
    secret: bytes,
    timestamp: str,
    method: str,
    path: str,
    body: bytes | str | None = b"",
) -> str:
    """Return the base64 signature for a request.

    Args:
        secret: Decoded API secret.
        timestamp: Value sent in the timestamp header.
        method: Upper-case HTTP method.
        path: Request path including the query string.
        body: Raw request body, if any.
    """
    digest = new_digest(secret, timestamp, method, path)
    if body:
        digest.update(body.encode("utf-8") if isinstance(body, str) else body)
    return base64.b64encode(digest.digest()).decode("ascii")


def tee_body(body: BinaryIO, digest: hmac.HMAC) -> io.BytesIO:
    """Feed a body stream into ``digest`` and return an equivalent fresh stream.

    The original stream is consumed; the returned buffer is rewound and
    holds the same bytes, ready to be transmitted.
    """
    buffer = io.BytesIO()
    while True:
        chunk = body.read(CHUNK_SIZE)
        if not chunk:
            break
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        digest.update(chunk)
        buffer.write(chunk)
    buffer.seek(0)
    return buffer


class CoinbaseAuth(AuthBase):
    """requests auth hook that signs each outgoing request."""

    def __init__(self, credentials: Credentials, header_prefix: str = "CB-") -> None:
        self._credentials = credentials
        self._prefix = header_prefix

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        timestamp = unix_timestamp()
        digest = new_digest(
            self._credentials.secret, timestamp, request.method or "", request.path_url
        )

        body = request.body
        if hasattr(body, "read"):
            request.body = tee_body(body, digest)  # type: ignore[arg-type]
        elif body:
            digest.update(body.encode("utf-8") if isinstance(body, str) else body)

        request.headers[f"{self._prefix}ACCESS-KEY"] = self._credentials.key
        request.headers[f"{self._prefix}ACCESS-PASSPHRASE"] = self._credentials.passphrase
        request.headers[f"{self._prefix}ACCESS-TIMESTAMP"] = timestamp
        request.headers[f"{self._prefix}ACCESS-SIGN"] = base64.b64encode(
            digest.digest()
        ).decode("ascii")
        return request
