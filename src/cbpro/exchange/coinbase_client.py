"""Coinbase REST client implementation via requests.

Wraps a requests.Session with request signing, a fixed per-call timeout
and response decoding. Calls are synchronous; the client holds no mutable
state besides the session's connection pool, so one instance can be shared
across threads.
"""

import json
from typing import TypeVar

import requests
from pydantic import BaseModel, ValidationError

from cbpro.config import ClientSettings
from cbpro.exceptions import APIError
from cbpro.exchange.auth import CoinbaseAuth, Credentials
from cbpro.exchange.client import ExchangeClient
from cbpro.exchange.types import ErrorPayload, Order, Ticker
from cbpro.logging import get_logger
from cbpro.models import LimitOrderRequest, MarketOrderRequest, OrderRequest

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class CoinbaseClient(ExchangeClient):
    """Concrete Coinbase client using requests.

    Args:
        settings: Connection settings. The base64 secret is decoded here, so
            a malformed secret fails construction with ConfigurationError.
        session: Optional pre-built session (custom adapters, proxies).
    """

    PRODUCT_TICKER_PATH = "/products/{product_id}/ticker"
    ORDERS_PATH = "/orders"

    def __init__(
        self, settings: ClientSettings, session: requests.Session | None = None
    ) -> None:
        self._settings = settings
        self._auth = CoinbaseAuth(
            Credentials.from_settings(settings), header_prefix=settings.header_prefix
        )
        self._session = session or requests.Session()

    @property
    def session(self) -> requests.Session:
        """Access the underlying requests session."""
        return self._session

    def close(self) -> None:
        self._session.close()

    def ticker(self, product_id: str) -> Ticker:
        """Fetch the ticker for ``product_id``."""
        path = self.PRODUCT_TICKER_PATH.format(product_id=product_id)
        return self._request("GET", path, Ticker)

    def place_order(self, order: OrderRequest) -> Order:
        """Validate and submit a limit or market order.

        The request is normalized in place (defaults filled, type forced to
        the concrete kind) before it is serialized.

        Raises:
            TypeError: If ``order`` is not a LimitOrderRequest or MarketOrderRequest.
            OrderValidationError: If the order fails validation. Nothing is sent.
            APIError: If the exchange rejects the order.
        """
        if not isinstance(order, (LimitOrderRequest, MarketOrderRequest)):
            raise TypeError(
                f"order must be LimitOrderRequest or MarketOrderRequest, got {type(order).__name__}"
            )
        order.validate()

        body = json.dumps(order.to_payload()).encode("utf-8")
        logger.info(
            "placing_order",
            product_id=order.common.product_id,
            side=order.common.side.value,
            order_type=order.common.type.value,
        )
        return self._request("POST", self.ORDERS_PATH, Order, body=body)

    def _request(
        self,
        method: str,
        path: str,
        model: type[ModelT],
        body: bytes | None = None,
    ) -> ModelT:
        headers = {"Accept": "application/json"}
        if body is not None:
            headers["Content-Type"] = "application/json"

        logger.debug("sending_request", method=method, path=path)
        response = self._session.request(
            method,
            self._settings.url + path,
            data=body,
            headers=headers,
            auth=self._auth,
            timeout=self._settings.timeout,
        )
        logger.debug(
            "response_received",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        return handle_response(response, model)


def handle_response(response: requests.Response, model: type[ModelT]) -> ModelT:
    """Decode a response into ``model`` or raise APIError for status > 299.

    The error message is best effort: a body that is not JSON, or that has
    no ``message`` key, still yields an APIError with an empty message.
    """
    with response:
        if response.status_code > 299:
            try:
                message = ErrorPayload.model_validate_json(response.content).message
            except ValidationError:
                message = ""
            raise APIError(response.status_code, message)

        return model.model_validate_json(response.content)
