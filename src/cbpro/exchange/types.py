"""Response payloads returned by the Coinbase REST API.

Prices, sizes, fees and volumes are kept as the exact strings the exchange
sends. Never convert them to float; use Decimal at the point of arithmetic.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict

_EPOCH = datetime(1, 1, 1, tzinfo=timezone.utc)


class _Payload(BaseModel):
    # The exchange adds fields over time; unknown keys are ignored
    model_config = ConfigDict(extra="ignore")


class Ticker(_Payload):
    """Snapshot of the last trade, best bid/ask and 24h volume for a product."""

    trade_id: int = 0
    price: str = ""
    size: str = ""
    bid: str = ""
    ask: str = ""
    volume: str = ""
    time: datetime = _EPOCH


class Order(_Payload):
    """Order as acknowledged by the exchange."""

    id: str = ""
    price: str = ""
    size: str = ""
    product_id: str = ""
    side: str = ""
    stp: str = ""
    type: str = ""
    time_in_force: str = ""
    post_only: bool = False
    created_at: datetime = _EPOCH
    fill_fees: str = ""
    filled_size: str = ""
    executed_value: str = ""
    status: str = ""
    settled: bool = False


class ErrorPayload(_Payload):
    """Body of a non-2xx response."""

    message: str = ""
