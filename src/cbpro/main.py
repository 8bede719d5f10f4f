"""Command-line entry point for the Coinbase REST client.

Credentials and connection settings come from CBPRO_* environment
variables (or a .env file); see ClientSettings.

Examples:
    cbpro ticker BTC-USD
    cbpro limit buy BTC-USD --price 100.00 --size 0.01 --time-in-force IOC
    cbpro market sell BTC-USD --funds 150.00
    cbpro limit sell BTC-USD --price 90 --size 1 --stop loss --stop-price 95
"""

import argparse
import sys

from cbpro.config import ClientSettings
from cbpro.exceptions import CbproError
from cbpro.exchange.coinbase_client import CoinbaseClient
from cbpro.logging import get_logger, setup_logging
from cbpro.models import (
    CommonOrderFields,
    LimitOrderRequest,
    MarketOrderRequest,
    OrderRequest,
    OrderSide,
    OrderStop,
)


def _add_common_order_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("side", choices=[side.value for side in OrderSide])
    parser.add_argument("product_id", help="Product, e.g. BTC-USD")
    parser.add_argument("--client-oid", default="", help="Client idempotency token")
    parser.add_argument("--stp", default="", help="Self-trade prevention mode")
    parser.add_argument(
        "--stop",
        default=OrderStop.NONE.value,
        choices=[stop.value for stop in OrderStop],
    )
    parser.add_argument("--stop-price", default="")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cbpro", description="Query tickers and place orders on the Coinbase REST API."
    )
    commands = parser.add_subparsers(dest="command", required=True)

    ticker = commands.add_parser("ticker", help="Show the ticker for a product")
    ticker.add_argument("product_id")

    limit = commands.add_parser("limit", help="Place a limit order")
    _add_common_order_args(limit)
    limit.add_argument("--price", default="")
    limit.add_argument("--size", default="")
    limit.add_argument("--time-in-force", default="")
    limit.add_argument("--cancel-after", default="")
    limit.add_argument("--post-only", action="store_true")

    market = commands.add_parser("market", help="Place a market order")
    _add_common_order_args(market)
    market.add_argument("--size", default="")
    market.add_argument("--funds", default="")

    return parser


def order_from_args(args: argparse.Namespace) -> OrderRequest:
    """Build an order request from parsed ``limit``/``market`` arguments.

    Quantities are passed through as the exact strings typed on the command line.
    """
    common = CommonOrderFields(
        side=args.side,
        product_id=args.product_id,
        client_oid=args.client_oid,
        stp=args.stp,
        stop=args.stop,
        stop_price=args.stop_price,
    )
    if args.command == "limit":
        return LimitOrderRequest(
            common=common,
            price=args.price,
            size=args.size,
            time_in_force=args.time_in_force,
            cancel_after=args.cancel_after,
            post_only=args.post_only,
        )
    return MarketOrderRequest(common=common, size=args.size, funds=args.funds)


def run(argv: list[str] | None = None) -> int:
    """Run one command and return the process exit code."""
    args = build_parser().parse_args(argv)

    settings = ClientSettings()
    setup_logging(settings.log_level)
    logger = get_logger("cbpro.main")

    try:
        with CoinbaseClient(settings) as client:
            if args.command == "ticker":
                result = client.ticker(args.product_id)
            else:
                result = client.place_order(order_from_args(args))
    except CbproError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    logger.debug("command_completed", command=args.command)
    print(result.model_dump_json(indent=2))
    return 0


def main() -> None:
    """Synchronous entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
