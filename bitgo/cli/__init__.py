"""
Command-line tools built on the BitGo client.

Shared flags, logging setup and graceful shutdown on SIGINT/SIGTERM.
"""

import argparse
import logging
import signal

from ..client import BitGoClient
from ..context import Context

logger = logging.getLogger(__name__)

DEFAULT_HOST = 'http://0.0.0.0:3080'


def add_client_arguments(parser: argparse.ArgumentParser, host_help: str) -> None:
    """Add flags every tool needs to reach a wallet."""
    parser.add_argument('--host', default=DEFAULT_HOST, help=host_help)
    parser.add_argument('--token', default='', help='BitGo access token.')
    parser.add_argument('--coin', default='btc', help='Coin identifier.')
    parser.add_argument('--wallet', default='', help='BitGo wallet ID.')
    parser.add_argument('--debug', action='store_true', help='Enable debug mode.')


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s %(name)s %(levelname)s %(message)s'
    )


def new_client(args: argparse.Namespace) -> BitGoClient:
    return BitGoClient(
        base_url=args.host,
        coin=args.coin,
        access_token=args.token
    )


def cancel_on_signals(ctx: Context, prog: str) -> None:
    """Cancel ctx on Ctrl+C and kill/killall to stop gracefully."""
    def handler(signum, frame):
        logger.info('%s: stopping...', prog)
        ctx.cancel()

    signal.signal(signal.SIGINT, handler)
    signal.signal(signal.SIGTERM, handler)
