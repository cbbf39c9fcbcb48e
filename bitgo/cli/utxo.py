"""
List bitcoin unspent transaction outputs (UTXOs) of a wallet.

Failed downloads are retried after --wait seconds, continuing from the
last fetched page.

Usage:
    bitgo-utxo --wallet <id> --min-size 0.001 > utxo.txt
"""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional, TextIO

from . import add_client_arguments, cancel_on_signals, configure_logging, new_client
from ..client import BitGoClient
from ..context import Context
from ..convert import to_bitcoins, to_satoshis
from ..errors import APIError, BitGoError
from ..wallet import PREV_ID, UnspentList

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='bitgo-utxo',
        description='List bitcoin unspent transaction outputs (UTXOs).'
    )
    add_client_arguments(parser, host_help='BitGo API server base URL.')
    parser.add_argument('--prev-id', default='',
                        help='Continue iterating unspents from this ID as provided by '
                             'nextBatchPrevId in the previous list.')
    parser.add_argument('--min-size', type=float, default=0,
                        help='Ignore unspents smaller than this amount of bitcoins.')
    parser.add_argument('--max-size', type=float, default=0,
                        help='Ignore unspents larger than this amount of bitcoins.')
    parser.add_argument('--min-height', type=int, default=0,
                        help='Ignore unspents confirmed at a lower block height than the given height.')
    parser.add_argument('--min-confirms', type=int, default=0,
                        help='Ignore unspents that have fewer than the given confirmations.')
    parser.add_argument('--wait', type=int, default=15,
                        help='How many seconds to wait after failed download attempt.')
    return parser.parse_args(argv)


def build_query(args: argparse.Namespace) -> Dict[str, Any]:
    query: Dict[str, Any] = {}
    if args.prev_id:
        query[PREV_ID] = args.prev_id
    if args.min_size > 0:
        query['minValue'] = str(to_satoshis(args.min_size))
    if args.max_size > 0:
        query['maxValue'] = str(to_satoshis(args.max_size))
    if args.min_height > 0:
        query['minHeight'] = str(args.min_height)
    if args.min_confirms > 0:
        query['minConfirms'] = str(args.min_confirms)
    return query


def run(
    client: BitGoClient,
    ctx: Context,
    wallet_id: str,
    query: Dict[str, Any],
    wait: float,
    out: TextIO = sys.stdout
) -> int:
    """
    Print every unspent value in bitcoins until the listing completes.

    Stops when everything is downloaded or the context is cancelled.

    Returns:
        Process exit code
    """
    downloaded = 0

    def on_page(page: UnspentList) -> None:
        nonlocal downloaded
        downloaded += len(page.unspents)
        logger.info('utxo: fetched %d unspents', downloaded)

        for utxo in page.unspents:
            print(f'{to_bitcoins(utxo.value):.8f}', file=out)

    while True:
        try:
            client.wallet.unspents(ctx, wallet_id, query, on_page)
            return 0
        except BitGoError as e:
            if ctx.cancelled:
                return 0
            if isinstance(e, APIError):
                logger.warning('utxo: failed to list unspents, %d: %s', e.status_code, e)
            else:
                logger.warning('utxo: failed to list unspents: %s', e)

        # query already points at the page that failed.
        logger.info('utxo: retrying in %s seconds...', wait)
        if ctx.wait(wait):
            return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.debug)

    ctx = Context.background()
    cancel_on_signals(ctx, 'utxo')

    return run(new_client(args), ctx, args.wallet, build_query(args), args.wait)


if __name__ == '__main__':
    sys.exit(main())
