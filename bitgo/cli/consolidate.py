"""
Consolidate the unspents currently held in a wallet to a smaller number.

Usage:
    bitgo-consolidate --wallet <id> --passphrase <secret> --max-iter 10
"""

import argparse
import logging
import sys
from typing import Any, List, Optional, TextIO

from . import add_client_arguments, cancel_on_signals, configure_logging, new_client
from ..client import BitGoClient
from ..context import Context
from ..convert import to_satoshis
from ..errors import APIError, BitGoError
from ..wallet import ConsolidateParams

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='bitgo-consolidate',
        description='Consolidate the unspents currently held in a wallet to a smaller number.'
    )
    add_client_arguments(parser, host_help='BitGo Express API server base URL.')
    parser.add_argument('--passphrase', default='', help='Passphrase of the wallet.')
    parser.add_argument('--target', type=int, default=1,
                        help='Number of outputs created by the consolidation transaction.')
    parser.add_argument('--limit', type=int, default=25,
                        help='Number of unspents to select (max is 200).')
    parser.add_argument('--min-value', type=float, default=0,
                        help='Ignore unspents smaller than this amount of bitcoins.')
    parser.add_argument('--max-value', type=float, default=0,
                        help='Ignore unspents larger than this amount of bitcoins.')
    parser.add_argument('--min-height', type=int, default=0,
                        help='The minimum height of unspents on the block chain to use.')
    parser.add_argument('--fee-rate', type=int, default=0,
                        help='The desired fee rate for the transaction in satoshis/KB.')
    parser.add_argument('--fee-tx-confirm-target', type=int, default=0,
                        help='Fee rate is automatically chosen by targeting a transaction '
                             'confirmation in this number of blocks (only available on BTC, '
                             'fee-rate takes precedence if also set).')
    parser.add_argument('--max-fee-percentage', type=int, default=0,
                        help="Maximum percentage of an unspent's value to be used for fees. "
                             'Cannot be combined with min-value.')
    parser.add_argument('--min-confirms', type=int, default=0,
                        help='The required number of confirmations for each transaction input.')
    parser.add_argument('--enforce-min-confirms-for-change', action='store_true',
                        help='Apply the required confirmations set in min-confirms for change outputs.')
    parser.add_argument('--max-iter', type=int, default=1,
                        help='Maximum number of consolidation iterations to perform.')
    return parser.parse_args(argv)


def _set(value: Any) -> Any:
    # Zero flag values mean "not given" and are left out of the request.
    return value or None


def build_params(args: argparse.Namespace) -> ConsolidateParams:
    return ConsolidateParams(
        wallet_passphrase=_set(args.passphrase),
        num_unspents_to_make=_set(args.target),
        limit=_set(args.limit),
        min_value=_set(to_satoshis(args.min_value)),
        max_value=_set(to_satoshis(args.max_value)),
        min_height=_set(args.min_height),
        fee_rate=_set(args.fee_rate),
        fee_tx_confirm_target=_set(args.fee_tx_confirm_target),
        max_fee_percentage=_set(args.max_fee_percentage),
        min_confirms=_set(args.min_confirms),
        enforce_min_confirms_for_change=_set(args.enforce_min_confirms_for_change)
    )


def run(
    client: BitGoClient,
    ctx: Context,
    wallet_id: str,
    params: ConsolidateParams,
    max_iter: int,
    out: TextIO = sys.stdout
) -> int:
    """
    Consolidate up to max_iter times, printing each transaction id.

    Returns:
        Process exit code
    """
    for _ in range(max_iter):
        try:
            tx = client.wallet.consolidate(ctx, wallet_id, params)
        except BitGoError as e:
            # User hit Ctrl+C.
            if ctx.cancelled:
                break
            if isinstance(e, APIError):
                logger.error('consolidate: failed to coalesce unspents, %d: %s', e.status_code, e)
            else:
                logger.error('consolidate: failed to coalesce unspents: %s', e)
            return 1
        print(tx.txid, file=out)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.debug)

    ctx = Context.background()
    cancel_on_signals(ctx, 'consolidate')

    return run(new_client(args), ctx, args.wallet, build_params(args), args.max_iter)


if __name__ == '__main__':
    sys.exit(main())
