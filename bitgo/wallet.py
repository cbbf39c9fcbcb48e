"""
BitGo SDK - Wallet Module

Wallet endpoints: unspent consolidation and paginated unspent listing.
"""

from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, model_validator

from .context import Context

if TYPE_CHECKING:
    from .client import BitGoClient

# Query parameter carrying the pagination cursor.
PREV_ID = 'prevId'


class Record(BaseModel):
    """Wire record; JSON nulls and missing keys decode to zero values."""

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode='before')
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if data is None:
            return {}
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class TxInfo(Record):
    """Transaction returned by the consolidateunspents endpoint."""
    txid: StrictStr = ''
    # Serialized transaction.
    tx: StrictStr = ''
    # E.g. "signed".
    status: StrictStr = ''


class ConsolidateParams(Record):
    """
    Parameters used when coalescing unspents.

    Fields left as None are not sent at all.
    For details see https://www.bitgo.com/api/v2/#consolidate-wallet-unspents.

    Attributes:
        wallet_passphrase: Passphrase to decrypt the wallet's private key
        num_unspents_to_make: Number of outputs created by the
            consolidation transaction (server default is 1)
        limit: Number of unspents to select (server default is 25, max 200)
        min_value: Ignore unspents smaller than this amount of satoshis
        max_value: Ignore unspents larger than this amount of satoshis
        min_height: Minimum block height of unspents to use
        fee_rate: Desired fee rate for the transaction in satoshis/KB
        fee_tx_confirm_target: Choose the fee rate by targeting a
            confirmation in this number of blocks (BTC only, fee_rate
            takes precedence)
        max_fee_percentage: Maximum percentage of an unspent's value to be
            used for fees; cannot be combined with min_value
        min_confirms: Required number of confirmations for each input
        enforce_min_confirms_for_change: Apply min_confirms to change
            outputs as well
    """
    wallet_passphrase: Optional[str] = Field(None, alias='walletPassphrase')
    num_unspents_to_make: Optional[int] = Field(None, alias='numUnspentsToMake')
    limit: Optional[int] = None
    min_value: Optional[int] = Field(None, alias='minValue')
    max_value: Optional[int] = Field(None, alias='maxValue')
    min_height: Optional[int] = Field(None, alias='minHeight')
    fee_rate: Optional[int] = Field(None, alias='feeRate')
    fee_tx_confirm_target: Optional[int] = Field(None, alias='feeTxConfirmTarget')
    max_fee_percentage: Optional[int] = Field(None, alias='maxFeePercentage')
    min_confirms: Optional[int] = Field(None, alias='minConfirms')
    enforce_min_confirms_for_change: Optional[bool] = Field(None, alias='enforceMinConfirmsForChange')


class Unspent(Record):
    """
    Unspent transaction output (UTXO).

    Attributes:
        id: Outpoint of the unspent (txid:vout)
        address: Address that owns this unspent
        value: Value in satoshis
        block_height: Height of the block that created this unspent
        date: Date the unspent was created
        wallet: Id of the wallet the unspent is in
        from_wallet: Id of the wallet the unspent came from, if it was
            sent from a BitGo wallet you're a member on
        chain: Address type and derivation path (0 = normal, 1 = change,
            10 = segwit, 11 = segwit change)
        index: Position of the address in this chain's derivation path
        redeem_script: Script that must be satisfied to spend this unspent
        is_segwit: Whether this is a segwit unspent
    """
    id: StrictStr = ''
    address: StrictStr = ''
    value: StrictInt = 0
    block_height: StrictInt = Field(0, alias='blockHeight')
    date: StrictStr = ''
    wallet: StrictStr = ''
    from_wallet: StrictStr = Field('', alias='fromWallet')
    chain: StrictInt = 0
    index: StrictInt = 0
    redeem_script: StrictStr = Field('', alias='redeemScript')
    is_segwit: StrictBool = Field(False, alias='isSegwit')


class ListMeta(Record):
    """Pagination metadata of a list response."""
    # Cursor of the next batch; empty on the last page.
    next_batch_prev_id: StrictStr = Field('', alias='nextBatchPrevId')
    coin: StrictStr = ''


class UnspentList(ListMeta):
    """One page of unspents as retrieved from the unspents endpoint."""
    unspents: List[Unspent] = Field(default_factory=list)

    @property
    def meta(self) -> ListMeta:
        return ListMeta(next_batch_prev_id=self.next_batch_prev_id, coin=self.coin)


class WalletService:
    """Communicates with the wallet API endpoints."""

    def __init__(self, client: 'BitGoClient'):
        self._client = client

    def consolidate(
        self,
        ctx: Context,
        wallet_id: str,
        params: Optional[ConsolidateParams] = None
    ) -> TxInfo:
        """
        Coalesce unspents currently held in a wallet to a smaller number.

        A single attempt is made; repeating it is up to the caller.

        Args:
            ctx: Request context
            wallet_id: BitGo wallet id
            params: Optional consolidation parameters

        Returns:
            Consolidation transaction
        """
        path = f'wallet/{wallet_id}/consolidateunspents'
        request = self._client.new_request(
            ctx, 'POST', path, body=params or ConsolidateParams()
        )
        return self._client.do(request, TxInfo.model_validate)

    def iter_unspents(
        self,
        ctx: Context,
        wallet_id: str,
        query: Optional[Dict[str, Any]] = None
    ) -> Iterator[UnspentList]:
        """
        Lazily fetch pages of a wallet's unspents, in cursor order.

        The next page is requested only when the caller asks for it.
        Before a page is yielded its cursor is stored in query under
        "prevId", so after a failure (or a break) the same query resumes
        at the first page not yet delivered.

        Args:
            ctx: Request context, checked before each page
            wallet_id: BitGo wallet id
            query: Filters as described in
                https://www.bitgo.com/api/v2/#list-wallet-unspents;
                mutated in place to carry the cursor

        Yields:
            Pages of unspents, possibly empty
        """
        path = f'wallet/{wallet_id}/unspents'
        if query is None:
            query = {}

        while True:
            request = self._client.new_request(ctx, 'GET', path, query)
            page = self._client.do(request, UnspentList.model_validate)

            cursor = page.next_batch_prev_id
            if cursor:
                query[PREV_ID] = cursor
            yield page

            if not cursor:
                return

    def unspents(
        self,
        ctx: Context,
        wallet_id: str,
        query: Optional[Dict[str, Any]],
        callback: Callable[[UnspentList], Any]
    ) -> None:
        """
        Get all unspents of a wallet, invoking callback for each page.

        The callback runs synchronously once per page; the next page is
        not requested until it returns. The cursor is stored in query
        only after the callback has returned, so errors (including ones
        raised by the callback) leave query pointed at the page that
        failed.

        Args:
            ctx: Request context, checked before each page
            wallet_id: BitGo wallet id
            query: Filters, mutated in place to carry the cursor
            callback: Called with every page
        """
        path = f'wallet/{wallet_id}/unspents'
        if query is None:
            query = {}

        while True:
            request = self._client.new_request(ctx, 'GET', path, query)
            page = self._client.do(request, UnspentList.model_validate)
            callback(page)

            if not page.next_batch_prev_id:
                return
            query[PREV_ID] = page.next_batch_prev_id
