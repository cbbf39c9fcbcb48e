"""
BitGo SDK - Client Module

Main entry point for BitGo API v2 interactions.

The client builds authenticated JSON requests scoped to a coin and turns
responses into decoded values or classified errors. It never retries:
every failure is raised to the immediate caller.
"""

import json
import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Optional

import requests
from pydantic import BaseModel, ValidationError

from .config import Config
from .context import Context
from .errors import APIError, DecodeError, EncodingError, TransportError
from .wallet import WalletService

Decoder = Callable[[Any], Any]


@dataclass(frozen=True)
class Request:
    """A prepared API request bound to the context it runs under."""
    context: Context
    prepared: requests.PreparedRequest

    @property
    def method(self) -> str:
        return self.prepared.method or ''

    @property
    def url(self) -> str:
        return self.prepared.url or ''

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self.prepared.headers)

    @property
    def body(self) -> Optional[bytes]:
        body = self.prepared.body
        if isinstance(body, str):
            return body.encode('utf-8')
        return body


class BitGoClient:
    """
    BitGo REST API client.

    Example:
        >>> client = BitGoClient(base_url='http://0.0.0.0:3080', access_token=token)
        >>> tx = client.wallet.consolidate(Context.background(), wallet_id)
        >>> print(tx.txid)
    """

    def __init__(self, config: Optional[Config] = None, **settings: Any):
        """
        Initialize client.

        Requests go to https://www.bitgo.com, the coin is "btc" and logs
        are discarded unless configured otherwise.

        Args:
            config: Prebuilt configuration (see ConfigBuilder)
            **settings: Config fields (base_url, coin, access_token,
                session, logger) overriding the defaults or config
        """
        if config is None:
            config = Config(**settings)
        elif settings:
            config = replace(config, **settings)

        self.config = config.validate()
        self.wallet = WalletService(self)

    def new_request(
        self,
        ctx: Context,
        method: str,
        path: str,
        query: Optional[Dict[str, Any]] = None,
        body: Any = None
    ) -> Request:
        """
        Create a request to the API.

        Args:
            ctx: Context the request will run under
            method: HTTP method
            path: API path relative to the coin, without leading or
                trailing slash (e.g. "wallet/<id>/unspents")
            query: Optional query string parameters; list values repeat
                the key, order follows the mapping
            body: Optional JSON-serializable payload, or a
                pydantic model (sent by alias, unset fields omitted)

        Returns:
            Prepared request

        Raises:
            EncodingError: If the body cannot be serialized to JSON
        """
        url = f'{self.config.base_url}/api/v2/{self.config.coin}/{path}'

        data = None
        if body is not None:
            data = _encode_json(body)
        self._log('creating request', method=method, url=url, body=data)

        headers = {
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        }
        if self.config.access_token:
            headers['Authorization'] = f'Bearer {self.config.access_token}'

        prepared = self.config.session.prepare_request(
            requests.Request(method, url, params=query, data=data, headers=headers)
        )
        self._log('request headers are set', headers=_redact(prepared.headers))

        return Request(context=ctx, prepared=prepared)

    def do(self, request: Request, decode: Optional[Decoder] = None) -> Any:
        """
        Execute a request and decode the response.

        The whole body is read before the status code is inspected.

        Args:
            request: Request built by new_request
            decode: Callable turning the parsed JSON of a 200 response
                into a typed value; the parsed JSON is returned as is
                when omitted

        Returns:
            Decoded response value

        Raises:
            ContextCancelledError: If the context was cancelled
            TransportError: On network failure
            DecodeError: If a 200 body does not fit the expected shape
            APIError: For any non-200 response
        """
        self._log('sending request')
        request.context.check()

        session = self.config.session
        settings = session.merge_environment_settings(
            request.url, {}, None, None, None
        )
        try:
            response = session.send(
                request.prepared,
                timeout=request.context.timeout,
                **settings
            )
        except requests.RequestException as e:
            self._log('request failed', error=str(e))
            raise TransportError(str(e)) from e

        body = response.text
        self._log(
            'server response',
            status=response.status_code,
            headers=dict(response.headers),
            body=body
        )

        if response.status_code == 200:
            try:
                data = response.json()
                return decode(data) if decode else data
            except (ValueError, ValidationError) as e:
                raise DecodeError(f'invalid response body: {e}', response=response) from e

        raise APIError.from_response(response.status_code, body)

    def _log(self, msg: str, **fields: Any) -> None:
        logger = self.config.logger
        if not logger.isEnabledFor(logging.DEBUG):
            return
        if not fields:
            logger.debug(msg)
            return
        pairs = ' '.join(f'{key}={value!r}' for key, value in fields.items())
        logger.debug('%s %s', msg, pairs, extra=fields)


def _encode_json(body: Any) -> bytes:
    if isinstance(body, BaseModel):
        body = body.model_dump(by_alias=True, exclude_none=True)
    try:
        return json.dumps(body, separators=(',', ':'), allow_nan=False).encode('utf-8')
    except (TypeError, ValueError) as e:
        raise EncodingError(f'cannot encode request body: {e}') from e


def _redact(headers: Any) -> Dict[str, str]:
    redacted = dict(headers)
    if 'Authorization' in redacted:
        redacted['Authorization'] = 'Bearer ***'
    return redacted
