"""
BitGo SDK - Config Module

Immutable client settings and a fluent builder for them.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Optional, Union

import requests

from .errors import ConfigError

# Production environment. Point at a BitGo Express instance for signing.
# More about environments https://www.bitgo.com/api/v2/?shell#environments.
DEFAULT_BASE_URL = 'https://www.bitgo.com'
# Full list of supported currencies
# https://www.bitgo.com/api/v2/?shell#coin-digital-currency-support.
DEFAULT_COIN = 'btc'

Logger = Union[logging.Logger, logging.LoggerAdapter]


def _default_logger() -> logging.Logger:
    return logging.getLogger('bitgo')


@dataclass(frozen=True)
class Config:
    """
    Transport settings of a BitGoClient.

    Attributes:
        base_url: API domain, usually where BitGo Express runs
        coin: Digital currency the requests are scoped to
        access_token: Bearer token; empty means unauthenticated calls
        session: Underlying HTTP transport
        logger: Diagnostic sink for request/response debug events
    """
    base_url: str = DEFAULT_BASE_URL
    coin: str = DEFAULT_COIN
    access_token: str = ''
    session: requests.Session = field(default_factory=requests.Session, repr=False)
    logger: Logger = field(default_factory=_default_logger, repr=False)

    def __post_init__(self):
        # Frozen dataclass, so normalize through object.__setattr__.
        object.__setattr__(self, 'base_url', (self.base_url or '').rstrip('/'))

    def validate(self) -> 'Config':
        """
        Check that the settings can address the API.

        Returns:
            The same config, for chaining

        Raises:
            ConfigError: If base_url or coin is empty
        """
        if not self.base_url:
            raise ConfigError('base URL must not be empty')
        if not self.coin:
            raise ConfigError('coin must not be empty')
        return self


class ConfigBuilder:
    """
    Fluent builder for Config.

    Example:
        >>> config = (
        ...     ConfigBuilder()
        ...     .with_base_url('http://0.0.0.0:3080')
        ...     .with_coin('tbtc')
        ...     .with_access_token(token)
        ...     .build()
        ... )
    """

    def __init__(self, config: Optional[Config] = None):
        self._config = config or Config()

    def with_base_url(self, base_url: str) -> 'ConfigBuilder':
        """Use the given API domain."""
        self._config = replace(self._config, base_url=base_url)
        return self

    def with_coin(self, coin: str) -> 'ConfigBuilder':
        """Scope requests to a digital currency (default is "btc")."""
        self._config = replace(self._config, coin=coin)
        return self

    def with_access_token(self, token: str) -> 'ConfigBuilder':
        """Authenticate requests with a bearer token."""
        self._config = replace(self._config, access_token=token)
        return self

    def with_session(self, session: requests.Session) -> 'ConfigBuilder':
        """Send requests through the given HTTP session."""
        self._config = replace(self._config, session=session)
        return self

    def with_logger(self, logger: Logger) -> 'ConfigBuilder':
        """Emit request/response debug events to logger."""
        self._config = replace(self._config, logger=logger)
        return self

    def build(self) -> Config:
        """Return the validated config."""
        return self._config.validate()
