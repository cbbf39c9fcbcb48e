"""
BitGo API v2 client for Python

Consolidate and list wallet unspents through the BitGo REST API.
"""

import logging

from .client import BitGoClient, Request
from .config import Config, ConfigBuilder, DEFAULT_BASE_URL, DEFAULT_COIN
from .context import Context
from .convert import SATOSHIS_PER_BITCOIN, to_bitcoins, to_satoshis
from .wallet import (
    ConsolidateParams,
    ListMeta,
    TxInfo,
    Unspent,
    UnspentList,
    WalletService,
)
from .errors import (
    APIError,
    BitGoError,
    ConfigError,
    ContextCancelledError,
    DecodeError,
    EncodingError,
    ErrorKind,
    TransportError,
    classify,
)

# Logs are discarded unless the application configures logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    # Core classes
    "BitGoClient",
    "Request",
    "Config",
    "ConfigBuilder",
    "Context",
    "WalletService",
    "DEFAULT_BASE_URL",
    "DEFAULT_COIN",
    # Types
    "TxInfo",
    "ConsolidateParams",
    "Unspent",
    "ListMeta",
    "UnspentList",
    # Units
    "SATOSHIS_PER_BITCOIN",
    "to_satoshis",
    "to_bitcoins",
    # Errors
    "BitGoError",
    "ConfigError",
    "EncodingError",
    "TransportError",
    "ContextCancelledError",
    "DecodeError",
    "APIError",
    "ErrorKind",
    "classify",
]
