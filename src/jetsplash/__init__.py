"""jetsplash: random Unsplash photos behind a typed network-result layer.

Public API:
    - RequestHandler: handle / handle_as_flow / handle_with_cache
    - NetworkResult, CachedResult and the NetworkError taxonomy
    - UnsplashRepository and open_repository(): the photo client
    - Config: Configuration dataclass
"""

from __future__ import annotations

import logging

from jetsplash.app import open_repository
from jetsplash.classify import classify_error
from jetsplash.config import Config
from jetsplash.error_mapper import (
    BasicError,
    ErrorDecoder,
    ErrorMapper,
    basic_error_decoder,
    model_decoder,
)
from jetsplash.errors import (
    ConfigurationError,
    HTTPFault,
    JetsplashError,
    NetworkFault,
    RemoteFault,
    ResponseDecodeFault,
    UntrustedConnectionFault,
    WriteThroughError,
)
from jetsplash.handler import RequestHandler
from jetsplash.models import UnsplashPhoto
from jetsplash.network_error import (
    ErrorBody,
    Network,
    NetworkError,
    NotFound,
    ResponseSerialization,
    ServerError,
    Unknown,
    UntrustedConnection,
    error_description,
)
from jetsplash.repository import PhotoBatch, UnsplashRepository
from jetsplash.result import (
    CachedError,
    CachedResult,
    CachedSuccess,
    Error,
    Loading,
    NetworkResult,
    Success,
)
from jetsplash.retry import RetryPolicy, retry_result
from jetsplash.store import LocalStore, MemoryStore

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("jetsplash")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("jetsplash").addHandler(logging.NullHandler())

__all__ = [
    "BasicError",
    "CachedError",
    "CachedResult",
    "CachedSuccess",
    "Config",
    "ConfigurationError",
    "Error",
    "ErrorBody",
    "ErrorDecoder",
    "ErrorMapper",
    "HTTPFault",
    "JetsplashError",
    "LocalStore",
    "Loading",
    "MemoryStore",
    "Network",
    "NetworkError",
    "NetworkFault",
    "NetworkResult",
    "NotFound",
    "PhotoBatch",
    "RemoteFault",
    "RequestHandler",
    "ResponseDecodeFault",
    "ResponseSerialization",
    "RetryPolicy",
    "ServerError",
    "Success",
    "Unknown",
    "UnsplashPhoto",
    "UnsplashRepository",
    "UntrustedConnection",
    "UntrustedConnectionFault",
    "WriteThroughError",
    "basic_error_decoder",
    "classify_error",
    "error_description",
    "model_decoder",
    "open_repository",
    "retry_result",
]
