"""
restool compiles declarative REST service configuration into the models
its HTTP client uses to build and execute requests.
"""

__version__ = "0.1.0"

from .config.error import ConfigError, ServiceNotFoundError
from .config.loader import Loader, load
from .models import (
    BasicAuthentication,
    Operation,
    OperationResponse,
    OperationResponseField,
    PersistentConnection,
    Representation,
    RepresentationField,
    Service,
)
from .symbol import Symbol

__all__ = (
    "load",
    "Loader",
    "ConfigError",
    "ServiceNotFoundError",
    "Service",
    "Operation",
    "OperationResponse",
    "OperationResponseField",
    "Representation",
    "RepresentationField",
    "PersistentConnection",
    "BasicAuthentication",
    "Symbol",
)
