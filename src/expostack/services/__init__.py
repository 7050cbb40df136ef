from .base import BaseService
from .errors import (
    DependencyMissingError,
    ExternalCommandFailedError,
    ServiceFailure,
)

__all__ = [
    "BaseService",
    "DependencyMissingError",
    "ExternalCommandFailedError",
    "ServiceFailure",
]
