"""
Exceptions for the EDP admin console.

Domain exceptions live in ``domain`` and are mapped to HTTP responses by the
API exception handlers; ``http`` holds the few HTTP exceptions routers raise.
"""

from .domain import (
    CDPipelineAlreadyExistsError,
    ConfigurationError,
    DatabaseError,
    EdpConsoleError,
    EntityAlreadyExistsError,
    EntityNotFoundError,
    InvalidReferenceError,
    ResourceClientError,
    ResourceConflictError,
    ResourceNotFoundError,
    StageAlreadyExistsError,
    UpstreamError,
)
from .http import NOT_FOUND, CustomHTTPException

__all__ = [
    "NOT_FOUND",
    "CDPipelineAlreadyExistsError",
    "ConfigurationError",
    "CustomHTTPException",
    "DatabaseError",
    "EdpConsoleError",
    "EntityAlreadyExistsError",
    "EntityNotFoundError",
    "InvalidReferenceError",
    "ResourceClientError",
    "ResourceConflictError",
    "ResourceNotFoundError",
    "StageAlreadyExistsError",
    "UpstreamError",
]
