"""
Domain exceptions for business logic layer.

These exceptions are used in repositories, the resource client and services
to represent business logic errors without coupling to HTTP status codes.
"""


class EdpConsoleError(Exception):
    """Base exception for all admin console errors."""

    pass


# Base domain exceptions
class EntityNotFoundError(EdpConsoleError):
    """Raised when an entity is not found."""

    pass


class EntityAlreadyExistsError(EdpConsoleError):
    """Raised when trying to create an entity that already exists."""

    pass


class UpstreamError(EdpConsoleError):
    """Raised when a backing store fails for a reason other than not-found."""

    pass


# Codebase exceptions
class InvalidReferenceError(EdpConsoleError):
    """Raised when an application and branch pair does not resolve."""

    def __init__(self, application: str, branch: str) -> None:
        self.application = application
        self.branch = branch
        super().__init__(f"Application '{application}' has no branch '{branch}'")


# CD pipeline exceptions
class CDPipelineAlreadyExistsError(EntityAlreadyExistsError):
    """Raised when a CD pipeline name collides in one of the stores."""

    def __init__(self, name: str, store: str) -> None:
        self.name = name
        self.store = store
        super().__init__(f"CD pipeline '{name}' already exists in {store}")


class StageAlreadyExistsError(EntityAlreadyExistsError):
    """Raised when a stage resource with the derived name already exists."""

    def __init__(self, resource_name: str) -> None:
        self.resource_name = resource_name
        super().__init__(f"Stage '{resource_name}' already exists")


# Store errors
class DatabaseError(UpstreamError):
    """Raised when a read model query fails."""

    pass


class ResourceClientError(UpstreamError):
    """Raised when the orchestrator resource API fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ResourceConflictError(ResourceClientError):
    """Raised when the resource store rejects a create with a conflict."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=409)


class ResourceNotFoundError(EntityNotFoundError):
    """Raised when a resource is not found in the orchestrator store."""

    def __init__(self, plural: str, namespace: str, name: str) -> None:
        super().__init__(f"Resource {plural}/{name} not found in namespace '{namespace}'")


# Configuration errors
class ConfigurationError(EdpConsoleError):
    """Raised when there's a configuration problem."""

    pass
