"""Custom exception classes for TaskFlow."""

from fastapi import HTTPException, status


class TaskFlowError(Exception):
    """Base exception for TaskFlow."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class AuthenticationError(TaskFlowError):
    """Raised when credentials are missing or invalid."""
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(TaskFlowError):
    """Raised when user lacks permission."""
    status_code = status.HTTP_403_FORBIDDEN


class ResourceNotFoundError(TaskFlowError):
    """Raised when a requested resource is not found."""
    status_code = status.HTTP_404_NOT_FOUND


class ResourceConflictError(TaskFlowError):
    """Raised when a unique value is already taken or a single-active rule is broken."""
    pass


# HTTP exception shortcuts
def unauthorized(detail: str = "Access token required") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )
