"""Domain exceptions translated into HTTP responses by the API layer."""


class AppError(Exception):
    """Base class for errors the API reports back to the client."""
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    status_code = 404


class ForbiddenError(AppError):
    status_code = 403


class AuthenticationError(AppError):
    status_code = 401


class InvalidDataError(AppError):
    """Well-formed request that references data which does not fit (unknown category)."""
    status_code = 400


class ConflictError(AppError):
    """Request clashes with existing data (duplicate email, second active challenge)."""
    status_code = 400


class InvalidTransitionError(AppError):
    """Challenge status change that the lifecycle does not allow."""
    status_code = 400


def ensure_owner(resource, user_id: int, name: str, owner_attr: str = "user_id"):
    """Raise NotFoundError/ForbiddenError unless ``resource`` belongs to ``user_id``."""
    if resource is None:
        raise NotFoundError(f"{name} not found")
    if getattr(resource, owner_attr) != user_id:
        raise ForbiddenError(f"You do not have access to this {name.lower()}")
    return resource
