"""Access-control errors.

Domain rule violations use ``protean.exceptions`` (``ValidationError``,
``ObjectNotFoundError``); these two cover who may call an operation at all.
"""


class AccessError(Exception):
    status_code = 403

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationRequired(AccessError):
    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class PermissionDenied(AccessError):
    def __init__(self, message: str = "You do not have permission to access this resource"):
        super().__init__(message)
