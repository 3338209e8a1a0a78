class StackAssistException(Exception):
    """Base exception for Stack Assist"""

    pass


class AuthError(StackAssistException):
    """Raised for invalid credentials, bad tokens and ended sessions"""

    pass


class NotFoundException(StackAssistException):
    """Raised when resource not found"""

    pass


class ForbiddenException(StackAssistException):
    """Raised when access is denied or a permission is missing"""

    pass


class ValidationException(StackAssistException):
    """Raised for business logic validation errors (before any write)"""

    pass


class EmailDeliveryException(StackAssistException):
    """Raised when an outgoing email cannot be delivered"""

    pass
