"""Custom exception classes for SmartFit Backend"""


class SmartFitException(Exception):
    """Base exception for SmartFit application"""

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class DatabaseException(SmartFitException):
    """Raised when database operations fail"""

    def __init__(self, message: str = "Database error"):
        super().__init__(message)


class DuplicateUserException(DatabaseException):
    """Raised when a user with the same email or username already exists"""

    def __init__(self, field: str = "email", message: str = None):
        if message is None:
            message = f"A user with this {field} already exists"
        self.field = field
        super().__init__(message)


class DuplicateFavoriteException(DatabaseException):
    """Raised when a product is already in the user's favorites"""

    def __init__(self, product_id: str = "", message: str = None):
        if message is None:
            message = f"Product already in favorites: {product_id}"
        self.product_id = product_id
        super().__init__(message)


class MongoDBException(DatabaseException):
    """Raised when MongoDB operations fail"""

    def __init__(self, message: str = "MongoDB error"):
        super().__init__(message)


class MongoDBConnectionException(MongoDBException):
    """Raised when cannot connect to MongoDB"""

    def __init__(self, message: str = "Failed to connect to MongoDB"):
        super().__init__(message)


class AuthenticationException(SmartFitException):
    """Raised when a request cannot be authenticated"""

    status_code = 401

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message)


class TokenMissingException(AuthenticationException):
    """Raised when no bearer token is presented"""

    status_code = 401

    def __init__(self, message: str = "Access token required"):
        super().__init__(message)


class InvalidTokenException(AuthenticationException):
    """Raised when the bearer token is malformed, forged or expired"""

    status_code = 403

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)
