"""Domain errors raised by the catalog core.

Each error carries the HTTP status it maps to so that the HTTP adapter can
translate it without a lookup table of its own.
"""


class CatalogError(Exception):
    """Base class for catalog errors."""

    status_code: int = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    """Submitted product data failed validation.

    Recoverable: the client is sent back to the form with the field errors.
    """

    status_code = 302

    def __init__(self, errors: dict[str, list[str]], old_input: dict[str, str] | None = None) -> None:
        super().__init__("The given data was invalid.")
        self.errors = errors
        self.old_input = old_input or {}


class AuthorizationError(CatalogError):
    """The current user may not perform the requested action."""

    status_code = 403

    def __init__(self, message: str = "This action is unauthorized.") -> None:
        super().__init__(message)


class NotFoundError(CatalogError):
    """The requested record does not exist."""

    status_code = 404

    def __init__(self, message: str = "Not Found") -> None:
        super().__init__(message)


class PersistenceError(CatalogError):
    """The store failed unexpectedly."""

    status_code = 500


class MalformedInputError(CatalogError):
    """The request body could not be read as form fields or a JSON object."""

    status_code = 400

    def __init__(self, message: str = "Malformed request body") -> None:
        super().__init__(message)
