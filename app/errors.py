class CatalogError(Exception):
    """Base class for failures that cross the request boundary as an envelope."""

    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: str | None = None, detail: str | None = None):
        self.message = message or self.default_message
        # raw internal text, only rendered in debug mode
        self.detail = detail
        super().__init__(self.message)


class ValidationError(CatalogError):
    status_code = 400
    default_message = "Please fill in all fields"


class ConflictError(CatalogError):
    # uniqueness violations share 400 with validation failures
    status_code = 400
    default_message = "Book with this ISBN already exists"


class NotFound(CatalogError):
    status_code = 404
    default_message = "Book not found"


class Unauthenticated(CatalogError):
    status_code = 401
    default_message = "Not authorized, token missing or invalid"


class Unavailable(CatalogError):
    status_code = 500
    default_message = "Catalog store is unavailable"
