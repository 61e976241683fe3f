class CatalogError(Exception):
    """Base class for errors surfaced by the catalog API."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    """A write was rejected: missing/empty required field or malformed input."""

    status_code = 400


class NotFoundError(CatalogError):
    status_code = 404


class StorageError(CatalogError):
    """The backing store rejected a read or write, or is not connected."""

    status_code = 500

    def __init__(self, message: str, *, unavailable: bool = False):
        super().__init__(message)
        if unavailable:
            self.status_code = 503


class ShorteningProviderError(CatalogError):
    """
    One shortening call failed. Never leaves the link shortener: the caller
    falls back to the original url for that link.
    """
