# inventory_ledger/services/exceptions.py

class ServiceError(Exception):
    """Base class for service-layer errors."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class InsufficientStockError(ServiceError):
    """Raised when an import would leave less than zero units available."""
    pass


class ResourceNotFoundError(ServiceError):
    """Resource not found."""
    pass


class StoreFailureError(ServiceError):
    """The store rejected or failed an operation; detail is safe to show."""
    pass
