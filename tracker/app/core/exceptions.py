"""
Custom exceptions for consistent error reporting.

Provides standardized error codes for the storage layer.
"""

from typing import Any, Dict


class AppException(Exception):
    """Base application exception."""
    
    def __init__(self, message: str, error_code: str, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


class NotFoundError(AppException):
    """Raised when requested resource is not found."""
    
    def __init__(self, resource: str, resource_id: Any = None):
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} with ID {resource_id} not found"
        super().__init__(
            message=message,
            error_code="ERR_NOT_FOUND_001",
            details={"resource": resource, "id": resource_id}
        )


class StorageError(AppException):
    """Raised when the storage engine fails or returns an undecodable row."""
    
    def __init__(self, operation: str, message: str = "Storage operation failed", details: Dict[str, Any] = None):
        super().__init__(
            message=f"{message} ({operation})",
            error_code="ERR_STORAGE_001",
            details={"operation": operation, **(details or {})}
        )
        self.operation = operation
