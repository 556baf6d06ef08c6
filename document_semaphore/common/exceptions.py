"""Custom exceptions for document semaphore operations.

Version conflicts are deliberately absent: the store reports them as a
``WriteResult`` and the protocols turn them into loop restarts.
"""

from typing import Optional

from document_semaphore.common.error_codes import (
    CONFIG_ERRORS,
    STORE_ERRORS,
    ErrorCode,
)


class DocumentSemaphoreError(Exception):
    """Base exception for semaphore operations.

    Attributes:
        message: Human-readable error message.
        error_code: Standardized error code for the failure.
    """

    default_error_code: Optional[ErrorCode] = None

    def __init__(self, message: str, error_code: Optional[ErrorCode] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code

    def __str__(self) -> str:
        if self.error_code is None:
            return self.message
        return f"{self.error_code.code}: {self.message}"


class ScopeNotFoundError(DocumentSemaphoreError):
    """Raised when the coordination scope (e.g. the lock branch) is missing.

    The scope is never provisioned automatically; it has to be created
    out-of-band before any worker can use the semaphore.

    Example:
        >>> raise ScopeNotFoundError("locks")
    """

    default_error_code = STORE_ERRORS["SCOPE_NOT_FOUND_ERROR"]

    def __init__(self, scope: str):
        super().__init__(f"Branch {scope} does not exist. Please create it manually.")
        self.scope = scope


class DocumentNotFoundError(DocumentSemaphoreError):
    """Raised by a store when the requested document does not exist."""

    default_error_code = STORE_ERRORS["DOCUMENT_NOT_FOUND_ERROR"]

    def __init__(self, scope: str, path: str):
        super().__init__(f"Lock file not found at {path} on branch {scope}")
        self.scope = scope
        self.path = path


class DocumentStoreError(DocumentSemaphoreError):
    """Raised for any store failure that is neither not-found nor a conflict.

    Attributes:
        status_code: Backend status code, when the backend provides one.
    """

    default_error_code = STORE_ERRORS["STORE_REQUEST_ERROR"]

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SemaphoreConfigurationError(DocumentSemaphoreError):
    """Raised when the entry point cannot build a valid configuration."""

    default_error_code = CONFIG_ERRORS["CONFIGURATION_ERROR"]
