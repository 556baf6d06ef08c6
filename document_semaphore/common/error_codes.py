"""
Error codes for document-semaphore.

Error codes follow the format: Semaphore-{Component}-{HTTP_Code}-{Unique_ID}

Components:
- Store: Document store errors (scope lookup, reads, writes)
- Lock: Acquire and release protocol errors
- Config: Entry point configuration errors
"""

from enum import Enum


class ErrorComponent(Enum):
    """Components that can generate errors in the system."""

    STORE = "Store"
    LOCK = "Lock"
    CONFIG = "Config"


class ErrorCode:
    """Error code with component, HTTP code, and description."""

    def __init__(
        self, component: str, http_code: str, unique_id: str, description: str
    ):
        self.code = f"Semaphore-{component}-{http_code}-{unique_id}"
        self.description = description

    def __str__(self) -> str:
        return f"{self.code}: {self.description}"


# Document store errors
STORE_ERRORS = {
    "SCOPE_NOT_FOUND_ERROR": ErrorCode(
        ErrorComponent.STORE.value, "404", "00", "Coordination scope does not exist"
    ),
    "DOCUMENT_NOT_FOUND_ERROR": ErrorCode(
        ErrorComponent.STORE.value, "404", "01", "Lock document does not exist"
    ),
    "STORE_REQUEST_ERROR": ErrorCode(
        ErrorComponent.STORE.value, "500", "00", "Document store request failed"
    ),
}

# Lock protocol errors
LOCK_ERRORS = {
    "LOCK_ACQUIRE_ERROR": ErrorCode(
        ErrorComponent.LOCK.value, "500", "00", "Lock acquisition failed"
    ),
    "LOCK_RELEASE_ERROR": ErrorCode(
        ErrorComponent.LOCK.value, "500", "01", "Lock release failed"
    ),
}

# Configuration errors
CONFIG_ERRORS = {
    "CONFIGURATION_ERROR": ErrorCode(
        ErrorComponent.CONFIG.value, "400", "00", "Invalid semaphore configuration"
    ),
}
