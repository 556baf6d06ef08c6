"""Configuration model for a single acquire or release call."""

from typing import Optional

from pydantic import BaseModel, Field

from document_semaphore.common.exceptions import SemaphoreConfigurationError
from document_semaphore.constants import (
    GITHUB_JOB,
    GITHUB_RUN_ID,
    GITHUB_WORKFLOW,
    MAX_CONCURRENT,
    POLLING_INTERVAL_SECONDS,
    RELEASE_RETRIES,
    RELEASE_RETRY_DELAY_SECONDS,
)


class LockParams(BaseModel):
    """Parameters shared by the acquire and release protocols.

    Attributes:
        scope: Coordination scope holding the lock document (e.g. branch).
        lock_key: Semaphore key the capacity applies to.
        holder_id: Identity of this execution attempt.
        max_concurrent: Capacity of the semaphore key. 1 makes it a mutex.
        polling_interval: Seconds to wait while the key is at capacity.
        release_retries: Attempts allowed for a release before giving up.
        release_retry_delay: Base backoff between release attempts, in seconds.
    """

    scope: str = Field(min_length=1)
    lock_key: str = Field(min_length=1)
    holder_id: str = Field(min_length=1)
    max_concurrent: int = Field(default=MAX_CONCURRENT, ge=1)
    polling_interval: float = Field(default=POLLING_INTERVAL_SECONDS, ge=0)
    release_retries: int = Field(default=RELEASE_RETRIES, ge=1)
    release_retry_delay: float = Field(default=RELEASE_RETRY_DELAY_SECONDS, ge=0)


def build_holder_id(
    workflow: Optional[str] = None,
    run_id: Optional[str] = None,
    job: Optional[str] = None,
) -> str:
    """Compose a holder identity as ``{workflow}:{run_id}:{job}``.

    Missing parts fall back to the GitHub Actions environment.

    Raises:
        SemaphoreConfigurationError: If any part is still empty, since the
            composed identity would be shared by every worker.

    Example:
        >>> build_holder_id("deploy", "12345", "build")
        'deploy:12345:build'
    """
    parts = {
        "workflow": workflow if workflow is not None else GITHUB_WORKFLOW,
        "run_id": run_id if run_id is not None else GITHUB_RUN_ID,
        "job": job if job is not None else GITHUB_JOB,
    }
    missing = [name for name, value in parts.items() if not value]
    if missing:
        raise SemaphoreConfigurationError(
            f"Cannot compose a holder identity, missing {', '.join(missing)}. "
            "Pass --holder-id or set SEMAPHORE_HOLDER_ID."
        )
    return ":".join(parts.values())
