"""Command line entry point.

Usage:
    python -m document_semaphore acquire --lock-file-path locks/a.json --lock-key a
    python -m document_semaphore release --lock-file-path locks/a.json --lock-key a
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from pydantic import ValidationError

from document_semaphore.clients.dapr import DaprStateDocumentStore
from document_semaphore.clients.github import GitHubDocumentStore
from document_semaphore.common.exceptions import SemaphoreConfigurationError
from document_semaphore.constants import (
    GITHUB_API_URL,
    GITHUB_REPOSITORY,
    GITHUB_TOKEN,
    MAX_CONCURRENT,
    POLLING_INTERVAL_SECONDS,
    RELEASE_RETRIES,
    RELEASE_RETRY_DELAY_SECONDS,
    SEMAPHORE_BACKEND,
    SEMAPHORE_HOLDER_ID,
    SEMAPHORE_LOCK_BRANCH,
    SEMAPHORE_LOCK_FILE_PATH,
    SEMAPHORE_LOCK_KEY,
    STATE_STORE_NAME,
)
from document_semaphore.lock.acquire import acquire_lock
from document_semaphore.lock.document import LockDocumentManager
from document_semaphore.lock.models import LockParams, build_holder_id
from document_semaphore.lock.release import release_lock
from document_semaphore.observability.logger_adaptor import get_logger
from document_semaphore.services.documentstore import DocumentStore

logger = get_logger(__name__)

BACKEND_GITHUB = "github"
BACKEND_DAPR = "dapr"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="document_semaphore",
        description=(
            "Acquire or release a slot of a counting semaphore kept in a "
            "shared lock document"
        ),
    )
    parser.add_argument("mode", choices=["acquire", "release"])
    parser.add_argument(
        "--backend",
        choices=[BACKEND_GITHUB, BACKEND_DAPR],
        default=SEMAPHORE_BACKEND,
        help="Document store holding the lock document",
    )
    parser.add_argument(
        "--scope",
        "--lock-branch",
        dest="scope",
        default=None,
        help="Lock branch (github) or state store name (dapr)",
    )
    parser.add_argument(
        "--lock-file-path",
        default=SEMAPHORE_LOCK_FILE_PATH,
        help="Path of the lock document inside the scope",
    )
    parser.add_argument("--lock-key", default=SEMAPHORE_LOCK_KEY)
    parser.add_argument(
        "--holder-id",
        default=SEMAPHORE_HOLDER_ID,
        help="Holder identity; defaults to workflow:run_id:job",
    )
    parser.add_argument("--max-concurrent", type=int, default=MAX_CONCURRENT)
    parser.add_argument(
        "--polling-interval",
        type=float,
        default=POLLING_INTERVAL_SECONDS,
        help="Seconds between checks while the semaphore is full",
    )
    parser.add_argument("--release-retries", type=int, default=RELEASE_RETRIES)
    parser.add_argument(
        "--release-retry-delay", type=float, default=RELEASE_RETRY_DELAY_SECONDS
    )
    parser.add_argument("--owner", default=None, help="GitHub repository owner")
    parser.add_argument("--repo", default=None, help="GitHub repository name")
    parser.add_argument("--github-api-url", default=GITHUB_API_URL)
    return parser


def build_store(args: argparse.Namespace) -> DocumentStore:
    """Create the document store selected by ``--backend``."""
    if args.backend == BACKEND_DAPR:
        return DaprStateDocumentStore()

    owner, repo = args.owner, args.repo
    if (not owner or not repo) and "/" in GITHUB_REPOSITORY:
        default_owner, default_repo = GITHUB_REPOSITORY.split("/", 1)
        owner = owner or default_owner
        repo = repo or default_repo
    if not owner or not repo:
        raise SemaphoreConfigurationError(
            "GitHub owner and repo are required (--owner/--repo or GITHUB_REPOSITORY)"
        )
    if not GITHUB_TOKEN:
        raise SemaphoreConfigurationError("GITHUB_TOKEN is required")

    return GitHubDocumentStore(
        owner=owner, repo=repo, token=GITHUB_TOKEN, api_url=args.github_api_url
    )


def build_params(args: argparse.Namespace) -> LockParams:
    scope = args.scope or (
        STATE_STORE_NAME if args.backend == BACKEND_DAPR else SEMAPHORE_LOCK_BRANCH
    )
    try:
        return LockParams(
            scope=scope,
            lock_key=args.lock_key,
            holder_id=args.holder_id or build_holder_id(),
            max_concurrent=args.max_concurrent,
            polling_interval=args.polling_interval,
            release_retries=args.release_retries,
            release_retry_delay=args.release_retry_delay,
        )
    except ValidationError as e:
        raise SemaphoreConfigurationError(f"Invalid lock parameters: {e}") from e


async def run_async(args: argparse.Namespace) -> None:
    if not args.lock_file_path:
        raise SemaphoreConfigurationError("--lock-file-path is required")

    params = build_params(args)
    store = build_store(args)
    manager = LockDocumentManager(store, args.lock_file_path)
    logger.info(
        f"Running {args.mode} for key {params.lock_key} as {params.holder_id} "
        f"on {args.backend}:{params.scope}/{args.lock_file_path}"
    )
    try:
        if args.mode == "acquire":
            await acquire_lock(manager, params)
        else:
            await release_lock(manager, params)
    finally:
        if isinstance(store, GitHubDocumentStore):
            await store.close()


def run(argv: Optional[List[str]] = None) -> int:
    """Parse ``argv`` and run the requested mode.

    Returns:
        int: 0 on success, 1 on any fatal error.
    """
    args = build_parser().parse_args(argv)
    try:
        asyncio.run(run_async(args))
    except Exception as e:
        logger.error(str(e))
        return 1
    return 0


def main() -> None:
    sys.exit(run())
