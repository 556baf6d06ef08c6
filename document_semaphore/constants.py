import os

from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# Backend Constants
SEMAPHORE_BACKEND = os.getenv("SEMAPHORE_BACKEND", "github")
SEMAPHORE_LOCK_BRANCH = os.getenv("SEMAPHORE_LOCK_BRANCH", "locks")
SEMAPHORE_LOCK_FILE_PATH = os.getenv("SEMAPHORE_LOCK_FILE_PATH", "")
SEMAPHORE_LOCK_KEY = os.getenv("SEMAPHORE_LOCK_KEY", "")
SEMAPHORE_HOLDER_ID = os.getenv("SEMAPHORE_HOLDER_ID", "")

# Acquire Constants
MAX_CONCURRENT = int(os.getenv("SEMAPHORE_MAX_CONCURRENT", "1"))
POLLING_INTERVAL_SECONDS = float(os.getenv("SEMAPHORE_POLLING_INTERVAL", "10"))

# Release Constants
RELEASE_RETRIES = int(os.getenv("SEMAPHORE_RELEASE_RETRIES", "5"))
RELEASE_RETRY_DELAY_SECONDS = float(os.getenv("SEMAPHORE_RELEASE_RETRY_DELAY", "0.15"))

# GitHub Constants
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com")
GITHUB_TOKEN = os.getenv("GITHUB_TOKEN", "")
GITHUB_REPOSITORY = os.getenv("GITHUB_REPOSITORY", "")
GITHUB_WORKFLOW = os.getenv("GITHUB_WORKFLOW", "")
GITHUB_RUN_ID = os.getenv("GITHUB_RUN_ID", "")
GITHUB_JOB = os.getenv("GITHUB_JOB", "")
GITHUB_REQUEST_TIMEOUT_SECONDS = float(os.getenv("GITHUB_REQUEST_TIMEOUT", "30"))

# DAPR Constants
STATE_STORE_NAME = os.getenv("STATE_STORE_NAME", "statestore")

# Logger Constants
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
