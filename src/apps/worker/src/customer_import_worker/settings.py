"""Worker settings."""
import os


def get_batch_size() -> int:
    """Get the default batch size from environment."""
    return int(os.environ.get("IMPORT_BATCH_SIZE", "1000"))


def get_max_errors() -> int:
    """Get the default error ceiling from environment."""
    return int(os.environ.get("IMPORT_MAX_ERRORS", "10000"))


def get_progress_interval() -> float:
    """Seconds between progress log lines."""
    return float(os.environ.get("IMPORT_PROGRESS_INTERVAL", "2.0"))


def get_sink_backend() -> str:
    return os.environ.get("SINK_BACKEND", "opensearch")


def get_customers_index() -> str:
    return os.environ.get("CUSTOMERS_INDEX", "customers")
