"""ID generation utilities."""
import secrets
import string
import time

_ALPHABET = string.ascii_lowercase + string.digits


def generate_import_id() -> str:
    """Generate a unique import job ID (``import_<epoch ms>_<9 random chars>``)."""
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(9))
    return f"import_{int(time.time() * 1000)}_{suffix}"
