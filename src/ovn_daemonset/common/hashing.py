"""Content hashing for change-driven redeployment."""

import hashlib
import json
from pathlib import Path
from typing import Any


def object_hash(obj: Any) -> str:
    """Return the sha256 hex digest of a JSON-serializable object.

    Keys are sorted so that mapping order does not change the digest.
    """
    payload = json.dumps(obj, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(payload.encode()).hexdigest()


def hash_of_input_hashes(hashes: dict[str, str]) -> str:
    """Combine per-input hashes into a single hash."""
    return object_hash(hashes)


def file_hashes(paths: list[Path]) -> dict[str, str]:
    """Hash the contents of each file, keyed by resolved path.

    Files that share a base name in different directories stay distinct.

    Args:
        paths: Files to hash.

    Returns:
        Mapping of absolute path to the sha256 hex digest of its bytes.

    Raises:
        FileNotFoundError: If a file does not exist.

    """
    return {str(path.resolve()): hashlib.sha256(path.read_bytes()).hexdigest() for path in paths}
