"""
JSON document helpers shared by the file-backed stores.

Each store keeps one JSON document; writes replace the file atomically so a
crash mid-write never leaves a truncated store behind.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Union

from ..errors import StorageError


def read_json(path: Union[Path, str], default: Any) -> Any:
    """Load the document at path, or default when the file does not exist."""
    path = Path(path)
    if not path.exists():
        return default
    try:
        with open(path) as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        raise StorageError(f"Failed to read {path}: {e}") from e


def write_json_atomic(path: Union[Path, str], data: Any) -> None:
    """Write data to path via a temp file in the same directory."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
    except (OSError, TypeError, ValueError) as e:
        raise StorageError(f"Failed to write {path}: {e}") from e
