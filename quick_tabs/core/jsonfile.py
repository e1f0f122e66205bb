"""JSON file helpers shared by the persistent stores."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from quick_tabs.errors import StoreError


def read_json(path: Path) -> Any:
    """Read and parse *path*.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    StoreError
        If the file cannot be read or is not valid JSON.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as e:
        raise StoreError(path, f"unreadable: {e}") from e
    except json.JSONDecodeError as e:
        raise StoreError(path, f"invalid JSON: {e}") from e


def write_json_atomic(path: Path, data: Any) -> None:
    """Serialise *data* to *path* via a temporary file and ``os.replace``.

    The target is either the old content or the new content, never a
    partial write.  Raises ``StoreError`` on failure.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
        )
    except OSError as e:
        raise StoreError(path, f"cannot create temporary file: {e}") from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=4, ensure_ascii=False)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except (OSError, TypeError, ValueError) as e:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise StoreError(path, f"write failed: {e}") from e
