from __future__ import annotations

import json
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any


def atomic_write_bytes(path: str | Path, content: bytes) -> Path:
    """Write bytes atomically using a temporary file + os.replace."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    with NamedTemporaryFile("wb", dir=target.parent, prefix=f".{target.name}.", delete=False) as tmp:
        tmp.write(content)
        tmp.flush()
        os.fsync(tmp.fileno())
        tmp_path = Path(tmp.name)

    try:
        os.replace(tmp_path, target)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    return target


def atomic_write_json(path: str | Path, payload: Any, *, ensure_ascii: bool = False, indent: int = 2) -> Path:
    """Serialize payload as JSON and write atomically."""
    text = json.dumps(payload, ensure_ascii=ensure_ascii, indent=indent)
    return atomic_write_bytes(path, text.encode("utf-8"))
