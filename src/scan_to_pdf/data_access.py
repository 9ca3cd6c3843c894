from __future__ import annotations

import hashlib
import os
import tempfile
from pathlib import Path


def derive_output_path(input_path: Path, *, suffix: str = "_processed", extension: str = ".pdf") -> Path:
    """
    `<dir>/<stem><suffix><extension>`, next to the input.
    """

    return input_path.with_name(f"{input_path.stem}{suffix}{extension}")


def read_input_bytes(path: Path) -> bytes:
    with path.open("rb") as f:
        return f.read()


def write_bytes_atomic(path: Path, data: bytes) -> None:
    """
    Write `data` to a sibling temp file, then replace `path` with it.

    Any existing file at `path` is overwritten; on failure the temp file is
    removed and `path` is left as it was.
    """

    temp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "wb",
            delete=False,
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
        ) as handle:
            temp_name = handle.name
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_name, path)
        temp_name = None
    finally:
        if temp_name and os.path.exists(temp_name):
            os.remove(temp_name)


def sha256_bytes(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()
