"""File-system helpers: atomic writes and directory replacement."""

from __future__ import annotations

import asyncio
import json
import os
import shutil
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator


def write_text_atomic(target_path: Path, content: str) -> None:
    """
    Atomically write a UTF-8 text file.

    Uses write-to-temp-then-rename pattern to prevent corruption.
    """
    fd, temp_path = tempfile.mkstemp(
        suffix=".tmp",
        prefix=f".{target_path.name}_",
        dir=target_path.parent,
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(temp_path, target_path)
    except BaseException:
        # Clean up temp file on error
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def write_json_atomic(target_path: Path, data: Any, indent: int = 2) -> None:
    """Serialize data as indented JSON and write it atomically."""
    write_text_atomic(target_path, json.dumps(data, indent=indent))


def read_json(path: Path) -> Any:
    """Read and parse a UTF-8 JSON file."""
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def remove_directory(path: Path) -> None:
    """Recursively delete a directory if it exists."""
    if path.exists():
        shutil.rmtree(path)


@asynccontextmanager
async def replace_directory(target: Path) -> AsyncIterator[Path]:
    """
    Build a directory's new contents beside it, then swap it in.

    Any existing target is removed before the block runs. The block
    populates the yielded staging directory; on normal exit the staging
    directory is renamed to target. If the block raises, the staging
    directory is deleted and target stays absent, so a partially built
    directory is never visible under the target name.

    Filesystem calls run in a worker thread.
    """
    staging = await asyncio.to_thread(_prepare_staging, target)
    try:
        yield staging
        await asyncio.to_thread(os.rename, staging, target)
    except BaseException:
        await asyncio.to_thread(shutil.rmtree, staging, ignore_errors=True)
        raise


def _prepare_staging(target: Path) -> Path:
    remove_directory(target)
    target.parent.mkdir(parents=True, exist_ok=True)
    return Path(tempfile.mkdtemp(prefix=f".{target.name}_", dir=target.parent))


__all__ = [
    "write_text_atomic",
    "write_json_atomic",
    "read_json",
    "remove_directory",
    "replace_directory",
]
