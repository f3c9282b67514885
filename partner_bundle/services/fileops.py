"""Filesystem helpers that either succeed completely or stop the run.

Every failure is re-raised as ExternalToolError with the offending path in the
message; callers never see a partial-success result.
"""
import asyncio
import shutil
from pathlib import Path

import aiofiles
import aiofiles.os

from partner_bundle.core.errors import ExternalToolError

CHUNK_SIZE = 1024 * 1024


async def ensure_dir(path: Path) -> None:
    if await aiofiles.os.path.isdir(path):
        return
    try:
        await aiofiles.os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise ExternalToolError(f"failed to create local folder {path}: {e}")


async def copy_file(src: Path, dst: Path) -> None:
    try:
        async with aiofiles.open(src, "rb") as in_file, aiofiles.open(dst, "wb") as out_file:
            while chunk := await in_file.read(CHUNK_SIZE):
                await out_file.write(chunk)
    except OSError as e:
        raise ExternalToolError(f"failed to copy {src} to {dst}: {e}")


async def read_text(path: Path) -> str:
    """Read `path` keeping line endings and undecodable bytes as they are."""
    try:
        async with aiofiles.open(
            path, "r", encoding="utf-8", errors="surrogateescape", newline=""
        ) as f:
            return await f.read()
    except (OSError, UnicodeError) as e:
        raise ExternalToolError(f"failed to read {path}: {e}")


async def write_file(content: str, dst: Path) -> None:
    """Overwrite `dst` with `content`."""
    try:
        async with aiofiles.open(
            dst, "w", encoding="utf-8", errors="surrogateescape", newline=""
        ) as f:
            await f.write(content)
    except (OSError, UnicodeError) as e:
        raise ExternalToolError(f"failed to write data to {dst}: {e}")


async def remove_dir(path: Path) -> bool:
    """Remove `path` recursively. Returns False when there was nothing to remove."""
    if not await aiofiles.os.path.isdir(path):
        return False
    try:
        await asyncio.to_thread(shutil.rmtree, path)
    except OSError as e:
        raise ExternalToolError(f"failed delete local folder {path}: {e}")
    return True
