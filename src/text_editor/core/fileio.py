"""Whole-file text I/O run off the event loop.

Reads and writes use ``newline=""`` so line endings are neither translated
on read nor re-introduced on write. Bytes that are not valid UTF-8 are read
as U+FFFD replacement characters instead of failing the read.
Writes overwrite the file in place; they are not atomic.
"""

import asyncio
from pathlib import Path

ENCODING = "utf-8"


def _read(path: Path) -> str:
    with open(path, "r", encoding=ENCODING, errors="replace", newline="") as f:
        return f.read()


def _write(path: Path, content: str) -> None:
    with open(path, "w", encoding=ENCODING, newline="") as f:
        f.write(content)


async def read_text(path: Path) -> str:
    """Read ``path`` as UTF-8 text (undecodable bytes replaced), line endings untouched."""
    return await asyncio.to_thread(_read, path)


async def write_text(path: Path, content: str) -> None:
    """Overwrite ``path`` with ``content`` verbatim."""
    await asyncio.to_thread(_write, path, content)
