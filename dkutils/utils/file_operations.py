"""
Filesystem convenience wrappers.

Every operation exists in a blocking form and an ``_async`` coroutine form.
Nothing here retries or swallows errors: invalid arguments raise ValueError,
filesystem problems raise the matching OSError subclass.
"""

import asyncio
import logging
import os
import shutil
from pathlib import Path
from typing import Iterable, List, Optional, Union

import aiofiles
import aiofiles.os

from ..config import get_settings
from .common_utils import is_empty
from .progress_utils import ProgressAggregator, ProgressListener, format_bytes

PathLike = Union[str, os.PathLike]


def _require_path(path: Optional[PathLike], label: str = "File path") -> Path:
    if path is None or is_empty(os.fspath(path)):
        raise ValueError(f"{label} cannot be null or empty")
    return Path(path)


def _require_sources(source_file_paths: Optional[Iterable[PathLike]]) -> List[Path]:
    if source_file_paths is None:
        raise ValueError("Source file paths cannot be null")
    return [_require_path(path, "Source file path") for path in source_file_paths]


def _strip_line_end(line: str) -> str:
    return line[:-1] if line.endswith("\n") else line


def _file_length(path: Path) -> int:
    # Missing or non-regular files count as zero bytes
    return path.stat().st_size if path.is_file() else 0


def _require_distinct(source: Path, destination: Path) -> None:
    # Opening the destination for writing would truncate the source
    if destination.exists() and os.path.samefile(source, destination):
        raise shutil.SameFileError(f"Source and destination are the same file: {source}")


async def _require_distinct_async(source: Path, destination: Path) -> None:
    if await aiofiles.os.path.exists(destination) and await aiofiles.os.path.samefile(source, destination):
        raise shutil.SameFileError(f"Source and destination are the same file: {source}")


# ===== Path predicates =====

def is_file_exists(file_path: PathLike) -> bool:
    return _require_path(file_path).is_file()


def is_file_not_exists(file_path: PathLike) -> bool:
    return not is_file_exists(file_path)


def is_directory_exists(dir_path: PathLike) -> bool:
    return _require_path(dir_path, "Directory path").is_dir()


def is_directory_not_exists(dir_path: PathLike) -> bool:
    return not is_directory_exists(dir_path)


def can_read_file(file_path: PathLike) -> bool:
    path = _require_path(file_path)
    return path.exists() and os.access(path, os.R_OK)


def can_read_directory(dir_path: PathLike) -> bool:
    path = _require_path(dir_path, "Directory path")
    return path.is_dir() and os.access(path, os.R_OK)


def can_write_file(file_path: PathLike) -> bool:
    path = _require_path(file_path)
    return path.exists() and os.access(path, os.W_OK)


# ===== Creation =====

def create_directory(dir_path: PathLike) -> Path:
    """Create a directory and any missing parents; an existing directory is returned as is."""
    directory = _require_path(dir_path, "Directory path")
    if directory.exists():
        if not directory.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {dir_path}")
        return directory

    directory.mkdir(parents=True, exist_ok=True)
    logging.debug(f"Created directory: {directory}")
    return directory


def create_file(file_path: PathLike) -> Path:
    """Create an empty file and any missing parent directories; an existing file is returned as is."""
    file = _require_path(file_path)
    if file.exists():
        if not file.is_file():
            raise IsADirectoryError(f"Path exists but is not a file: {file_path}")
        return file

    file.parent.mkdir(parents=True, exist_ok=True)
    file.touch(exist_ok=False)
    logging.debug(f"Created file: {file}")
    return file


# ===== Content I/O =====

def _check_readable(file_path: PathLike) -> Path:
    path = _require_path(file_path)
    if is_file_not_exists(path):
        raise FileNotFoundError(f"File does not exist: {file_path}")
    if not can_read_file(path):
        raise PermissionError(f"Cannot read file: {file_path}")
    return path


def read_string_from_file(file_path: PathLike) -> str:
    """Read a text file; every line is terminated with os.linesep."""
    path = _check_readable(file_path)
    with open(path, "r", encoding="utf-8") as handle:
        return "".join(_strip_line_end(line) + os.linesep for line in handle)


def read_lines_from_file(file_path: PathLike) -> List[str]:
    path = _check_readable(file_path)
    with open(path, "r", encoding="utf-8") as handle:
        return [_strip_line_end(line) for line in handle]


def write_string_to_file(file_path: PathLike, content: str) -> Path:
    """Overwrite the file with content, creating parent directories when missing."""
    path = _require_path(file_path)
    if is_empty(content):
        raise ValueError("Content cannot be null or empty")
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.exists() and not os.access(path, os.W_OK):
        raise PermissionError(f"Cannot write to file: {file_path}")

    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(content)
    return path


# ===== Deletion =====

def delete_file(file_path: PathLike) -> None:
    path = _require_path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File does not exist: {file_path}")
    if path.is_dir():
        path.rmdir()
    else:
        path.unlink()
    logging.debug(f"Deleted: {path}")


def delete_directory_recursively(directory: Optional[PathLike]) -> None:
    """Delete a file or a whole directory tree; None or a missing path is a no-op."""
    if directory is None:
        return
    path = Path(directory)
    if not path.exists():
        return
    if path.is_dir():
        shutil.rmtree(path)
    else:
        path.unlink()
    logging.debug(f"Deleted recursively: {path}")


# ===== Copy / move =====

def copy_file_with_progress(
    source_path: PathLike,
    destination_path: PathLike,
    listener: Optional[ProgressListener] = None,
    chunk_size: Optional[int] = None,
) -> int:
    """
    Stream source to destination in fixed-size chunks.

    The total is the source size at the start of the copy. After each chunk the
    listener, if any, receives (bytes copied so far, total). A failure part way
    leaves a partially written destination behind.

    Returns:
        Number of bytes written
    """
    source = _require_path(source_path, "Source file path")
    destination = _require_path(destination_path, "Destination file path")
    chunk_size = chunk_size or get_settings().chunk_size_bytes

    total_size = source.stat().st_size
    _require_distinct(source, destination)
    bytes_copied = 0

    logging.debug(f"Copying {source} -> {destination} ({format_bytes(total_size)})")
    with open(source, "rb") as src, open(destination, "wb") as dst:
        while True:
            chunk = src.read(chunk_size)
            if not chunk:
                break
            dst.write(chunk)
            bytes_copied += len(chunk)
            if listener is not None:
                listener(bytes_copied, total_size)

    logging.debug(f"Copy completed: {destination} ({bytes_copied} bytes)")
    return bytes_copied


def move_file_with_progress(
    source_path: PathLike,
    destination_path: PathLike,
    listener: Optional[ProgressListener] = None,
    chunk_size: Optional[int] = None,
) -> int:
    """Copy with progress, then delete the source. A failed delete keeps the copy."""
    bytes_copied = copy_file_with_progress(source_path, destination_path, listener, chunk_size)
    Path(source_path).unlink()
    logging.debug(f"Source removed after move: {source_path}")
    return bytes_copied


def calculate_directory_size(directory: Optional[PathLike]) -> int:
    if directory is None:
        return 0
    path = Path(directory)
    if not path.exists():
        return 0
    if path.is_file():
        return path.stat().st_size
    return sum(calculate_directory_size(child) for child in path.iterdir())


def copy_files(
    source_file_paths: Iterable[PathLike],
    destination_dir_path: PathLike,
    listener: Optional[ProgressListener] = None,
) -> List[Path]:
    """
    Copy each source file into one destination directory, keeping only the base name.

    Files are processed in order. The listener sees the running total across
    the whole batch against the combined source size taken before the first
    copy. The first error aborts the remaining files.
    """
    destination_dir = _require_path(destination_dir_path, "Destination directory path")
    sources = _require_sources(source_file_paths)
    directory = create_directory(destination_dir)

    aggregator = ProgressAggregator(sum(_file_length(s) for s in sources), listener)
    copied = []
    for source in sources:
        destination = directory / source.name
        copy_file_with_progress(source, destination, aggregator.listener_for_file())
        copied.append(destination)
    return copied


def move_files(
    source_file_paths: Iterable[PathLike],
    destination_dir_path: PathLike,
    listener: Optional[ProgressListener] = None,
) -> List[Path]:
    """Same as copy_files, deleting each source right after it has been copied."""
    destination_dir = _require_path(destination_dir_path, "Destination directory path")
    sources = _require_sources(source_file_paths)
    directory = create_directory(destination_dir)

    aggregator = ProgressAggregator(sum(_file_length(s) for s in sources), listener)
    moved = []
    for source in sources:
        destination = directory / source.name
        move_file_with_progress(source, destination, aggregator.listener_for_file())
        moved.append(destination)
    return moved


# ===== Async mirrors =====

async def is_file_exists_async(file_path: PathLike) -> bool:
    return await aiofiles.os.path.isfile(_require_path(file_path))


async def is_file_not_exists_async(file_path: PathLike) -> bool:
    return not await is_file_exists_async(file_path)


async def is_directory_exists_async(dir_path: PathLike) -> bool:
    return await aiofiles.os.path.isdir(_require_path(dir_path, "Directory path"))


async def is_directory_not_exists_async(dir_path: PathLike) -> bool:
    return not await is_directory_exists_async(dir_path)


async def can_read_file_async(file_path: PathLike) -> bool:
    path = _require_path(file_path)
    return await aiofiles.os.path.exists(path) and await aiofiles.os.access(path, os.R_OK)


async def can_read_directory_async(dir_path: PathLike) -> bool:
    path = _require_path(dir_path, "Directory path")
    return await aiofiles.os.path.isdir(path) and await aiofiles.os.access(path, os.R_OK)


async def can_write_file_async(file_path: PathLike) -> bool:
    path = _require_path(file_path)
    return await aiofiles.os.path.exists(path) and await aiofiles.os.access(path, os.W_OK)


async def create_directory_async(dir_path: PathLike) -> Path:
    directory = _require_path(dir_path, "Directory path")
    if await aiofiles.os.path.exists(directory):
        if not await aiofiles.os.path.isdir(directory):
            raise NotADirectoryError(f"Path exists but is not a directory: {dir_path}")
        return directory

    await aiofiles.os.makedirs(directory, exist_ok=True)
    logging.debug(f"Created directory: {directory}")
    return directory


async def create_file_async(file_path: PathLike) -> Path:
    file = _require_path(file_path)
    if await aiofiles.os.path.exists(file):
        if not await aiofiles.os.path.isfile(file):
            raise IsADirectoryError(f"Path exists but is not a file: {file_path}")
        return file

    await aiofiles.os.makedirs(file.parent, exist_ok=True)
    async with aiofiles.open(file, "x"):
        pass
    logging.debug(f"Created file: {file}")
    return file


async def _check_readable_async(file_path: PathLike) -> Path:
    path = _require_path(file_path)
    if not await is_file_exists_async(path):
        raise FileNotFoundError(f"File does not exist: {file_path}")
    if not await can_read_file_async(path):
        raise PermissionError(f"Cannot read file: {file_path}")
    return path


async def read_string_from_file_async(file_path: PathLike) -> str:
    path = await _check_readable_async(file_path)
    parts = []
    async with aiofiles.open(path, "r", encoding="utf-8") as handle:
        async for line in handle:
            parts.append(_strip_line_end(line) + os.linesep)
    return "".join(parts)


async def read_lines_from_file_async(file_path: PathLike) -> List[str]:
    path = await _check_readable_async(file_path)
    async with aiofiles.open(path, "r", encoding="utf-8") as handle:
        return [_strip_line_end(line) async for line in handle]


async def write_string_to_file_async(file_path: PathLike, content: str) -> Path:
    path = _require_path(file_path)
    if is_empty(content):
        raise ValueError("Content cannot be null or empty")
    await aiofiles.os.makedirs(path.parent, exist_ok=True)
    if await aiofiles.os.path.exists(path) and not await aiofiles.os.access(path, os.W_OK):
        raise PermissionError(f"Cannot write to file: {file_path}")

    async with aiofiles.open(path, "w", encoding="utf-8", newline="") as handle:
        await handle.write(content)
    return path


async def delete_file_async(file_path: PathLike) -> None:
    path = _require_path(file_path)
    if not await aiofiles.os.path.exists(path):
        raise FileNotFoundError(f"File does not exist: {file_path}")
    if await aiofiles.os.path.isdir(path):
        await aiofiles.os.rmdir(path)
    else:
        await aiofiles.os.remove(path)
    logging.debug(f"Deleted: {path}")


async def delete_directory_recursively_async(directory: Optional[PathLike]) -> None:
    await asyncio.to_thread(delete_directory_recursively, directory)


async def copy_file_async(
    source_path: PathLike,
    destination_path: PathLike,
    listener: Optional[ProgressListener] = None,
    chunk_size: Optional[int] = None,
) -> int:
    source = _require_path(source_path, "Source file path")
    destination = _require_path(destination_path, "Destination file path")
    chunk_size = chunk_size or get_settings().chunk_size_bytes

    total_size = await aiofiles.os.path.getsize(source)
    await _require_distinct_async(source, destination)
    bytes_copied = 0

    logging.debug(f"Copying {source} -> {destination} ({format_bytes(total_size)})")
    async with aiofiles.open(source, "rb") as src, aiofiles.open(destination, "wb") as dst:
        while True:
            chunk = await src.read(chunk_size)
            if not chunk:
                break
            await dst.write(chunk)
            bytes_copied += len(chunk)
            if listener is not None:
                listener(bytes_copied, total_size)

    logging.debug(f"Copy completed: {destination} ({bytes_copied} bytes)")
    return bytes_copied


async def move_file_async(
    source_path: PathLike,
    destination_path: PathLike,
    listener: Optional[ProgressListener] = None,
    chunk_size: Optional[int] = None,
) -> int:
    bytes_copied = await copy_file_async(source_path, destination_path, listener, chunk_size)
    await aiofiles.os.remove(source_path)
    logging.debug(f"Source removed after move: {source_path}")
    return bytes_copied


async def calculate_directory_size_async(directory: Optional[PathLike]) -> int:
    return await asyncio.to_thread(calculate_directory_size, directory)


async def _total_size_async(sources: List[Path]) -> int:
    total = 0
    for source in sources:
        if await aiofiles.os.path.isfile(source):
            total += await aiofiles.os.path.getsize(source)
    return total


async def copy_files_async(
    source_file_paths: Iterable[PathLike],
    destination_dir_path: PathLike,
    listener: Optional[ProgressListener] = None,
) -> List[Path]:
    destination_dir = _require_path(destination_dir_path, "Destination directory path")
    sources = _require_sources(source_file_paths)
    directory = await create_directory_async(destination_dir)

    aggregator = ProgressAggregator(await _total_size_async(sources), listener)
    copied = []
    for source in sources:
        destination = directory / source.name
        await copy_file_async(source, destination, aggregator.listener_for_file())
        copied.append(destination)
    return copied


async def move_files_async(
    source_file_paths: Iterable[PathLike],
    destination_dir_path: PathLike,
    listener: Optional[ProgressListener] = None,
) -> List[Path]:
    destination_dir = _require_path(destination_dir_path, "Destination directory path")
    sources = _require_sources(source_file_paths)
    directory = await create_directory_async(destination_dir)

    aggregator = ProgressAggregator(await _total_size_async(sources), listener)
    moved = []
    for source in sources:
        destination = directory / source.name
        await move_file_async(source, destination, aggregator.listener_for_file())
        moved.append(destination)
    return moved
