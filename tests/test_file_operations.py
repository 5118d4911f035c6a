"""
Tests for file_operations utilities.

Covers the blocking functions and their async mirrors against real files in
tmp_path.
"""

import os
import shutil
from pathlib import Path

import aiofiles.os
import pytest

from dkutils.utils.file_operations import (
    calculate_directory_size,
    calculate_directory_size_async,
    can_read_directory,
    can_read_file,
    can_write_file,
    copy_file_async,
    copy_file_with_progress,
    copy_files,
    copy_files_async,
    create_directory,
    create_directory_async,
    create_file,
    create_file_async,
    delete_directory_recursively,
    delete_directory_recursively_async,
    delete_file,
    delete_file_async,
    is_directory_exists,
    is_directory_not_exists,
    is_directory_not_exists_async,
    is_file_exists,
    is_file_exists_async,
    is_file_not_exists,
    is_file_not_exists_async,
    move_file_async,
    move_file_with_progress,
    move_files,
    move_files_async,
    read_lines_from_file,
    read_lines_from_file_async,
    read_string_from_file,
    read_string_from_file_async,
    write_string_to_file,
    write_string_to_file_async,
)


class TestPathPredicates:
    """Test existence and access predicates."""

    def test_existing_file(self, tmp_path):
        path = tmp_path / "a.txt"
        path.write_text("x")

        assert is_file_exists(path) is True
        assert is_file_not_exists(path) is False
        assert can_read_file(path) is True
        assert can_write_file(path) is True

    def test_directory_is_not_a_file(self, tmp_path):
        assert is_file_exists(tmp_path) is False
        assert is_directory_exists(tmp_path) is True
        assert is_directory_not_exists(tmp_path) is False
        assert can_read_directory(tmp_path) is True

    def test_missing_path(self, tmp_path):
        missing = tmp_path / "missing"

        assert is_file_exists(missing) is False
        assert is_directory_exists(missing) is False
        assert can_read_file(missing) is False
        assert can_write_file(missing) is False

    def test_string_paths_accepted(self, tmp_path):
        assert is_directory_exists(str(tmp_path)) is True

    @pytest.mark.parametrize("bad_path", [None, ""])
    def test_null_or_empty_path_rejected(self, bad_path):
        with pytest.raises(ValueError, match="cannot be null or empty"):
            is_file_exists(bad_path)


class TestCreateDirectory:
    """Test create_directory function."""

    def test_creates_nested_directories(self, tmp_path):
        target = tmp_path / "a" / "b" / "c"

        result = create_directory(target)

        assert result == target
        assert target.is_dir()

    def test_existing_directory_is_returned(self, tmp_path):
        assert create_directory(tmp_path) == tmp_path

    def test_existing_file_raises(self, tmp_path):
        path = tmp_path / "file.txt"
        path.write_text("x")

        with pytest.raises(NotADirectoryError):
            create_directory(path)


class TestCreateFile:
    """Test create_file function."""

    def test_creates_file_and_parents(self, tmp_path):
        target = tmp_path / "nested" / "new.txt"

        result = create_file(target)

        assert result == target
        assert target.is_file()
        assert target.stat().st_size == 0

    def test_existing_file_untouched(self, tmp_path):
        target = tmp_path / "keep.txt"
        target.write_text("content")

        create_file(target)

        assert target.read_text() == "content"

    def test_existing_directory_raises(self, tmp_path):
        with pytest.raises(IsADirectoryError):
            create_file(tmp_path)


class TestReadAndWrite:
    """Test reading and writing text files."""

    def test_read_string_appends_line_separator(self, tmp_path):
        path = tmp_path / "lines.txt"
        path.write_text("first\nsecond")

        assert read_string_from_file(path) == f"first{os.linesep}second{os.linesep}"

    def test_read_lines(self, tmp_path):
        path = tmp_path / "lines.txt"
        path.write_text("first\nsecond\n")

        assert read_lines_from_file(path) == ["first", "second"]

    def test_read_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_string_from_file(tmp_path / "missing.txt")

    def test_write_creates_parents_and_overwrites(self, tmp_path):
        path = tmp_path / "out" / "data.txt"

        write_string_to_file(path, "a much longer first version")
        result = write_string_to_file(path, "short")

        assert result == path
        assert path.read_text() == "short"

    def test_write_preserves_content_exactly(self, tmp_path):
        path = tmp_path / "raw.txt"

        write_string_to_file(path, "a\r\nb\n")

        assert path.read_bytes() == b"a\r\nb\n"

    @pytest.mark.parametrize("content", [None, ""])
    def test_write_rejects_empty_content(self, tmp_path, content):
        with pytest.raises(ValueError, match="Content cannot be null or empty"):
            write_string_to_file(tmp_path / "x.txt", content)

    def test_write_rejects_empty_path(self):
        with pytest.raises(ValueError):
            write_string_to_file("", "content")


class TestDelete:
    """Test delete_file and delete_directory_recursively."""

    def test_delete_file(self, tmp_path):
        path = tmp_path / "gone.txt"
        path.write_text("x")

        delete_file(path)

        assert not path.exists()

    def test_delete_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            delete_file(tmp_path / "missing.txt")

    def test_delete_tree(self, tmp_path):
        root = tmp_path / "tree"
        (root / "sub").mkdir(parents=True)
        (root / "sub" / "file.txt").write_text("x")

        delete_directory_recursively(root)

        assert not root.exists()

    def test_delete_tree_missing_or_none_is_noop(self, tmp_path):
        delete_directory_recursively(None)
        delete_directory_recursively(tmp_path / "missing")


class TestCopyFileWithProgress:
    """Test copy_file_with_progress function."""

    def test_copies_content_in_chunks(self, sample_file, tmp_path):
        destination = tmp_path / "copy.bin"
        calls = []

        copied = copy_file_with_progress(sample_file, destination, lambda done, total: calls.append((done, total)))

        assert copied == 20480
        assert destination.read_bytes() == sample_file.read_bytes()
        assert calls == [(8192, 20480), (16384, 20480), (20480, 20480)]

    def test_custom_chunk_size(self, sample_file, tmp_path):
        calls = []

        copy_file_with_progress(sample_file, tmp_path / "copy.bin", lambda d, t: calls.append(d), chunk_size=10240)

        assert calls == [10240, 20480]

    def test_chunk_size_from_settings(self, sample_file, tmp_path, monkeypatch):
        from dkutils.config import reset_settings

        monkeypatch.setenv("DKUTILS_CHUNK_SIZE_KB", "4")
        reset_settings()
        calls = []

        copy_file_with_progress(sample_file, tmp_path / "copy.bin", lambda d, t: calls.append(d))

        assert len(calls) == 5

    def test_empty_file_never_calls_listener(self, tmp_path):
        source = tmp_path / "empty.bin"
        source.write_bytes(b"")
        calls = []

        copied = copy_file_with_progress(source, tmp_path / "out.bin", lambda d, t: calls.append(d))

        assert copied == 0
        assert calls == []
        assert (tmp_path / "out.bin").exists()

    def test_without_listener(self, sample_file, tmp_path):
        assert copy_file_with_progress(sample_file, tmp_path / "copy.bin") == 20480

    def test_missing_source_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            copy_file_with_progress(tmp_path / "missing.bin", tmp_path / "out.bin")


class TestMoveFileWithProgress:
    """Test move_file_with_progress function."""

    def test_moves_file(self, sample_file, tmp_path):
        original = sample_file.read_bytes()
        destination = tmp_path / "moved.bin"

        moved = move_file_with_progress(sample_file, destination)

        assert moved == 20480
        assert not sample_file.exists()
        assert destination.read_bytes() == original


class TestCalculateDirectorySize:
    """Test calculate_directory_size function."""

    def test_sums_nested_files(self, tmp_path):
        (tmp_path / "a").mkdir()
        (tmp_path / "a" / "one.bin").write_bytes(b"x" * 100)
        (tmp_path / "two.bin").write_bytes(b"x" * 50)

        assert calculate_directory_size(tmp_path) == 150

    def test_single_file(self, tmp_path):
        path = tmp_path / "one.bin"
        path.write_bytes(b"x" * 7)

        assert calculate_directory_size(path) == 7

    def test_none_and_missing_are_zero(self, tmp_path):
        assert calculate_directory_size(None) == 0
        assert calculate_directory_size(tmp_path / "missing") == 0


class TestCopyFiles:
    """Test batch copy and move."""

    def _sources(self, tmp_path):
        source_dir = tmp_path / "in"
        source_dir.mkdir()
        small = source_dir / "small.txt"
        small.write_bytes(b"x" * 10)
        large = source_dir / "large.bin"
        large.write_bytes(b"y" * 20000)
        return [small, large]

    def test_copies_into_destination_by_name(self, tmp_path):
        sources = self._sources(tmp_path)
        destination = tmp_path / "out" / "nested"

        result = copy_files(sources, destination)

        assert result == [destination / "small.txt", destination / "large.bin"]
        assert (destination / "large.bin").stat().st_size == 20000
        assert all(source.exists() for source in sources)

    def test_progress_is_cumulative_across_batch(self, tmp_path):
        sources = self._sources(tmp_path)
        calls = []

        copy_files(sources, tmp_path / "out", lambda done, total: calls.append((done, total)))

        totals = {total for _, total in calls}
        done_values = [done for done, _ in calls]
        assert totals == {20010}
        assert done_values == sorted(done_values)
        assert done_values[0] == 10
        assert done_values[-1] == 20010

    def test_move_files_removes_sources(self, tmp_path):
        sources = self._sources(tmp_path)
        calls = []

        result = move_files(sources, tmp_path / "out", lambda done, total: calls.append(done))

        assert [path.name for path in result] == ["small.txt", "large.bin"]
        assert not any(source.exists() for source in sources)
        assert calls[-1] == 20010

    @pytest.mark.parametrize("bad_source", [None, ""])
    def test_invalid_source_rejected_before_any_work(self, tmp_path, bad_source):
        sources = self._sources(tmp_path)
        destination = tmp_path / "out"

        with pytest.raises(ValueError):
            copy_files([sources[0], bad_source], destination)

        assert not destination.exists()

    def test_none_source_list_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            move_files(None, tmp_path / "out")

    @pytest.mark.parametrize("bad_destination", [None, ""])
    def test_invalid_destination_rejected(self, tmp_path, bad_destination):
        with pytest.raises(ValueError):
            copy_files(self._sources(tmp_path), bad_destination)

    def test_missing_source_aborts_remaining(self, tmp_path):
        sources = self._sources(tmp_path)
        missing = tmp_path / "in" / "missing.bin"

        with pytest.raises(FileNotFoundError):
            copy_files([sources[0], missing, sources[1]], tmp_path / "out")

        assert (tmp_path / "out" / "small.txt").exists()
        assert not (tmp_path / "out" / "large.bin").exists()


class TestAsyncOperations:
    """Test the coroutine mirrors."""

    @pytest.mark.asyncio
    async def test_create_and_check(self, tmp_path):
        target = tmp_path / "async" / "file.txt"

        await create_file_async(target)

        assert await is_file_exists_async(target) is True
        assert (await create_directory_async(tmp_path / "async")) == tmp_path / "async"

    @pytest.mark.asyncio
    async def test_create_directory_over_file_raises(self, tmp_path):
        path = tmp_path / "file.txt"
        path.write_text("x")

        with pytest.raises(NotADirectoryError):
            await create_directory_async(path)

    @pytest.mark.asyncio
    async def test_write_then_read(self, tmp_path):
        path = tmp_path / "nested" / "text.txt"

        await write_string_to_file_async(path, "one\ntwo")

        assert await read_lines_from_file_async(path) == ["one", "two"]
        assert await read_string_from_file_async(path) == f"one{os.linesep}two{os.linesep}"

    @pytest.mark.asyncio
    async def test_write_rejects_empty_content(self, tmp_path):
        with pytest.raises(ValueError):
            await write_string_to_file_async(tmp_path / "x.txt", "")

    @pytest.mark.asyncio
    async def test_read_missing_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await read_string_from_file_async(tmp_path / "missing.txt")

    @pytest.mark.asyncio
    async def test_delete(self, tmp_path):
        path = tmp_path / "gone.txt"
        path.write_text("x")
        tree = tmp_path / "tree" / "sub"
        tree.mkdir(parents=True)

        await delete_file_async(path)
        await delete_directory_recursively_async(tmp_path / "tree")

        assert not path.exists()
        assert not (tmp_path / "tree").exists()
        with pytest.raises(FileNotFoundError):
            await delete_file_async(path)

    @pytest.mark.asyncio
    async def test_copy_with_progress(self, sample_file, tmp_path):
        destination = tmp_path / "copy.bin"
        calls = []

        copied = await copy_file_async(sample_file, destination, lambda d, t: calls.append((d, t)))

        assert copied == 20480
        assert destination.read_bytes() == sample_file.read_bytes()
        assert calls[-1] == (20480, 20480)

    @pytest.mark.asyncio
    async def test_move(self, sample_file, tmp_path):
        destination = tmp_path / "moved.bin"

        await move_file_async(sample_file, destination)

        assert not sample_file.exists()
        assert destination.stat().st_size == 20480

    @pytest.mark.asyncio
    async def test_directory_size(self, sample_file):
        assert await calculate_directory_size_async(sample_file.parent) == 20480

    @pytest.mark.asyncio
    async def test_batch_copy_and_move(self, sample_file, tmp_path):
        other = sample_file.parent / "other.txt"
        other.write_bytes(b"z" * 100)
        calls = []

        copied = await copy_files_async([sample_file, other], tmp_path / "copies", lambda d, t: calls.append((d, t)))
        moved = await move_files_async([sample_file, other], tmp_path / "moved")

        assert [path.name for path in copied] == ["sample.bin", "other.txt"]
        assert calls[-1] == (20580, 20580)
        assert all(path.exists() for path in moved)
        assert not sample_file.exists()

    @pytest.mark.asyncio
    async def test_batch_rejects_invalid_source(self, tmp_path):
        with pytest.raises(ValueError):
            await copy_files_async([None], tmp_path / "out")
        assert not (tmp_path / "out").exists()


def _deny_access(*args, **kwargs):
    return False


async def _deny_access_async(*args, **kwargs):
    return False


class TestAccessDenied:
    """Test PermissionError branches; access checks are patched since tests may run as root."""

    def test_read_unreadable_file(self, tmp_path, monkeypatch):
        path = tmp_path / "secret.txt"
        path.write_text("x")
        monkeypatch.setattr(os, "access", _deny_access)

        with pytest.raises(PermissionError):
            read_string_from_file(path)
        with pytest.raises(PermissionError):
            read_lines_from_file(path)

    def test_write_unwritable_file(self, tmp_path, monkeypatch):
        path = tmp_path / "locked.txt"
        path.write_text("original")
        monkeypatch.setattr(os, "access", _deny_access)

        with pytest.raises(PermissionError):
            write_string_to_file(path, "new content")

        assert path.read_text() == "original"

    def test_write_new_file_skips_access_check(self, tmp_path, monkeypatch):
        monkeypatch.setattr(os, "access", _deny_access)

        write_string_to_file(tmp_path / "fresh.txt", "content")

        assert (tmp_path / "fresh.txt").read_text() == "content"

    @pytest.mark.asyncio
    async def test_async_read_unreadable_file(self, tmp_path, monkeypatch):
        path = tmp_path / "secret.txt"
        path.write_text("x")
        monkeypatch.setattr(aiofiles.os, "access", _deny_access_async)

        with pytest.raises(PermissionError):
            await read_string_from_file_async(path)
        with pytest.raises(PermissionError):
            await read_lines_from_file_async(path)

    @pytest.mark.asyncio
    async def test_async_write_unwritable_file(self, tmp_path, monkeypatch):
        path = tmp_path / "locked.txt"
        path.write_text("original")
        monkeypatch.setattr(aiofiles.os, "access", _deny_access_async)

        with pytest.raises(PermissionError):
            await write_string_to_file_async(path, "new content")

        assert path.read_text() == "original"


class TestMoveSourceDeleteFails:
    """Test that a failed source delete keeps the copy and propagates."""

    def test_sync_move(self, sample_file, tmp_path, monkeypatch):
        original = sample_file.read_bytes()
        destination = tmp_path / "moved.bin"

        def refuse_unlink(self, *args, **kwargs):
            raise PermissionError(f"Cannot delete {self}")

        monkeypatch.setattr(Path, "unlink", refuse_unlink)

        with pytest.raises(PermissionError):
            move_file_with_progress(sample_file, destination)

        assert sample_file.read_bytes() == original
        assert destination.read_bytes() == original

    @pytest.mark.asyncio
    async def test_async_move(self, sample_file, tmp_path, monkeypatch):
        destination = tmp_path / "moved.bin"

        async def refuse_remove(*args, **kwargs):
            raise PermissionError("Cannot delete source")

        monkeypatch.setattr(aiofiles.os, "remove", refuse_remove)

        with pytest.raises(PermissionError):
            await move_file_async(sample_file, destination)

        assert sample_file.exists()
        assert destination.stat().st_size == 20480


class TestSameSourceAndDestination:
    """Test copying or moving a file onto itself."""

    def test_copy_onto_itself(self, sample_file):
        original = sample_file.read_bytes()

        with pytest.raises(shutil.SameFileError):
            copy_file_with_progress(sample_file, sample_file)

        assert sample_file.read_bytes() == original

    def test_same_file_error_is_os_error(self, sample_file):
        with pytest.raises(OSError):
            move_file_with_progress(sample_file, str(sample_file))

        assert sample_file.stat().st_size == 20480

    def test_move_files_into_own_directory(self, sample_file):
        original = sample_file.read_bytes()

        with pytest.raises(shutil.SameFileError):
            move_files([sample_file], sample_file.parent)

        assert sample_file.read_bytes() == original

    @pytest.mark.asyncio
    async def test_async_copy_onto_itself(self, sample_file):
        with pytest.raises(shutil.SameFileError):
            await copy_file_async(sample_file, sample_file)

        assert sample_file.stat().st_size == 20480

    @pytest.mark.asyncio
    async def test_async_move_files_into_own_directory(self, sample_file):
        original = sample_file.read_bytes()

        with pytest.raises(shutil.SameFileError):
            await move_files_async([sample_file], sample_file.parent)

        assert sample_file.read_bytes() == original


class TestAsyncNegatedPredicates:
    """Test is_file_not_exists_async and is_directory_not_exists_async."""

    @pytest.mark.asyncio
    async def test_missing_path(self, tmp_path):
        assert await is_file_not_exists_async(tmp_path / "missing") is True
        assert await is_directory_not_exists_async(tmp_path / "missing") is True

    @pytest.mark.asyncio
    async def test_existing_paths(self, sample_file):
        assert await is_file_not_exists_async(sample_file) is False
        assert await is_directory_not_exists_async(sample_file.parent) is False
        assert await is_directory_not_exists_async(sample_file) is True

    @pytest.mark.asyncio
    async def test_empty_path_rejected(self):
        with pytest.raises(ValueError):
            await is_file_not_exists_async("")
