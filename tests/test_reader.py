"""Tests for ContentReader text reads and caching."""

from unittest.mock import Mock

import pytest
from librarian import Librarian
from librarian import LibrarianError
from librarian import LocalFilesystem
from librarian import NotFoundError
from librarian import ReadError
from librarian import ResolvedContent


class TestReadFile:
    def test_returns_text_and_path(self, make_root):
        root = make_root("root", {"greeting.txt": "héllo wörld"})
        librarian = Librarian().add_root(root)

        result = librarian.read_file("greeting.txt")

        assert result == ResolvedContent(text="héllo wörld", path=root / "greeting.txt")

    def test_not_found_names_the_request(self, make_root):
        root = make_root("root")
        librarian = Librarian().add_root(root)

        with pytest.raises(NotFoundError) as exc_info:
            librarian.read_file("ghost.txt")

        assert exc_info.value.name == "ghost.txt"
        assert "ghost.txt" in str(exc_info.value)
        assert str(root) in str(exc_info.value)
        assert isinstance(exc_info.value, LookupError)

    def test_failed_lookup_is_not_cached(self, make_root):
        root = make_root("root")
        librarian = Librarian().add_root(root)

        with pytest.raises(NotFoundError):
            librarian.read_file("ghost.txt")
        (root / "ghost.txt").write_text("boo")

        assert librarian.read_file("ghost.txt").text == "boo"

    def test_invalid_utf8_is_read_error(self, make_root):
        root = make_root("root", {"binary.dat": b"\xff\xfe\xfa"})
        librarian = Librarian().add_root(root)

        with pytest.raises(ReadError) as exc_info:
            librarian.read_file("binary.dat")

        assert exc_info.value.path == root / "binary.dat"
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)
        assert exc_info.value.__cause__ is exc_info.value.cause

    def test_read_error_is_not_cached(self, make_root):
        root = make_root("root", {"flaky.txt": "ok"})
        filesystem = LocalFilesystem()
        real_read = filesystem.read_text
        filesystem.read_text = Mock(side_effect=[PermissionError(), real_read(root / "flaky.txt")])
        librarian = Librarian(filesystem=filesystem).add_root(root)

        with pytest.raises(ReadError, match="Permission denied"):
            librarian.read_file("flaky.txt")

        assert librarian.read_file("flaky.txt").text == "ok"
        assert filesystem.read_text.call_count == 2

    def test_directory_is_read_error(self, make_root):
        root = make_root("root", {"sub/file.txt": "x"})
        librarian = Librarian().add_root(root)

        with pytest.raises(ReadError):
            librarian.read_file("sub")

    def test_errors_share_base_class(self, make_root):
        librarian = Librarian().add_root(make_root("root"))

        with pytest.raises(LibrarianError):
            librarian.read_file("nope")


class TestContentCache:
    def test_successful_read_is_cached(self, make_root):
        root = make_root("root", {"a.txt": "first"})
        librarian = Librarian().add_root(root)
        librarian.read_file("a.txt")

        (root / "a.txt").write_text("second")

        assert librarian.read_file("a.txt").text == "first"

    def test_empty_file_is_a_cache_hit(self, make_root):
        root = make_root("root", {"empty.txt": ""})
        filesystem = LocalFilesystem()
        filesystem.read_text = Mock(wraps=filesystem.read_text)
        librarian = Librarian(filesystem=filesystem).add_root(root)

        assert librarian.read_file("empty.txt").text == ""
        assert librarian.read_file("empty.txt").text == ""
        assert filesystem.read_text.call_count == 1

    def test_cached_under_requested_name(self, make_root):
        root = make_root("root", {"a.txt": "a"})
        librarian = Librarian().add_root(root)

        librarian.read_file("a.txt")
        librarian.read_file("./a.txt")

        cache = librarian.registry.content.snapshot()
        assert set(cache) == {"a.txt", "./a.txt"}
        assert cache["a.txt"].path == cache["./a.txt"].path == root / "a.txt"


class TestReadFileAsync:
    @pytest.mark.asyncio
    async def test_reads_and_caches(self, make_root):
        root = make_root("root", {"a.txt": "async text"})
        librarian = Librarian().add_root(root)

        result = await librarian.read_file_async("a.txt")

        assert result == ResolvedContent(text="async text", path=root / "a.txt")
        assert "a.txt" in librarian.registry.content

    @pytest.mark.asyncio
    async def test_not_found_then_created(self, make_root):
        root = make_root("root")
        librarian = Librarian().add_root(root)

        with pytest.raises(NotFoundError):
            await librarian.read_file_async("ghost.txt")
        (root / "ghost.txt").write_text("boo")

        assert (await librarian.read_file_async("ghost.txt")).text == "boo"

    @pytest.mark.asyncio
    async def test_invalid_utf8(self, make_root):
        librarian = Librarian().add_root(make_root("root", {"bad.txt": b"\xc3\x28"}))

        with pytest.raises(ReadError):
            await librarian.read_file_async("bad.txt")
        assert len(librarian.registry.content) == 0

    @pytest.mark.asyncio
    async def test_cache_shared_with_sync_variant(self, make_root):
        root = make_root("root", {"a.txt": "first"})
        librarian = Librarian().add_root(root)
        librarian.read_file("a.txt")
        (root / "a.txt").write_text("second")

        assert (await librarian.read_file_async("a.txt")).text == "first"
