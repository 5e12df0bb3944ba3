"""Tests for digest, MIME detection, compression and discovery operations."""

import gzip
import hashlib

import pytest

from assetprep.operations import (
    FALLBACK_MIME,
    compute_md5,
    detect_mime,
    guess_mime,
    gzip_file,
    list_files,
    reserve_staging_path,
)


class TestComputeMD5:
    """Test streamed MD5 hashing."""

    def test_matches_hashlib(self, tmp_path):
        """Digest equals hashlib over the whole content."""
        path = tmp_path / "blob.bin"
        content = b"x" * 200_000
        path.write_bytes(content)

        assert compute_md5(path, chunk_size=4096) == hashlib.md5(content).hexdigest()

    def test_empty_file(self, tmp_path):
        """Empty files hash to the MD5 of nothing."""
        path = tmp_path / "empty"
        path.write_bytes(b"")

        assert compute_md5(path) == "d41d8cd98f00b204e9800998ecf8427e"

    def test_missing_file_raises(self, tmp_path):
        """Missing files raise OSError."""
        with pytest.raises(OSError):
            compute_md5(tmp_path / "missing")


class TestMimeDetection:
    """Test MIME guessing and sniffing."""

    def test_guess_by_extension(self):
        """Known extensions map to their type."""
        assert guess_mime("index.html") == "text/html"
        assert guess_mime("data.json") == "application/json"

    def test_gzip_suffix_ignored(self):
        """The .gz encoding suffix does not hide the content type."""
        assert guess_mime("LICENSE.txt.gz") == "text/plain"

    def test_unknown_extension(self):
        """Unknown names return None."""
        assert guess_mime("LICENSE") is None
        assert guess_mime(None) is None

    def test_sniff_text(self):
        """Extensionless text content is text/plain."""
        assert detect_mime("LICENSE", b"Permission is hereby granted") == "text/plain"

    def test_sniff_binary(self):
        """Binary content falls back to octet-stream."""
        assert detect_mime("blob", b"\x00\x01\x02\xff") == FALLBACK_MIME

    def test_sniff_truncated_utf8(self):
        """A multi-byte character cut at the end of the window is still text."""
        head = "café".encode("utf-8")[:-1]
        assert detect_mime("notes", head) == "text/plain"


class TestGzipFile:
    """Test deterministic gzip compression."""

    def test_roundtrip_and_determinism(self, tmp_path):
        """Output decompresses to the source and is byte-identical across runs."""
        source = tmp_path / "app.js"
        source.write_text("console.log('hi');\n" * 100)

        first = tmp_path / "out" / "one" / "app.js.gz"
        second = tmp_path / "out" / "two" / "app.js.gz"
        gzip_file(source, first)
        gzip_file(source, second)

        assert gzip.decompress(first.read_bytes()) == source.read_bytes()
        assert first.read_bytes() == second.read_bytes()

    def test_refuses_to_overwrite_source(self, tmp_path):
        """Compressing a file onto itself fails and leaves it intact."""
        source = tmp_path / "app.js"
        source.write_text("console.log('hi');\n")

        with pytest.raises(ValueError):
            gzip_file(source, source)
        assert source.read_text() == "console.log('hi');\n"


class TestReserveStagingPath:
    """Test unique staging destinations."""

    def test_mirrors_tree_and_never_repeats(self, tmp_path):
        """Each reservation is a new file under the directory of the path."""
        first = reserve_staging_path(tmp_path, "js/app.js")
        second = reserve_staging_path(tmp_path, "js/app.js")

        assert first != second
        for reserved in (first, second):
            assert reserved.parent == tmp_path / "js"
            assert reserved.name.startswith("app.js.")
            assert reserved.name.endswith(".gz")
            assert reserved.exists()


class TestListFiles:
    """Test directory discovery."""

    def test_excludes_directories_and_hidden(self, asset_tree):
        """Only regular, non-hidden files are listed with relative POSIX paths."""
        assert list_files(asset_tree) == ["a.txt", "sub/b.txt"]

    def test_include_hidden(self, asset_tree):
        """Hidden files and directories are listed on request."""
        assert list_files(asset_tree, include_hidden=True) == [
            ".git/config",
            ".hidden",
            "a.txt",
            "sub/b.txt",
        ]

    def test_missing_directory(self, tmp_path):
        """A missing root raises OSError."""
        with pytest.raises(OSError):
            list_files(tmp_path / "nope")
