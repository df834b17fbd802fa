"""Tests for scratch files, atomic commits and hashing."""

import hashlib
import os
import stat
import sys
from unittest.mock import patch

import pytest

from scriptlib.core.file_io import (
    commit,
    compute_hash,
    files_identical,
    read_bytes,
    safe_rename,
    scratch_file,
    write_scratch,
)
from scriptlib.errors import CommitError, ErrorCode, TransformError


class TestComputeHash:
    """Tests for compute_hash function."""

    def test_hash_format(self):
        """Test hash output format is 'sha256:<hex>'."""
        result = compute_hash(b"hello world")
        assert result.startswith("sha256:")
        assert len(result) == 71  # "sha256:" (7 chars) + 64 hex chars

    def test_empty_bytes_hash(self):
        """Test hashing empty bytes."""
        assert compute_hash(b"") == f"sha256:{hashlib.sha256(b'').hexdigest()}"

    def test_line_endings_not_normalized(self):
        assert compute_hash(b"a\n") != compute_hash(b"a\r\n")


class TestReadBytes:
    """Tests for read_bytes."""

    def test_reads_content(self, tmp_path):
        target = tmp_path / "f.txt"
        target.write_bytes(b"data")
        assert read_bytes(str(target)) == b"data"

    def test_missing_file(self, tmp_path):
        with pytest.raises(TransformError) as exc_info:
            read_bytes(str(tmp_path / "missing.txt"))
        assert exc_info.value.error_code == ErrorCode.READ_ERROR


class TestFilesIdentical:
    """Tests for byte-for-byte comparison."""

    def test_identical(self, tmp_path):
        a = tmp_path / "a"
        b = tmp_path / "b"
        a.write_bytes(b"same\n")
        b.write_bytes(b"same\n")
        assert files_identical(str(a), str(b))

    def test_same_size_different_bytes(self, tmp_path):
        a = tmp_path / "a"
        b = tmp_path / "b"
        a.write_bytes(b"abc\n")
        b.write_bytes(b"abd\n")
        assert not files_identical(str(a), str(b))


class TestScratchFile:
    """Tests for the scratch path provider."""

    def test_created_next_to_target(self, tmp_path):
        target = tmp_path / "target.txt"
        target.write_text("x")

        with scratch_file(str(target)) as tmp:
            assert os.path.dirname(tmp) == str(tmp_path)
            assert os.path.basename(tmp).startswith(".tmp_")
            assert os.path.exists(tmp)
            assert tmp != str(target)

    def test_unique(self, tmp_path):
        target = tmp_path / "target.txt"
        with scratch_file(str(target)) as first, scratch_file(str(target)) as second:
            assert first != second

    def test_removed_on_exit(self, tmp_path):
        target = tmp_path / "target.txt"
        with scratch_file(str(target), prefix=".edit_") as tmp:
            write_scratch(tmp, b"candidate")
        assert not os.path.exists(tmp)
        assert os.listdir(tmp_path) == []

    def test_removed_on_error(self, tmp_path):
        target = tmp_path / "target.txt"
        with pytest.raises(RuntimeError):
            with scratch_file(str(target)) as tmp:
                raise RuntimeError("boom")
        assert not os.path.exists(tmp)

    def test_committed_file_kept(self, tmp_path):
        target = tmp_path / "target.txt"
        target.write_bytes(b"old")

        with scratch_file(str(target)) as tmp:
            write_scratch(tmp, b"new")
            commit(tmp, str(target))

        assert target.read_bytes() == b"new"
        assert os.listdir(tmp_path) == ["target.txt"]

    def test_unwritable_directory(self, tmp_path):
        target = tmp_path / "missing_dir" / "target.txt"
        with pytest.raises(TransformError):
            with scratch_file(str(target)):
                pass


class TestCommit:
    """Tests for commit."""

    def test_replaces_target(self, tmp_path):
        target = tmp_path / "target.txt"
        staged = tmp_path / "staged"
        target.write_bytes(b"old")
        staged.write_bytes(b"new")

        commit(str(staged), str(target))

        assert target.read_bytes() == b"new"
        assert not staged.exists()

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
    def test_preserves_mode(self, tmp_path):
        target = tmp_path / "script.sh"
        target.write_bytes(b"old")
        target.chmod(0o755)

        with scratch_file(str(target)) as tmp:
            write_scratch(tmp, b"new")
            commit(tmp, str(target))

        assert stat.S_IMODE(target.stat().st_mode) == 0o755

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
    def test_mode_not_preserved_when_disabled(self, tmp_path):
        target = tmp_path / "script.sh"
        target.write_bytes(b"old")
        target.chmod(0o755)

        with scratch_file(str(target)) as tmp:
            write_scratch(tmp, b"new")
            commit(tmp, str(target), preserve_mode=False)

        assert stat.S_IMODE(target.stat().st_mode) == 0o600

    def test_failure_leaves_target_untouched(self, tmp_path):
        target = tmp_path / "target.txt"
        target.write_bytes(b"old")

        with scratch_file(str(target)) as tmp:
            write_scratch(tmp, b"new")
            with patch("scriptlib.core.file_io.os.replace", side_effect=OSError("denied")):
                with pytest.raises(CommitError) as exc_info:
                    commit(tmp, str(target))

        assert exc_info.value.error_code == ErrorCode.COMMIT_ERROR
        assert str(target) in str(exc_info.value)
        assert target.read_bytes() == b"old"
        assert os.listdir(tmp_path) == ["target.txt"]


@pytest.fixture
def source_on_other_device():
    """Make os.stat report a different device for the given source path."""
    real_stat = os.stat

    class OtherDeviceStat:
        """Real stat result reporting a different device."""

        def __init__(self, real):
            self._real = real

        def __getattr__(self, name):
            return getattr(self._real, name)

        @property
        def st_dev(self):
            return self._real.st_dev + 1

    def _patch(src):
        def fake_stat(path, *args, **kwargs):
            result = real_stat(path, *args, **kwargs)
            if str(path) == str(src):
                return OtherDeviceStat(result)
            return result

        return patch("scriptlib.core.file_io.os.stat", side_effect=fake_stat)

    return _patch


class TestSafeRename:
    """Tests for safe_rename."""

    def test_same_filesystem(self, tmp_path):
        src = tmp_path / "src.txt"
        dst = tmp_path / "dst.txt"
        src.write_bytes(b"new")
        dst.write_bytes(b"old")

        assert safe_rename(str(src), str(dst)) is False
        assert not src.exists()
        assert dst.read_bytes() == b"new"

    def test_cross_filesystem_fallback(self, tmp_path, source_on_other_device):
        src = tmp_path / "src.txt"
        dst = tmp_path / "dst.txt"
        src.write_bytes(b"new")
        dst.write_bytes(b"old")

        with source_on_other_device(src):
            assert safe_rename(str(src), str(dst)) is True

        assert not src.exists()
        assert dst.read_bytes() == b"new"
        assert sorted(os.listdir(tmp_path)) == ["dst.txt"]

    def test_cross_filesystem_copy_failure_keeps_destination(self, tmp_path, source_on_other_device):
        """A copy that dies halfway never touches the destination."""
        src = tmp_path / "src.txt"
        dst = tmp_path / "dst.txt"
        src.write_bytes(b"replacement content\n")
        dst.write_bytes(b"original content\n")

        def partial_copy(copy_src, copy_dst, *args, **kwargs):
            with open(copy_dst, "wb") as f:
                f.write(b"replacemen")
            raise OSError("disk full")

        with source_on_other_device(src), \
                patch("scriptlib.core.file_io.shutil.copyfile", side_effect=partial_copy):
            with pytest.raises(OSError, match="disk full"):
                safe_rename(str(src), str(dst))

        assert dst.read_bytes() == b"original content\n"
        assert src.read_bytes() == b"replacement content\n"
        assert sorted(os.listdir(tmp_path)) == ["dst.txt", "src.txt"]
