from __future__ import annotations

import re
from pathlib import Path
from unittest.mock import patch

import pytest

from lockdiff.exceptions import FileOperationError
from lockdiff.utils.filesystem import (
    create_timestamped_backup,
    safe_read_file,
    safe_write_file,
)


@pytest.fixture
def pipfile(tmp_path: Path) -> Path:
    path = tmp_path / "Pipfile"
    path.write_text('[packages]\nrequests = "*"\n', encoding="utf-8")
    return path


@pytest.mark.unit
class TestSafeReadFile:
    """Tests for safe_read_file."""

    def test_reads_text(self, pipfile: Path) -> None:
        assert safe_read_file(pipfile) == '[packages]\nrequests = "*"\n'

    def test_accepts_string_path(self, pipfile: Path) -> None:
        assert safe_read_file(str(pipfile)).startswith("[packages]")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileOperationError) as exc_info:
            safe_read_file(tmp_path / "Pipfile.lock")

        assert "File not found" in str(exc_info.value)
        assert exc_info.value.operation == "read"

    def test_directory(self, tmp_path: Path) -> None:
        with pytest.raises(FileOperationError, match="Not a file"):
            safe_read_file(tmp_path)

    def test_size_limit(self, pipfile: Path) -> None:
        with pytest.raises(FileOperationError, match="File too large"):
            safe_read_file(pipfile, max_size=5)

    def test_size_limit_disabled(self, pipfile: Path) -> None:
        assert safe_read_file(pipfile, max_size=None)

    def test_decode_error(self, tmp_path: Path) -> None:
        path = tmp_path / "Pipfile.lock"
        path.write_bytes(b"\xff\xfe\x00")

        with pytest.raises(FileOperationError) as exc_info:
            safe_read_file(path)

        assert isinstance(exc_info.value.original_error, UnicodeDecodeError)


@pytest.mark.unit
class TestSafeWriteFile:
    """Tests for safe_write_file."""

    def test_replaces_content(self, pipfile: Path) -> None:
        safe_write_file(pipfile, '[packages]\nrequests = "==2.32.3"\n')

        assert pipfile.read_text(encoding="utf-8") == '[packages]\nrequests = "==2.32.3"\n'

    def test_creates_new_file(self, tmp_path: Path) -> None:
        target = tmp_path / "Pipfile"

        safe_write_file(target, "[packages]\n")

        assert target.read_text(encoding="utf-8") == "[packages]\n"

    def test_no_temporary_files_left(self, pipfile: Path) -> None:
        safe_write_file(pipfile, "x")

        assert [p.name for p in pipfile.parent.iterdir()] == ["Pipfile"]

    def test_failure_cleans_up(self, pipfile: Path) -> None:
        with patch("pathlib.Path.replace", side_effect=OSError("disk full")):
            with pytest.raises(FileOperationError) as exc_info:
                safe_write_file(pipfile, "new")

        assert exc_info.value.operation == "write"
        assert [p.name for p in pipfile.parent.iterdir()] == ["Pipfile"]
        assert pipfile.read_text(encoding="utf-8").startswith("[packages]")

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(FileOperationError):
            safe_write_file(tmp_path / "nope" / "Pipfile", "x")


@pytest.mark.unit
class TestCreateTimestampedBackup:
    """Tests for create_timestamped_backup."""

    def test_backup_name_and_content(self, tmp_path: Path) -> None:
        source = tmp_path / "Pipfile.lock"
        source.write_text("{}", encoding="utf-8")

        backup = create_timestamped_backup(source)

        assert re.fullmatch(r"Pipfile\.\d{8}_\d{6}\.backup\.lock", backup.name)
        assert backup.read_text(encoding="utf-8") == "{}"
        assert source.exists()

    def test_backup_without_suffix(self, pipfile: Path) -> None:
        backup = create_timestamped_backup(pipfile)

        assert re.fullmatch(r"Pipfile\.\d{8}_\d{6}\.backup", backup.name)

    def test_missing_source(self, tmp_path: Path) -> None:
        with pytest.raises(FileOperationError) as exc_info:
            create_timestamped_backup(tmp_path / "Pipfile")

        assert exc_info.value.operation == "backup"

    def test_copy_failure(self, pipfile: Path) -> None:
        with patch("lockdiff.utils.filesystem.shutil.copy2", side_effect=OSError("denied")):
            with pytest.raises(FileOperationError, match="Failed to create backup"):
                create_timestamped_backup(pipfile)
