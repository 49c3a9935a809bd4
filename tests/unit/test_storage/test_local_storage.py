"""
Unit tests for local filesystem and in-memory storage implementations.
"""

import logging

import polars as pl
import pytest

from spark_helper.storage import LocalFileStorage, MemoryStorage


@pytest.fixture(params=["local", "memory"])
def storage_and_root(request, temp_dir):
    """Run the same contract tests against both backends."""
    if request.param == "local":
        return LocalFileStorage(), str(temp_dir)
    return MemoryStorage(), "/data"


class TestStorageContract:
    """Behavior shared by every FileStorage backend."""

    def test_write_read_text(self, storage_and_root):
        storage, root = storage_and_root
        path = f"{root}/logs/report.log.success"

        storage.write_text("[10:23] Beginning\n", path)

        assert storage.file_exists(path)
        assert storage.folder_exists(f"{root}/logs")
        assert storage.read_text(path) == "[10:23] Beginning\n"

    def test_write_replaces_content(self, storage_and_root):
        storage, root = storage_and_root
        path = f"{root}/current.success"

        storage.write_text("first", path)
        storage.write_text("second", path)

        assert storage.read_text(path) == "second"

    def test_read_missing_file(self, storage_and_root):
        storage, root = storage_and_root

        with pytest.raises(FileNotFoundError):
            storage.read_bytes(f"{root}/missing")

    def test_list_file_names(self, storage_and_root):
        storage, root = storage_and_root
        storage.write_text("", f"{root}/logs/b.log")
        storage.write_text("", f"{root}/logs/a.log")
        storage.write_text("", f"{root}/logs/nested/c.log")

        assert storage.list_file_names(f"{root}/logs") == ["a.log", "b.log"]

    def test_delete_file(self, storage_and_root):
        storage, root = storage_and_root
        path = f"{root}/current.failed"
        storage.write_text("", path)

        assert storage.delete_file(path) is True
        assert not storage.file_exists(path)
        assert storage.delete_file(path) is False

    def test_missing_folder(self, storage_and_root):
        storage, root = storage_and_root

        assert not storage.folder_exists(f"{root}/nope")
        assert not storage.file_exists(f"{root}/nope")

    def test_append_dataframe(self, storage_and_root):
        storage, root = storage_and_root
        path = f"{root}/kpi_history.parquet"

        storage.append_dataframe(pl.DataFrame({"name": ["a"], "value": [1.0]}), path)
        storage.append_dataframe(pl.DataFrame({"name": ["b"], "value": [2.0]}), path)
        df = storage.load_dataframe(path)

        assert df["name"].to_list() == ["a", "b"]
        assert df["value"].to_list() == [1.0, 2.0]


class TestLocalFileStorage:
    """Local-only behavior."""

    def test_file_is_not_a_folder(self, temp_dir):
        storage = LocalFileStorage()
        storage.write_text("", str(temp_dir / "file.txt"))

        assert not storage.folder_exists(str(temp_dir / "file.txt"))
        assert not storage.file_exists(str(temp_dir))

    def test_compression_is_used_for_parquet(self, temp_dir):
        storage = LocalFileStorage(compression="gzip")
        path = temp_dir / "history.parquet"

        storage.save_dataframe(pl.DataFrame({"x": [1, 2, 3]}), str(path))

        assert pl.read_parquet(path)["x"].to_list() == [1, 2, 3]

    def test_read_error_is_logged(self, temp_dir, caplog):
        storage = LocalFileStorage()

        with caplog.at_level(logging.ERROR), pytest.raises(FileNotFoundError):
            storage.read_bytes(str(temp_dir / "missing.log"))

        assert "Error in file reading" in caplog.text


class TestMemoryStorage:
    """Memory-only behavior."""

    def test_paths_are_normalized(self):
        storage = MemoryStorage()
        storage.write_text("content", "logs//./current.success")

        assert storage.file_exists("logs/current.success")
        assert storage.list_file_names("logs/") == ["current.success"]

    def test_folder_disappears_with_its_last_file(self):
        storage = MemoryStorage()
        storage.write_text("", "logs/a.log")
        storage.delete_file("logs/a.log")

        assert not storage.folder_exists("logs")

    def test_current_folder(self):
        storage = MemoryStorage()
        storage.write_text("report", "./current.success")
        storage.write_text("", "/data/other.log")

        assert storage.file_exists("current.success")
        assert storage.folder_exists(".")
        assert storage.list_file_names(".") == ["current.success"]
        assert storage.list_file_names("./") == ["current.success"]
