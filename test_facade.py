"""UploadFacade のテスト"""
import os

import pytest

from conftest import ENDPOINT, FakeStorage
from static_uploader.exceptions import FilesystemError, OversizedFileError, StorageTransportError
from static_uploader.models.results import BatchResult, UploadSuccess, UploadTarget


def test_file_returns_single_success(write_file, make_facade, storage):
    path = write_file("report.txt", "r" * 500)

    result = make_facade(storage).upload("assets", path, "docs")

    assert isinstance(result, UploadSuccess)
    assert result.url == f"{ENDPOINT}/assets/docs/report.txt"


def test_upload_target(write_file, make_facade, storage):
    path = write_file("app.js", "1")

    result = make_facade(storage).upload_target(UploadTarget("assets", path, "build/bundle.js"))

    assert result.url == f"{ENDPOINT}/assets/build/bundle.js"


def test_directory_returns_batch_result(tmp_path, write_file, make_facade, storage):
    write_file("dir/a.txt")

    result = make_facade(storage).upload("assets", str(tmp_path / "dir"))

    assert isinstance(result, BatchResult)
    assert result.total == 1


def test_oversized_single_file_raises(write_file, make_facade, storage):
    path = write_file("big.txt", "x" * 20)

    with pytest.raises(OversizedFileError) as exc_info:
        make_facade(storage, max_size=10).upload("assets", path)

    assert exc_info.value.local_path == path
    assert storage.calls == []


def test_transport_failure_raises(write_file, make_facade):
    path = write_file("bad.txt")

    with pytest.raises(StorageTransportError):
        make_facade(FakeStorage(fail_names=["bad.txt"])).upload("assets", path)


def test_missing_path_raises(tmp_path, make_facade, storage):
    with pytest.raises(FilesystemError):
        make_facade(storage).upload("assets", str(tmp_path / "missing"))


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="mkfifo not available")
def test_special_file_raises(tmp_path, make_facade, storage):
    fifo = tmp_path / "pipe"
    os.mkfifo(str(fifo))

    with pytest.raises(FilesystemError):
        make_facade(storage).upload("assets", str(fifo), "docs")
