"""Pytest configuration."""
import os
import threading
import time

import pytest

from static_uploader.exceptions import StorageTransportError
from static_uploader.models.config import UploadOptions
from static_uploader.core.facade import UploadFacade
from static_uploader.core.uploader import UploadExecutor
from static_uploader.utils.logger import LoggerManager


ENDPOINT = "http://s3.example.com"


class FakeStorage:
    """put_object の呼び出しと同時実行数を記録するストレージ"""

    def __init__(self, delay=0.0, fail_names=(), fail_times=None):
        self.delay = delay
        self.fail_names = set(fail_names)
        # ファイル名 -> 失敗させる回数
        self.fail_times = dict(fail_times or {})
        self.calls = []
        self.in_flight = 0
        self.peak_in_flight = 0
        self._lock = threading.Lock()

    def put_object(self, bucket, key, body, content_type, local_path=""):
        name = os.path.basename(local_path)
        with self._lock:
            self.in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
            self.calls.append((bucket, key, body, content_type))
            should_fail = name in self.fail_names or self.fail_times.get(name, 0) > 0
            if self.fail_times.get(name, 0) > 0:
                self.fail_times[name] -= 1
        try:
            if self.delay:
                time.sleep(self.delay)
            if should_fail:
                raise StorageTransportError(f"Upload failed: {local_path}", local_path)
        finally:
            with self._lock:
                self.in_flight -= 1


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    LoggerManager.reset()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def make_facade():
    def _make(storage, **options):
        upload_options = UploadOptions(**options)
        executor = UploadExecutor(storage, upload_options, ENDPOINT)
        return UploadFacade(executor, upload_options)
    return _make


@pytest.fixture
def write_file(tmp_path):
    def _write(relative, content=b"x"):
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            content = content.encode("utf-8")
        path.write_bytes(content)
        return str(path)
    return _write
