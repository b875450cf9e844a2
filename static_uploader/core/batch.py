"""ディレクトリ単位の並列アップロード"""
import os
import posixpath
import queue
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Union

from ..exceptions import ConfigurationError, StorageTransportError, UploadError
from ..models.config import UploadOptions
from ..models.results import BatchResult, UploadFailure, UploadOutcome
from ..utils.file_utils import FileScanner
from ..utils.logger import LoggerManager


class BatchScheduler:
    """ディレクトリ直下のエントリを並列数を制限してアップロード

    min(max_concurrency, エントリ数) 個のワーカーが共有キューからエントリを
    取り出し、1件終わるたびに次を取りに行く。キューが空になり全ワーカーが
    終了した時点で BatchResult を返す。個々の失敗は結果に記録するだけで、
    ほかのエントリには影響しない。ConfigurationError だけは呼び出し全体の
    失敗として送出する。
    """

    def __init__(self, facade, options: UploadOptions):
        self.facade = facade
        self.options = options
        self.max_concurrency = options.max_concurrency
        self.logger = LoggerManager.get_logger()
        self.file_scanner = FileScanner(options.exclude_names)

    def upload_directory(self, bucket: str, directory: str, prefix: str = "") -> BatchResult:
        entries = self.file_scanner.list_entries(directory)
        result = BatchResult()
        if not entries:
            self.logger.warning(f"No files found in {directory}")
            return result

        pending = queue.Queue()
        for name in entries:
            pending.put(name)

        workers = min(self.max_concurrency, len(entries))
        lock = threading.Lock()
        # 認証情報の不足などは呼び出し全体の失敗として残りを取りやめる
        aborted = threading.Event()
        self.logger.info(
            f"Starting parallel upload of {len(entries)} entries in {directory} "
            f"with {workers} workers"
        )

        def worker():
            while not aborted.is_set():
                try:
                    name = pending.get_nowait()
                except queue.Empty:
                    return
                try:
                    outcome = self._upload_entry(bucket, directory, name, prefix)
                except ConfigurationError:
                    aborted.set()
                    raise
                with lock:
                    self._collect(result, outcome)

        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(worker) for _ in range(workers)]
        for future in futures:
            future.result()

        self.logger.info(
            f"Directory upload completed: {directory}: "
            f"{len(result.success)} successful, {len(result.failure)} failed"
        )
        return result

    @staticmethod
    def _collect(result: BatchResult, outcome: Union[BatchResult, UploadOutcome]) -> None:
        if isinstance(outcome, BatchResult):
            result.extend(outcome)
        else:
            result.add(outcome)

    def _upload_entry(self, bucket: str, directory: str, name: str,
                      prefix: str) -> Union[BatchResult, UploadOutcome]:
        """1エントリをアップロード（転送エラーのみリトライ）"""
        local_path = os.path.join(directory, name)
        # 拡張子のないファイルは親の prefix をディレクトリとして扱う
        if os.path.isdir(local_path) or os.path.splitext(name)[1]:
            entry_prefix = posixpath.join(prefix, name)
        else:
            entry_prefix = prefix

        attempt = 0
        while True:
            outcome = self._try_upload(bucket, local_path, entry_prefix)
            if not self._should_retry(outcome, attempt):
                return outcome

            wait_time = self.options.retry_backoff_seconds * (2 ** attempt)
            self.logger.warning(
                f"Upload failed (attempt {attempt + 1}/{self.options.max_retries + 1}), "
                f"retrying in {wait_time}s: {local_path}"
            )
            time.sleep(wait_time)
            attempt += 1

    def _try_upload(self, bucket: str, local_path: str,
                    prefix: str) -> Union[BatchResult, UploadOutcome]:
        try:
            outcome = self.facade.upload(bucket, local_path, prefix)
        except UploadError as e:
            return UploadFailure.from_exception(local_path, e)
        except ConfigurationError:
            raise
        except Exception as e:
            self.logger.error(f"Upload task exception for {local_path}: {e}")
            return UploadFailure.from_exception(local_path, e)

        return outcome

    def _should_retry(self, outcome, attempt: int) -> bool:
        return (
            isinstance(outcome, UploadFailure)
            and isinstance(outcome.exception, StorageTransportError)
            and attempt < self.options.max_retries
        )
