"""アップロードの入口"""
import os
import stat
from typing import Union

from ..exceptions import FilesystemError
from ..models.config import UploadOptions
from ..models.results import BatchResult, UploadFailure, UploadSuccess, UploadTarget
from .batch import BatchScheduler
from .uploader import UploadExecutor


class UploadFacade:
    """パスの種類に応じて単一ファイル / ディレクトリのアップロードに振り分ける"""

    def __init__(self, executor: UploadExecutor, options: UploadOptions):
        self.executor = executor
        self.scheduler = BatchScheduler(self, options)

    def upload(self, bucket: str, local_path: str, prefix: str = "") -> Union[BatchResult, UploadSuccess]:
        """ディレクトリなら BatchResult、ファイルなら UploadSuccess を返す

        ファイルのアップロードに失敗した場合はその例外を送出する。
        """
        try:
            mode = os.stat(local_path).st_mode
        except OSError as e:
            raise FilesystemError(f"No such file or directory = [{local_path}]: {e}", local_path)

        if stat.S_ISDIR(mode):
            return self.scheduler.upload_directory(bucket, local_path, prefix or "")

        if stat.S_ISREG(mode):
            outcome = self.executor.upload_file(bucket, local_path, prefix or "")
            if isinstance(outcome, UploadFailure):
                raise outcome.exception
            return outcome

        raise FilesystemError(f"Source is neither file nor directory: {local_path}", local_path)

    def upload_target(self, target: UploadTarget) -> Union[BatchResult, UploadSuccess]:
        return self.upload(target.bucket, target.local_path, target.prefix)
