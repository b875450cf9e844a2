"""Static Uploader パッケージ"""
from typing import Union

from .exceptions import (
    ConfigurationError,
    FilesystemError,
    InvalidArgumentError,
    NameResolutionError,
    OversizedFileError,
    StorageTransportError,
    UploadError,
    UploaderError,
)
from .models.config import Config
from .models.results import BatchResult, UploadFailure, UploadSuccess, UploadTarget
from .utils.logger import LoggerManager
from .core.facade import UploadFacade
from .core.s3_client import S3ClientManager, StorageClient
from .core.uploader import UploadExecutor


class StaticUploader:
    """アップローダーのメインクラス"""

    def __init__(self, config: Config, storage=None):
        self.config = config

        self.logger = LoggerManager.setup(config.logging)
        self.logger.info("Static Uploader initialized")

        # storage は put_object を持つオブジェクトなら差し替え可能
        if storage is None:
            storage = StorageClient(S3ClientManager(config.storage))
        self.storage = storage

        self.executor = UploadExecutor(
            storage, config.options, config.storage.public_endpoint
        )
        self.facade = UploadFacade(self.executor, config.options)

    @classmethod
    def from_file(cls, config_path: str = "config.json", **options) -> 'StaticUploader':
        return cls(Config.from_file(config_path).with_overrides(**options))

    def run(self, bucket: str, local_path: str, prefix: str = "") -> Union[BatchResult, UploadSuccess]:
        """アップロードを実行"""
        self.logger.info(f"Starting upload: {local_path} -> {bucket}/{prefix}")
        return self.facade.upload_target(UploadTarget(bucket, local_path, prefix))


__all__ = [
    'StaticUploader',
    'Config',
    'UploadTarget',
    'UploadSuccess',
    'UploadFailure',
    'BatchResult',
    'UploaderError',
    'ConfigurationError',
    'InvalidArgumentError',
    'UploadError',
    'OversizedFileError',
    'NameResolutionError',
    'StorageTransportError',
    'FilesystemError',
]
