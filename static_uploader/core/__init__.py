"""Static Uploader コアモジュール"""
from .s3_client import S3ClientManager, StorageClient
from .uploader import UploadExecutor
from .batch import BatchScheduler
from .facade import UploadFacade
from .naming import resolve_object_name

__all__ = [
    'S3ClientManager',
    'StorageClient',
    'UploadExecutor',
    'BatchScheduler',
    'UploadFacade',
    'resolve_object_name',
]
