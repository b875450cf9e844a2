"""S3クライアント管理"""
import threading

import boto3
from typing import Dict, Optional
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from ..exceptions import ConfigurationError, StorageTransportError
from ..models.config import StorageConfig
from ..utils.logger import LoggerManager


class S3ClientManager:
    """S3クライアントの作成と管理（バケットごとの認証情報に対応）"""

    def __init__(self, storage_config: StorageConfig):
        self.storage_config = storage_config
        self.logger = LoggerManager.get_logger()
        self._clients: Dict[Optional[str], object] = {}
        # boto3 のデフォルトセッションはスレッドセーフではない
        self._lock = threading.Lock()

    def get_client(self, bucket: Optional[str] = None):
        """S3クライアントを取得（必要に応じて作成）"""
        # 個別の認証情報を持たないバケットは共通クライアントを使う
        cache_key = bucket if bucket in self.storage_config.buckets else None
        with self._lock:
            if cache_key not in self._clients:
                self._clients[cache_key] = self._create_client(self.storage_config.credentials_for(bucket))
            return self._clients[cache_key]

    def _create_client(self, creds):
        """S3クライアントを作成"""
        kwargs = {
            "endpoint_url": self.storage_config.endpoint,
            "region_name": self.storage_config.region,
        }
        try:
            if creds is not None:
                client = boto3.client(
                    's3',
                    aws_access_key_id=creds.access_key_id,
                    aws_secret_access_key=creds.secret_access_key,
                    **kwargs
                )
                self.logger.info("S3 client created with configured access keys.")
            elif self.storage_config.profile:
                session = boto3.Session(profile_name=self.storage_config.profile)
                client = session.client('s3', **kwargs)
                self.logger.info(f"S3 client created with profile: {self.storage_config.profile}")
            else:
                client = boto3.client('s3', **kwargs)
                self.logger.info("S3 client created with default credentials.")
            return client

        except BotoCoreError as e:
            self.logger.error(f"Error creating S3 client: {e}")
            raise ConfigurationError(f"Error creating S3 client: {e}")


class StorageClient:
    """put_object だけを公開するストレージの窓口"""

    def __init__(self, client_manager: S3ClientManager):
        self.client_manager = client_manager
        self.logger = LoggerManager.get_logger()

    def put_object(self, bucket: str, key: str, body: bytes, content_type: str, local_path: str = "") -> None:
        """オブジェクトを送信。key の先頭スラッシュは外して送る"""
        try:
            client = self.client_manager.get_client(bucket)
            client.put_object(
                Bucket=bucket,
                Key=key.lstrip("/"),
                Body=body,
                ContentType=content_type,
            )
        except NoCredentialsError as e:
            # 認証情報は署名時に解決されるのでここで初めて分かる
            self.logger.error("Storage credentials not available.")
            raise ConfigurationError(f"Storage credentials not available: {e}")
        except (BotoCoreError, ClientError) as e:
            self.logger.error(f"file: {local_path or key} upload failed: {e}")
            raise StorageTransportError(
                f"Upload failed: {local_path or key}",
                local_path or key,
                {"cause": str(e)},
            )
