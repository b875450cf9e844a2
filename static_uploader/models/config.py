"""設定管理用のデータクラス"""
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple
import json
import os
import re

from ..exceptions import ConfigurationError, InvalidArgumentError


DEFAULT_MAX_SIZE = 10 * 1024 * 1024  # 10MB

_MAX_SIZE_PATTERN = re.compile(r'^([\d.]+)([mk])?', re.IGNORECASE)
_TARGET_PATTERN = re.compile(r'^s3://([^/]+)(.*)?$')


@dataclass(frozen=True)
class LoggingConfig:
    """ロギング設定"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


@dataclass(frozen=True)
class BucketCredentials:
    """バケット個別の認証情報"""
    access_key_id: str
    secret_access_key: str


@dataclass(frozen=True)
class StorageConfig:
    """ストレージ接続の設定"""
    endpoint: str
    region: Optional[str] = None
    profile: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    buckets: Dict[str, BucketCredentials] = field(default_factory=dict)
    # エンドポイント -> CDN エンドポイント
    cdn_endpoints: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not self.endpoint:
            raise ConfigurationError("storage.endpoint is required")

        buckets = {}
        for name, creds in self.buckets.items():
            if isinstance(creds, dict):
                creds = BucketCredentials(**creds)
            elif not isinstance(creds, BucketCredentials):
                raise TypeError(
                    f"buckets.{name} must be dict or BucketCredentials, got {type(creds)}"
                )
            buckets[name] = creds
        # frozen なので object.__setattr__ で正規化した値を入れ直す
        object.__setattr__(self, "buckets", buckets)

    def credentials_for(self, bucket: str) -> Optional[BucketCredentials]:
        """バケットに対応する認証情報（個別 > 共通）"""
        if bucket in self.buckets:
            return self.buckets[bucket]
        if self.access_key_id and self.secret_access_key:
            return BucketCredentials(self.access_key_id, self.secret_access_key)
        return None

    @property
    def public_endpoint(self) -> str:
        """URL 生成に使うエンドポイント（CDN があればそちら）"""
        endpoint = self.endpoint.rstrip("/")
        cdn = {k.rstrip("/"): v for k, v in self.cdn_endpoints.items()}
        return cdn.get(endpoint, endpoint).rstrip("/")


@dataclass(frozen=True)
class UploadOptions:
    """アップロードオプション"""
    max_size: int = DEFAULT_MAX_SIZE
    auto_uri: bool = False
    max_concurrency: int = 5
    exclude_names: List[str] = field(default_factory=list)
    dry_run: bool = False
    max_retries: int = 0
    retry_backoff_seconds: float = 1.0

    def __post_init__(self):
        if self.max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {self.max_concurrency}")
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")


@dataclass(frozen=True)
class Config:
    """メイン設定クラス"""
    logging: LoggingConfig
    storage: StorageConfig
    options: UploadOptions = field(default_factory=UploadOptions)

    @classmethod
    def from_file(cls, config_path: str) -> 'Config':
        """設定ファイルから読み込み"""
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file {config_path} not found.")

        try:
            with open(config_path, "r", encoding="utf-8") as file:
                data = json.load(file)
        except json.JSONDecodeError as e:
            raise ValueError(f"Error decoding JSON from {config_path}: {e}")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """辞書から各セクションをパース"""
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration must be a JSON object, got {type(data).__name__}"
            )

        try:
            return cls(
                logging=LoggingConfig(**data.get("logging", {})),
                storage=StorageConfig(**data.get("storage", {})),
                options=UploadOptions(**data.get("options", {})),
            )
        except ConfigurationError:
            raise
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Error loading configuration: {e}")

    def with_overrides(self, **options) -> 'Config':
        """オプションを上書きした新しい Config を返す"""
        changes = {k: v for k, v in options.items() if v is not None}
        return replace(self, options=replace(self.options, **changes))


def parse_max_size(value: Optional[str]) -> int:
    """"10m" / "512k" / "2048" 形式のサイズ指定をバイト数に変換"""
    if not value:
        return DEFAULT_MAX_SIZE

    match = _MAX_SIZE_PATTERN.match(value)
    if not match:
        raise InvalidArgumentError(f"Invalid arguments: {value}")

    # 小数部は切り捨て（"1.5m" -> 1MB）
    number = match.group(1).split(".")[0]
    size = int(number) if number else 0

    unit = (match.group(2) or "").lower()
    if unit == "m":
        size *= 1024 * 1024
    elif unit == "k":
        size *= 1024

    return size or DEFAULT_MAX_SIZE


def parse_target(value: str) -> Tuple[str, str]:
    """s3://bucket/prefix を (bucket, prefix) に分解"""
    match = _TARGET_PATTERN.match(value or "")
    if not match:
        raise InvalidArgumentError(f"Invalid arguments: {value}")

    bucket = match.group(1)
    prefix = (match.group(2) or "").lstrip("/")
    return bucket, prefix
