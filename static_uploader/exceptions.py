"""アップローダーの例外クラス"""
from typing import Dict, Optional


class UploaderError(Exception):
    """アップローダー共通の基底例外"""

    exit_code = 1

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(UploaderError):
    """設定や認証情報が不正・不足している"""


class InvalidArgumentError(UploaderError):
    """コマンドライン引数が不正"""


class UploadError(UploaderError):
    """ファイル単位のアップロードエラー"""

    def __init__(self, message: str, local_path: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message, details)
        self.local_path = local_path


class OversizedFileError(UploadError):
    """ファイルサイズが上限を超えている（アップロードは試行されない）"""

    def __init__(self, local_path: str, size: int, limit: int):
        super().__init__(
            f"File size [{size}] is larger than the maximum [{limit}]: {local_path}",
            local_path,
            {"size": str(size), "limit": str(limit)},
        )
        self.size = size
        self.limit = limit


class NameResolutionError(UploadError):
    """オブジェクト名を決定できない"""


class StorageTransportError(UploadError):
    """ストレージへの送信に失敗"""


class FilesystemError(UploadError):
    """stat / 読み込み / 一覧取得の失敗"""
