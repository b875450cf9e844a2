"""ファイル操作関連のユーティリティ"""
import fnmatch
import mimetypes
import os
from typing import List
from dataclasses import dataclass

from ..exceptions import FilesystemError


DEFAULT_CONTENT_TYPE = "application/octet-stream"

# 常に除外するエントリ名
ALWAYS_EXCLUDED = ("CVS",)


@dataclass
class FileInfo:
    """ファイル情報"""
    path: str
    size: int

    @property
    def name(self) -> str:
        return os.path.basename(self.path)


class FileScanner:
    """ディレクトリ直下のエントリを列挙する"""

    def __init__(self, exclude_patterns: List[str] = None):
        self.exclude_patterns = exclude_patterns or []

    def should_exclude(self, name: str) -> bool:
        """ドットファイル・CVS・除外パターンに一致するかチェック"""
        if name.startswith(".") or name in ALWAYS_EXCLUDED:
            return True

        return any(fnmatch.fnmatch(name, pattern) for pattern in self.exclude_patterns)

    def list_entries(self, directory: str) -> List[str]:
        """アップロード対象のエントリ名（サブディレクトリを含む）"""
        try:
            names = os.listdir(directory)
        except OSError as e:
            raise FilesystemError(f"Cannot list directory {directory}: {e}", directory)

        return sorted(name for name in names if not self.should_exclude(name))

    def get_file_info(self, file_path: str) -> FileInfo:
        """単一ファイルの情報を取得"""
        try:
            size = os.path.getsize(file_path)
        except OSError as e:
            raise FilesystemError(f"Cannot stat {file_path}: {e}", file_path)

        return FileInfo(path=file_path, size=size)


def read_file(file_path: str) -> bytes:
    """ファイル全体を読み込む"""
    try:
        with open(file_path, "rb") as file:
            return file.read()
    except OSError as e:
        raise FilesystemError(f"Cannot read {file_path}: {e}", file_path)


def guess_content_type(name: str) -> str:
    content_type, _ = mimetypes.guess_type(name)
    return content_type or DEFAULT_CONTENT_TYPE
