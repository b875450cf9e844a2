"""アップロード対象と結果のデータクラス"""
from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..exceptions import UploadError


@dataclass(frozen=True)
class UploadTarget:
    """1回のアップロード操作の入力"""
    bucket: str
    local_path: str
    prefix: str = ""


@dataclass(frozen=True)
class UploadSuccess:
    """アップロード成功"""
    item: str
    url: str


@dataclass(frozen=True)
class UploadFailure:
    """アップロード失敗"""
    item: str
    error: str
    kind: str = "UploadError"
    exception: Optional[Exception] = field(default=None, compare=False, repr=False)

    @classmethod
    def from_exception(cls, item: str, exc: Exception) -> 'UploadFailure':
        message = exc.message if isinstance(exc, UploadError) else str(exc)
        return cls(item=item, error=message, kind=type(exc).__name__, exception=exc)


UploadOutcome = Union[UploadSuccess, UploadFailure]


@dataclass
class BatchResult:
    """ディレクトリ単位の集計結果（完了順）"""
    success: List[UploadSuccess] = field(default_factory=list)
    failure: List[UploadFailure] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.success) + len(self.failure)

    @property
    def ok(self) -> bool:
        return not self.failure

    def add(self, outcome: UploadOutcome) -> None:
        if isinstance(outcome, UploadSuccess):
            self.success.append(outcome)
        else:
            self.failure.append(outcome)

    def extend(self, other: 'BatchResult') -> None:
        self.success.extend(other.success)
        self.failure.extend(other.failure)
