"""単一ファイルのアップロード"""
from ..exceptions import OversizedFileError, UploadError
from ..models.config import UploadOptions
from ..models.results import UploadFailure, UploadOutcome, UploadSuccess
from ..utils.file_utils import FileScanner, guess_content_type, read_file
from ..utils.logger import LoggerManager
from .naming import resolve_object_name


class UploadExecutor:
    """ファイルアップロードの実行

    サイズ確認 -> オブジェクト名の決定 -> put_object の順に処理し、
    結果は UploadSuccess / UploadFailure で返す。リトライはしない。
    """

    def __init__(self, storage, options: UploadOptions, endpoint: str):
        self.storage = storage
        self.options = options
        self.endpoint = endpoint.rstrip("/")
        self.logger = LoggerManager.get_logger()
        self.file_scanner = FileScanner(options.exclude_names)

    def build_url(self, bucket: str, object_name: str) -> str:
        return f"{self.endpoint}/{bucket}{object_name}"

    def upload_file(self, bucket: str, local_path: str, prefix: str = "") -> UploadOutcome:
        """単一ファイルをアップロード"""
        try:
            url = self._execute_upload(bucket, local_path, prefix)
        except UploadError as e:
            return UploadFailure.from_exception(local_path, e)
        return UploadSuccess(item=local_path, url=url)

    def _execute_upload(self, bucket: str, local_path: str, prefix: str) -> str:
        """実際のアップロード処理"""
        file_info = self.file_scanner.get_file_info(local_path)
        if file_info.size > self.options.max_size:
            self.logger.error(
                f"{local_path} size = [{file_info.size}], "
                f"maxSize = [{self.options.max_size}], ignore it."
            )
            raise OversizedFileError(local_path, file_info.size, self.options.max_size)

        object_name = resolve_object_name(local_path, prefix, self.options.auto_uri)
        url = self.build_url(bucket, object_name)

        if self.options.dry_run:
            self.logger.info(f"[DRY RUN]: Would upload {local_path} to {url}")
            return url

        self.storage.put_object(
            bucket,
            object_name,
            read_file(local_path),
            guess_content_type(object_name),
            local_path=local_path,
        )

        self.logger.info(url)
        return url
