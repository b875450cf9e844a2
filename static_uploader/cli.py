"""コマンドラインインターフェース"""
import argparse
import os
import sys
from typing import List, Optional

from . import StaticUploader
from .exceptions import ConfigurationError, InvalidArgumentError, UploaderError
from .models.config import Config, parse_max_size, parse_target
from .models.results import BatchResult
from .utils.logger import LoggerManager


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="static-upload",
        description="Upload static files to an S3 compatible bucket",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # lib/app.js -> /hello/world/app.js
  %(prog)s lib/app.js s3://assets/hello/world

  # lib/app.js -> /hello/world/bundle-1a2b3c4d.js
  %(prog)s lib/app.js s3://assets/hello/world/bundle.js --auto-uri

  # upload a directory, skipping files larger than 2MB
  %(prog)s dist s3://assets/static --max-size 2m
        """,
    )
    parser.add_argument("source", help="Local file or directory")
    parser.add_argument("target", help="s3://<bucket>[/<prefix>]")
    parser.add_argument("--max-size", default=None,
                        help="Maximum file size, e.g. 512k or 10m (default 10m)")
    parser.add_argument("--auto-uri", action="store_true", default=None,
                        help="Append the first 8 hex chars of the MD5 to file names")
    parser.add_argument("--config", default="config.json", help="Configuration file")
    parser.add_argument("--max-concurrency", type=int, default=None)
    parser.add_argument("--max-retries", type=int, default=None)
    parser.add_argument("--dry-run", action="store_true", default=None)
    return parser.parse_args(argv)


def report(result) -> bool:
    """URL を標準出力へ、失敗をログへ。全件成功なら True"""
    logger = LoggerManager.get_logger()
    if not isinstance(result, BatchResult):
        print(result.url)
        return True

    for success in result.success:
        print(success.url)
    for failure in result.failure:
        logger.error(f"{failure.item}: {failure.error}")

    logger.info(
        f"Upload completed: {len(result.success)} successful, {len(result.failure)} failed"
    )
    return result.ok


def main(argv: Optional[List[str]] = None) -> int:
    """メイン関数。終了コードを返す"""
    args = parse_args(argv)

    try:
        bucket, prefix = parse_target(args.target)
        max_size = parse_max_size(args.max_size) if args.max_size is not None else None

        if not os.path.exists(args.source):
            raise InvalidArgumentError(f"No such file or directory = [{args.source}]")

        try:
            config = Config.from_file(args.config)
        except (FileNotFoundError, ValueError) as e:
            raise ConfigurationError(
                f"{e} Please set `storage.endpoint` and credentials first."
            )

        try:
            config = config.with_overrides(
                max_size=max_size,
                auto_uri=args.auto_uri,
                max_concurrency=args.max_concurrency,
                max_retries=args.max_retries,
                dry_run=args.dry_run,
            )
        except ValueError as e:
            raise InvalidArgumentError(f"Invalid arguments: {e}")
        uploader = StaticUploader(config)
        result = uploader.run(bucket, args.source, prefix)

    except UploaderError as e:
        LoggerManager.get_logger().error(f"{type(e).__name__}: {e.message}")
        return e.exit_code

    return 0 if report(result) else 1


if __name__ == "__main__":
    sys.exit(main())
