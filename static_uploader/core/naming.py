"""ローカルパスからオブジェクト名を決定する"""
import hashlib
import os
import posixpath
import re

from ..exceptions import FilesystemError, NameResolutionError


HASH_LENGTH = 8

_SLASHES = re.compile(r"/+")


def content_hash(local_path: str, chunk_size: int = 1024 * 1024) -> str:
    """ファイル内容の MD5 (hex)"""
    md5 = hashlib.md5()
    try:
        with open(local_path, "rb") as file:
            for chunk in iter(lambda: file.read(chunk_size), b""):
                md5.update(chunk)
    except OSError as e:
        raise FilesystemError(f"Cannot read {local_path}: {e}", local_path)
    return md5.hexdigest()


def get_base_name(local_path: str, auto_uri: bool) -> str:
    """auto_uri の場合は <stem>-<md5先頭8桁><ext> に変換"""
    basename = os.path.basename(local_path)
    if not auto_uri:
        return basename

    stem, ext = os.path.splitext(basename)
    return f"{stem}-{content_hash(local_path)[:HASH_LENGTH]}{ext}"


def normalize_object_name(name: str) -> str:
    """区切りを / に統一し、連続スラッシュを潰して先頭に / を付ける"""
    name = name.replace("\\", "/")
    return _SLASHES.sub("/", "/" + name)


def resolve_object_name(local_path: str, prefix: str = "", auto_uri: bool = False) -> str:
    """オブジェクト名を決定

    - prefix なし: /<basename>
    - prefix の拡張子がファイルと同じ: prefix をファイル名とみなす
      (lib/bcs.js + hello/world/my-bcs.js -> /hello/world/my-bcs.js)
    - それ以外: prefix をディレクトリとみなす
      (lib/bcs.js + hello/world -> /hello/world/bcs.js)
    """
    if not prefix:
        return normalize_object_name(get_base_name(local_path, auto_uri))

    if not os.path.isfile(local_path):
        raise NameResolutionError(
            f"Cannot resolve object name for non-file path with prefix: {local_path}",
            local_path,
        )

    prefix = prefix.replace("\\", "/")
    local_stem, ext = os.path.splitext(os.path.basename(local_path))
    prefix_stem, prefix_ext = posixpath.splitext(posixpath.basename(prefix))
    basename = get_base_name(local_path, auto_uri)

    if ext and ext == prefix_ext:
        # ハッシュ付きでも stem 部分だけを置き換える
        basename = prefix_stem + basename[len(local_stem):]
        return normalize_object_name(posixpath.dirname(prefix) + "/" + basename)

    return normalize_object_name(prefix + "/" + basename)
