"""コマンドラインのテスト"""
import json
import os
from unittest.mock import patch

import pytest

from conftest import FakeStorage
from static_uploader import StaticUploader, cli


ENDPOINT = "https://s3.example.com"


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "storage": {"endpoint": ENDPOINT, "access_key_id": "AK", "secret_access_key": "SK"},
    }), encoding="utf-8")
    return str(path)


@pytest.fixture
def fake_storage(monkeypatch):
    storage = FakeStorage()
    monkeypatch.setattr(cli, "StaticUploader", lambda config: StaticUploader(config, storage=storage))
    return storage


def test_single_file(write_file, config_file, fake_storage, capsys):
    path = write_file("report.txt", "r" * 500)

    code = cli.main([path, "s3://assets/docs", "--config", config_file])

    assert code == 0
    assert capsys.readouterr().out.strip() == f"{ENDPOINT}/assets/docs/report.txt"
    assert fake_storage.calls[0][1] == "/docs/report.txt"


def test_auto_uri_flag(write_file, config_file, fake_storage, capsys):
    path = write_file("app.js", "1")

    code = cli.main([path, "s3://assets/build/bundle.js", "--auto-uri", "--config", config_file])

    assert code == 0
    url = capsys.readouterr().out.strip()
    assert url.startswith(f"{ENDPOINT}/assets/build/bundle-")
    assert url.endswith(".js")


def test_directory_with_failure(tmp_path, write_file, config_file, fake_storage, capsys):
    write_file("dist/a.txt", "a")
    write_file("dist/b.txt", "b" * 4096)

    code = cli.main([str(tmp_path / "dist"), "s3://assets", "--max-size", "1k", "--config", config_file])

    assert code == 1
    assert capsys.readouterr().out.strip() == f"{ENDPOINT}/assets/a.txt"


def test_oversized_single_file(write_file, config_file, fake_storage):
    path = write_file("big.txt", "b" * 4096)

    assert cli.main([path, "s3://assets", "--max-size", "1k", "--config", config_file]) == 1
    assert fake_storage.calls == []


def test_invalid_target(write_file, config_file, fake_storage):
    path = write_file("a.txt")
    assert cli.main([path, "assets/docs", "--config", config_file]) == 1


def test_invalid_max_size(write_file, config_file, fake_storage):
    path = write_file("a.txt")
    assert cli.main([path, "s3://assets", "--max-size", "huge", "--config", config_file]) == 1


def test_missing_source(tmp_path, config_file, fake_storage):
    assert cli.main([str(tmp_path / "missing"), "s3://assets", "--config", config_file]) == 1


def test_missing_config(tmp_path, write_file, fake_storage):
    path = write_file("a.txt")
    assert cli.main([path, "s3://assets", "--config", str(tmp_path / "none.json")]) == 1
    assert fake_storage.calls == []


def test_static_uploader_from_file(write_file, config_file):
    path = write_file("site/index.html", "<html/>")

    with patch("static_uploader.core.s3_client.boto3") as mock_boto3:
        uploader = StaticUploader.from_file(config_file, max_concurrency=2)
        result = uploader.run("web", os.path.dirname(path), "v2")

    assert uploader.config.options.max_concurrency == 2
    assert [s.url for s in result.success] == [f"{ENDPOINT}/web/v2/index.html"]
    mock_boto3.client.return_value.put_object.assert_called_once_with(
        Bucket="web", Key="v2/index.html", Body=b"<html/>", ContentType="text/html"
    )


@pytest.mark.parametrize("option, value", [
    ("--max-concurrency", "0"),
    ("--max-retries", "-1"),
])
def test_invalid_numeric_option(write_file, config_file, fake_storage, option, value):
    path = write_file("a.txt")

    assert cli.main([path, "s3://assets", option, value, "--config", config_file]) == 1
    assert fake_storage.calls == []


def test_config_that_is_not_an_object(tmp_path, write_file, fake_storage):
    path = write_file("a.txt")
    config_path = tmp_path / "list.json"
    config_path.write_text("[1, 2]", encoding="utf-8")

    assert cli.main([path, "s3://assets", "--config", str(config_path)]) == 1
