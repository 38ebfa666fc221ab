import io
from unittest.mock import patch

import flask
import pytest

from rpanel.server import Server, create_app, main


@pytest.fixture
def roots(tmp_path):
    files = tmp_path / "home"
    (files / "sub").mkdir(parents=True)
    (files / "sub" / "a.txt").write_bytes(b"hello")
    return files, tmp_path / "img"


@pytest.fixture
def client(roots):
    file_root, image_root = roots
    return create_app(file_root, image_root).test_client()


def test_plaintext_request_succeeds(client):
    resp = client.get("/v1/img/", headers={"Content-Type": "text/plain"})
    assert 200 <= resp.status_code < 300


def test_version_header(client):
    assert client.get("/v1/img/").headers["X-Version"] == "0.1"


def test_unknown_route_is_json_not_found(client):
    resp = client.get("/nowhere")
    assert resp.status_code == 404
    assert resp.get_json() == {"data": None, "msg": "Not Found", "code": 404}
    assert resp.headers["X-Version"] == "0.1"


def test_wrong_method_is_not_found(client):
    resp = client.put("/v1/img/")
    assert resp.status_code == 404
    assert resp.get_json()["msg"] == "Not Found"


def test_file_list(client):
    resp = client.get("/v1/file/?dir=sub")
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["code"] == 0
    assert body["msg"] == "Success"
    assert [entry["name"] for entry in body["data"]] == ["a.txt"]
    assert body["data"][0]["size"] == 5


def test_file_list_missing_directory(client):
    resp = client.get("/v1/file/?dir=missing")
    assert resp.status_code == 404
    assert resp.get_json() == {"data": None, "msg": "找不到资源: 目录不存在", "code": 404}


def test_file_list_requires_dir(client):
    resp = client.get("/v1/file/")
    assert resp.status_code == 400
    assert resp.get_json()["code"] == 400


def test_file_list_rejects_bad_page(client):
    assert client.get("/v1/file/?dir=sub&page=-1").status_code == 400


def test_upload_then_fetch(client):
    resp = client.post(
        "/v1/img/",
        data={"file": [(io.BytesIO(b"png bytes"), "a.png"), (io.BytesIO(b"gif"), "b.GIF")]},
        content_type="multipart/form-data",
    )
    body = resp.get_json()
    assert resp.status_code == 200
    assert len(body["data"]) == 2
    first = body["data"][0]
    fetched = client.get(f"/v1/img/{first}")
    assert fetched.status_code == 200
    assert fetched.data == b"png bytes"
    assert fetched.mimetype == "image/png"
    listed = client.get("/v1/img/").get_json()["data"]
    assert sorted(listed) == sorted(body["data"])


def test_upload_rejects_unsupported_type(client):
    resp = client.post(
        "/v1/img/",
        data={"file": (io.BytesIO(b"x"), "script.sh")},
        content_type="multipart/form-data",
    )
    assert resp.status_code == 400
    assert resp.get_json()["msg"] == "无效参数: Unsupported file type: sh"


def test_list_images_without_store(client):
    body = client.get("/v1/img/").get_json()
    assert body == {"data": [], "msg": "No images found", "code": 0}


def test_missing_image(client):
    resp = client.get("/v1/img/none.png")
    assert resp.status_code == 404
    assert resp.get_json()["msg"] == "找不到资源: 图片不存在"


def test_delete_route(client):
    resp = client.get("/v1/img/delete/a/b")
    assert resp.status_code == 200
    assert resp.get_data(as_text=True) == "删除成功"


def test_mem_info(client):
    data = client.get("/v1/system_info/mem").get_json()["data"]
    assert set(data) == {"total_kb", "used_kb", "usage_ratio"}
    assert data["used_kb"] <= data["total_kb"]


def test_swap_info(client):
    data = client.get("/v1/system_info/swap").get_json()["data"]
    assert 0.0 <= data["usage_ratio"] <= 1.0


def test_cpu_info(client):
    data = client.get("/v1/system_info/cpu").get_json()["data"]
    assert data["cores"] >= 1
    assert data["usage"] >= 0.0


def test_server_run_binds_host_and_port():
    server = Server("127.0.0.1", 8080)
    with patch.object(flask.Flask, "run", autospec=True, return_value=None) as run:
        result = server.run()
    assert result is None
    assert run.call_count == 1
    assert run.call_args.kwargs["host"] == "127.0.0.1"
    assert run.call_args.kwargs["port"] == 8080
    app = run.call_args.args[0]
    resp = app.test_client().get("/nowhere")
    assert resp.status_code == 404
    assert resp.get_json() == {"data": None, "msg": "Not Found", "code": 404}


def test_main_reports_start_failure(capsys):
    with patch("flask.Flask.run", side_effect=OSError("address in use")):
        main(["--port", "8081"])
    assert "服务启动失败: address in use" in capsys.readouterr().err