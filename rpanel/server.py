"""The HTTP API: system statistics, file listings and image storage."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence

import flask

from rpanel import sysinfo
from rpanel.errors import AppError, InvalidParam
from rpanel.file_api import DEFAULT_ROOT, list_directory
from rpanel.img_api import DEFAULT_IMAGE_ROOT, ImageStore
from rpanel.response import Response

_U32_MAX = 2**32 - 1


def _json(response: Response, status: int | None = None) -> flask.Response:
    return flask.Response(
        response.to_json(),
        status=int(status if status is not None else response.http_status()),
        mimetype="application/json",
    )


def _optional_u32(name: str) -> int | None:
    text = flask.request.args.get(name)
    if text is None:
        return None
    if not (text.isascii() and text.isdigit()) or int(text) > _U32_MAX:
        raise InvalidParam(f"{name}: invalid value {text!r}")
    return int(text)


def create_app(
    file_root: str | os.PathLike[str] = DEFAULT_ROOT,
    image_root: str | os.PathLike[str] = DEFAULT_IMAGE_ROOT,
) -> flask.Flask:
    """Build the application serving the ``/v1`` API."""
    app = flask.Flask(__name__)
    images = ImageStore(image_root)

    @app.after_request
    def _version_header(resp: flask.Response) -> flask.Response:
        resp.headers["X-Version"] = "0.1"
        return resp

    @app.errorhandler(AppError)
    def _app_error(err: AppError) -> flask.Response:
        return _json(err.to_response(), err.status_code)

    @app.errorhandler(404)
    @app.errorhandler(405)
    def _not_found(_err: Exception) -> flask.Response:
        return _json(Response(data=None, msg="Not Found", code=404))

    @app.get("/v1/system_info/cpu")
    def _cpu_info() -> flask.Response:
        info = {"cores": sysinfo.cpu_count(), "usage": sysinfo.cpu_usage() / 1000.0}
        return _json(Response(data=info, msg="Success", code=0))

    @app.get("/v1/system_info/mem")
    def _mem_info() -> flask.Response:
        return _json(Response(data=sysinfo.get_mem_info(), msg="Success", code=0))

    @app.get("/v1/system_info/swap")
    def _swap_info() -> flask.Response:
        return _json(Response(data=sysinfo.get_swap_info(), msg="Success", code=0))

    @app.get("/v1/file/")
    def _file_list() -> flask.Response:
        directory = flask.request.args.get("dir")
        if directory is None:
            raise InvalidParam("missing field `dir`")
        page = _optional_u32("page") or 1
        page_size = _optional_u32("page_size") or 10
        files = list_directory(file_root, directory, page, page_size)
        return _json(Response(data=files, msg="Success", code=0))

    @app.post("/v1/img/")
    def _create_image() -> flask.Response:
        uploads = [
            (storage.filename or None, storage.stream)
            for storage in flask.request.files.getlist("file")
        ]
        return _json(images.save(uploads))

    @app.get("/v1/img/<name>")
    def _get_image(name: str) -> flask.Response:
        body, content_type = images.get(name)
        return flask.Response(body, status=200, content_type=content_type)

    @app.get("/v1/img/")
    def _list_images() -> flask.Response:
        return _json(images.list())

    @app.get("/v1/img/delete/<path>/<directory>")
    def _delete_image(path: str, directory: str) -> flask.Response:
        return flask.Response(
            images.delete(path, directory), status=200, content_type="text/plain; charset=utf-8"
        )

    return app


class Server:
    """Runs the API on one host and port."""

    def __init__(
        self,
        host: str,
        port: int,
        file_root: str | os.PathLike[str] = DEFAULT_ROOT,
        image_root: str | os.PathLike[str] = DEFAULT_IMAGE_ROOT,
    ) -> None:
        self.host = host
        self.port = port
        self.file_root = file_root
        self.image_root = image_root

    def run(self) -> None:
        """Serve until interrupted; raises OSError if the address cannot be bound."""
        logging.basicConfig(level=logging.INFO)
        app = create_app(self.file_root, self.image_root)
        app.run(host=self.host, port=self.port, threaded=True)


def main(argv: Sequence[str] | None = None) -> None:
    """Start the server, reporting a failure to start on stderr."""
    parser = argparse.ArgumentParser(prog="rpanel", description="Serve the panel API.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    options = parser.parse_args(argv)
    server = Server(options.host, options.port)
    try:
        server.run()
    except OSError as exc:
        print(f"服务启动失败: {exc}", file=sys.stderr)


if __name__ == "__main__":
    main()