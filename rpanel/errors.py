"""Application errors that carry an HTTP status and render as a Response."""

from __future__ import annotations

from http import HTTPStatus

from rpanel.response import Response


class AppError(Exception):
    """Base of all errors reported to API clients."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    _template: str = "{}"

    def __init__(self, detail: object = "") -> None:
        self.detail = detail
        super().__init__(self._template.format(detail))

    def to_response(self) -> Response[None]:
        """Render the error as a response envelope."""
        return Response(data=None, msg=str(self), code=int(self.status_code))


class AppIOError(AppError):
    """A filesystem or other I/O failure."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    _template = "IO错误: {}"


class InvalidParam(AppError):
    """A request parameter was not acceptable."""

    status_code = HTTPStatus.BAD_REQUEST
    _template = "无效参数: {}"


class Unauthorized(AppError):
    """The caller is not allowed to access the resource."""

    status_code = HTTPStatus.UNAUTHORIZED
    _template = "未授权访问"

    def __init__(self) -> None:
        super().__init__("")


class NotFound(AppError):
    """The requested resource does not exist."""

    status_code = HTTPStatus.NOT_FOUND
    _template = "找不到资源: {}"


class UnknownError(AppError):
    """Any other failure."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    _template = "未知错误: {}"