"""The JSON envelope that every API reply is wrapped in."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Generic, TypeVar

T = TypeVar("T")


def _plain(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    return value


@dataclass
class Response(Generic[T]):
    """A reply carrying optional data, a message and an application code."""

    data: T | None = None
    msg: str = ""
    code: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return the envelope as plain JSON-compatible values."""
        return {"data": _plain(self.data), "msg": self.msg, "code": self.code}

    def to_json(self) -> str:
        """Serialise the envelope to a JSON string."""
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str | bytes) -> Response[Any]:
        """Parse an envelope from JSON; raises ValueError if it is malformed."""
        obj = json.loads(text)
        if not isinstance(obj, dict):
            raise ValueError("response must be a JSON object")
        try:
            msg = obj["msg"]
            code = obj["code"]
        except KeyError as exc:
            raise ValueError(f"missing field {exc.args[0]!r}") from None
        if not isinstance(msg, str):
            raise ValueError("field 'msg' must be a string")
        if isinstance(code, bool) or not isinstance(code, int) or not 0 <= code <= 0xFFFF:
            raise ValueError("field 'code' must be an integer from 0 to 65535")
        return cls(data=obj.get("data"), msg=msg, code=code)

    def http_status(self) -> int:
        """Map the application code to an HTTP status."""
        if self.code == 0:
            return HTTPStatus.OK
        if self.code == 404:
            return HTTPStatus.NOT_FOUND
        return HTTPStatus.INTERNAL_SERVER_ERROR