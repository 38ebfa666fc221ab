"""Storing, listing and serving uploaded images in one directory."""

from __future__ import annotations

import logging
import os
import shutil
import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Union

from rpanel.errors import AppIOError, InvalidParam, NotFound
from rpanel.response import Response

DEFAULT_IMAGE_ROOT = "/mnt/Leven/img"
IMAGE_EXTENSIONS = ("png", "jpg", "jpeg", "gif", "bmp")

log = logging.getLogger(__name__)

Upload = tuple[Union[str, None], Union[bytes, BinaryIO]]


def _upload_extension(file_name: str) -> str:
    return file_name.rsplit(".", 1)[-1].lower()


@dataclass
class ImageStore:
    """A flat directory of images named by random identifiers."""

    root: Path = Path(DEFAULT_IMAGE_ROOT)

    def __post_init__(self) -> None:
        self.root = Path(self.root)

    def get(self, name: str) -> tuple[bytes, str]:
        """Return the image's bytes and its ``image/<ext>`` content type."""
        path = self.root / name
        if not path.is_file():
            raise NotFound("图片不存在")
        content_type = f"image/{path.suffix[1:]}"
        try:
            return path.read_bytes(), content_type
        except OSError as exc:
            raise AppIOError(exc) from exc

    def _ensure_root(self) -> None:
        if self.root.exists():
            return
        try:
            os.mkdir(self.root)
        except OSError as exc:
            raise AppIOError(exc) from exc
        log.info("Created image root directory: %s", self.root)

    def save(self, files: Iterable[Upload]) -> Response[list[str]]:
        """Store uploads given as (file name, bytes or binary stream) pairs.

        Files are written in order under new random names; the first file with
        an unsupported extension raises InvalidParam, leaving earlier ones saved.
        """
        self._ensure_root()
        saved: list[str] = []
        for file_name, content in files:
            ext = _upload_extension(file_name if file_name is not None else "unknown")
            if ext not in IMAGE_EXTENSIONS:
                raise InvalidParam(f"Unsupported file type: {ext}")
            stored_name = f"{uuid.uuid4()}.{ext}"
            saved.append(stored_name)
            try:
                with open(self.root / stored_name, "wb") as out:
                    if isinstance(content, (bytes, bytearray, memoryview)):
                        out.write(content)
                    else:
                        shutil.copyfileobj(content, out)
            except OSError as exc:
                raise AppIOError(exc) from exc
        return Response(data=saved, msg="Success", code=0)

    def list(self) -> Response[list[str]]:
        """Name every image file in the store."""
        if not self.root.exists():
            return Response(data=[], msg="No images found", code=0)
        images: list[str] = []
        try:
            with os.scandir(self.root) as entries:
                for entry in entries:
                    path = Path(entry.path)
                    if path.is_file() and path.suffix[1:].lower() in IMAGE_EXTENSIONS:
                        images.append(entry.name)
        except OSError as exc:
            raise AppIOError(exc) from exc
        return Response(data=images, msg="Success", code=0)

    def delete(self, path: str, dir: str) -> str:
        """Acknowledge a deletion request; no file is removed."""
        print(f"path: {path}, dir: {dir}")
        return "删除成功"