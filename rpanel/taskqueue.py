"""Task queues, the application that holds them, and task descriptors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any


class CeleryError(Exception):
    """Base of all task-queue errors."""

    _template: str = "{}"

    def __init__(self, detail: object = "") -> None:
        self.detail = detail
        super().__init__(self._template.format(detail))


class TaskNotFound(CeleryError):
    """No task is registered under the requested name."""

    _template = "任务未找到: {}"


class InvalidTaskParam(CeleryError):
    """Task input could not be decoded or was not acceptable."""

    _template = "无效参数: {}"


class UnknownCeleryError(CeleryError):
    """Any other task-queue failure."""

    _template = "未知错误"

    def __init__(self) -> None:
        super().__init__("")


@dataclass
class Queue:
    """A named queue mapping task names to their handler identifiers."""

    queue_name: str
    tasks: dict[str, str] = field(default_factory=dict)


@dataclass
class CeleryApp:
    """Holds the broker location and the queues known to the application."""

    broker_url: str = ""
    queue_map: dict[str, Queue] = field(default_factory=dict)

    def add_queue(self, queue: Queue) -> None:
        """Register a queue under its name, replacing any queue of that name."""
        self.queue_map[queue.queue_name] = queue

    def get_queue(self, name: str) -> Queue:
        """Return the queue called ``name``; raises KeyError if there is none."""
        try:
            return self.queue_map[name]
        except KeyError:
            raise KeyError(f"queue not found: {name}") from None


@dataclass(frozen=True)
class Task:
    """Metadata about the task being executed."""

    name: str | None = None

    @classmethod
    def from_json(cls, value: Any) -> Task:
        """Decode a task from a JSON object; raises InvalidTaskParam if malformed."""
        if not isinstance(value, dict):
            raise InvalidTaskParam(f"invalid type: {value!r}, expected struct Task")
        name = value.get("name")
        if name is not None and not isinstance(name, str):
            raise InvalidTaskParam(f"invalid type for field 'name': {name!r}, expected a string")
        return cls(name=name)


class TaskFactory(ABC):
    """Something that knows how to register itself with an application."""

    @abstractmethod
    def register(self, app: CeleryApp) -> None:
        """Add this factory's queues or tasks to ``app``."""


def register_all(factories: Iterable[TaskFactory], app: CeleryApp) -> None:
    """Register every factory with ``app`` in order."""
    for factory in factories:
        factory.register(app)