"""
Data contracts shared by tools, the executor and the script generator.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, NamedTuple, Protocol, TypeVar, runtime_checkable

PUBLIC_SCHEMA = "public"


class DBObject(NamedTuple):
    """
    A target database object, addressed by schema and name.

    `kind` is informational ("table", "index", ...) and does not take part
    in identity quoting.
    """

    schema: str
    name: str
    kind: str = "table"

    @classmethod
    def parse(cls, text: str, kind: str = "table") -> "DBObject":
        schema, dot, name = text.strip().rpartition(".")
        return cls(schema if dot else PUBLIC_SCHEMA, name, kind)

    @property
    def label(self) -> str:
        if self.schema == PUBLIC_SCHEMA:
            return self.name
        return f"{self.schema}.{self.name}"

    def db_object_identity(self) -> str:
        return '"%s"."%s"' % (self.schema.replace('"', '""'), self.name.replace('"', '""'))

    def __str__(self):
        return self.label


@runtime_checkable
class Labelled(Protocol):
    @property
    def label(self) -> str: ...


ObjectT = TypeVar("ObjectT", bound=Labelled)


def object_label(obj: Any) -> str:
    return obj.label if isinstance(obj, Labelled) else str(obj)


@dataclass(frozen=True)
class Action:
    """
    One unit of generated SQL work.

    Comment actions are never executed but are written out verbatim by the
    script generator.
    """

    script: str | None = None
    title: str | None = None
    is_comment: bool = False

    @classmethod
    def comment(cls, text: str, title: str | None = None) -> "Action":
        return cls(script=text, title=title, is_comment=True)

    @property
    def is_empty(self) -> bool:
        return not (self.script or "").strip()


@dataclass
class ExecutionStatistics:
    """Per-action statistics; tools subclass this to add their own fields."""

    execution_time_ms: int = 0


@dataclass
class Task:
    type_name: str
    properties: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class TaskResult:
    """
    Aggregate outcome of one run.

    `error` holds the first unrecovered error only. Statement failures that
    were isolated are kept in `isolated_errors` for diagnostics.
    """

    error: BaseException | None = None
    isolated_errors: list[BaseException] = field(default_factory=list)
    cancelled: bool = False
    objects_processed: int = 0
    actions_executed: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


class Cursor(Protocol):
    rowcount: int

    def execute(self, query, vars=None): ...

    def fetchone(self): ...

    def fetchall(self) -> list[tuple]: ...

    def close(self): ...


class ProgressMonitor(Protocol):
    def begin_task(self, label: str, total: int) -> None: ...

    def sub_task(self, label: str) -> None: ...

    def worked(self, units: int) -> None: ...

    def is_cancelled(self) -> bool: ...

    def done(self) -> None: ...


class ExecutionListener(Protocol):
    def task_started(self, settings) -> None: ...

    def task_finished(self, settings, error: BaseException | None) -> None: ...


@runtime_checkable
class ExecutionObserver(Protocol):
    def execution_started(self, task: Task) -> None: ...

    def execution_finished(self, task: Task, error: BaseException | None) -> None: ...


@runtime_checkable
class StatisticsListener(Protocol):
    def handle_action_statistics(
        self, obj, action: Action, session, statistics: Sequence[ExecutionStatistics]
    ) -> None: ...


@runtime_checkable
class StatisticsGenerator(Protocol):
    def get_execute_statistics(
        self, obj, settings, action: Action, session, statement
    ) -> Sequence[ExecutionStatistics]: ...
