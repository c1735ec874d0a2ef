from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Generic, TypeVar

from .settings import ToolSettings
from .tooltypes import Action, ObjectT, StatisticsGenerator

SettingsT = TypeVar("SettingsT", bound=ToolSettings)


@dataclass(frozen=True)
class ToolCapabilities:
    """Optional behaviours of a tool, resolved once per tool instance."""

    produces_statistics: bool = False
    run_in_separate_transaction: bool = False
    needs_confirmation: bool = False
    open_target_objects_on_finish: bool = False

    @classmethod
    def of(cls, tool: "ToolHandler") -> "ToolCapabilities":
        return cls(
            produces_statistics=isinstance(tool, StatisticsGenerator),
            run_in_separate_transaction=tool.is_run_in_separate_transaction(),
            needs_confirmation=tool.is_need_confirmation(),
            open_target_objects_on_finish=tool.is_open_target_objects_on_finish(),
        )


class ToolHandler(ABC, Generic[ObjectT, SettingsT]):
    """
    A maintenance tool: produces the SQL actions to run against each object.

    Subclasses set `name` and implement `create_tool_settings` and
    `generate_object_queries`. Tools that also implement
    `get_execute_statistics` are treated as statistics-capable.

    `generate_object_queries` must be free of side effects and return the
    same actions for the same object and settings; it is shared by real
    execution and script generation.
    """

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""

    @abstractmethod
    def create_tool_settings(self) -> SettingsT:
        pass

    @abstractmethod
    def generate_object_queries(self, session, settings: SettingsT, obj: ObjectT) -> list[Action]:
        pass

    def is_run_in_separate_transaction(self) -> bool:
        return False

    def is_need_confirmation(self) -> bool:
        return False

    def is_open_target_objects_on_finish(self) -> bool:
        return False

    @property
    def capabilities(self) -> ToolCapabilities:
        return ToolCapabilities.of(self)

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.name!r}>"
