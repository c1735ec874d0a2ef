from dataclasses import dataclass

from ..settings import ToolSettings
from ..tool import ToolHandler
from ..tooltypes import Action, DBObject


@dataclass
class TruncateSettings(ToolSettings[DBObject]):
    restart_identity: bool = False
    cascade: bool = False


class TruncateTool(ToolHandler[DBObject, TruncateSettings]):
    """Empty tables. Destructive, so it asks for confirmation first."""

    name = "truncate"
    description = "Remove all rows from tables"

    def create_tool_settings(self) -> TruncateSettings:
        return TruncateSettings()

    def generate_object_queries(self, session, settings: TruncateSettings, obj: DBObject) -> list[Action]:
        script = f"TRUNCATE TABLE {obj.db_object_identity()}"
        if settings.restart_identity:
            script += " RESTART IDENTITY"
        if settings.cascade:
            script += " CASCADE"
        return [Action(script, title=f"Truncate {obj.label}")]

    def is_run_in_separate_transaction(self) -> bool:
        return True

    def is_need_confirmation(self) -> bool:
        return True
