from dataclasses import dataclass

from ..settings import ToolSettings
from ..tool import ToolHandler
from ..tooltypes import Action, DBObject

TARGET_KINDS = {"table": "TABLE", "index": "INDEX", "schema": "SCHEMA"}


@dataclass
class ReindexSettings(ToolSettings[DBObject]):
    concurrently: bool = False
    verbose: bool = False


class ReindexTool(ToolHandler[DBObject, ReindexSettings]):
    name = "reindex"
    description = "Rebuild indexes of tables, single indexes or whole schemas"

    def create_tool_settings(self) -> ReindexSettings:
        return ReindexSettings()

    def generate_object_queries(self, session, settings: ReindexSettings, obj: DBObject) -> list[Action]:
        try:
            kind = TARGET_KINDS[obj.kind]
        except KeyError:
            raise ValueError(f"Cannot reindex a {obj.kind}")
        target = f'"{obj.name}"' if kind == "SCHEMA" else obj.db_object_identity()
        opts = "(VERBOSE) " if settings.verbose else ""
        concurrently = "CONCURRENTLY " if settings.concurrently else ""
        return [
            Action.comment(f"-- Rebuild indexes of {obj.kind} {obj.label}"),
            Action(f"REINDEX {opts}{kind} {concurrently}{target}", title=f"Reindex {obj.label}"),
        ]
