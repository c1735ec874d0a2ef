from dataclasses import dataclass

from ..settings import ToolSettings
from ..tool import ToolHandler
from ..tooltypes import Action, DBObject, ExecutionStatistics


@dataclass
class VacuumSettings(ToolSettings[DBObject]):
    full: bool = False
    freeze: bool = False
    analyze: bool = False
    disable_page_skipping: bool = False
    skip_locked: bool = False


@dataclass
class VacuumStatistics(ExecutionStatistics):
    relation: str = ""
    live_tuples: int | None = None
    dead_tuples: int | None = None


class VacuumTool(ToolHandler[DBObject, VacuumSettings]):
    """
    VACUUM each table, reporting live/dead tuple counts afterwards.

    VACUUM refuses to run inside a transaction block, so sessions must be
    in autocommit mode.
    """

    name = "vacuum"
    description = "Garbage-collect and optionally analyze tables"

    def create_tool_settings(self) -> VacuumSettings:
        return VacuumSettings()

    def generate_object_queries(self, session, settings: VacuumSettings, obj: DBObject) -> list[Action]:
        options = [
            opt
            for opt, enabled in (
                ("FULL", settings.full),
                ("FREEZE", settings.freeze),
                ("ANALYZE", settings.analyze),
                ("DISABLE_PAGE_SKIPPING", settings.disable_page_skipping),
                ("SKIP_LOCKED", settings.skip_locked),
            )
            if enabled
        ]
        opts = f"({', '.join(options)}) " if options else ""
        return [Action(f"VACUUM {opts}{obj.db_object_identity()}", title=f"Vacuum {obj.label}")]

    def get_execute_statistics(self, obj: DBObject, settings, action, session, statement):
        session.cursor.execute(
            """
            SELECT n_live_tup, n_dead_tup
            FROM pg_catalog.pg_stat_user_tables
            WHERE schemaname = %s AND relname = %s
            """,
            (obj.schema, obj.name),
        )
        row = session.cursor.fetchone()
        if row is None:
            return [VacuumStatistics(relation=obj.label)]
        return [VacuumStatistics(relation=obj.label, live_tuples=row[0], dead_tuples=row[1])]
