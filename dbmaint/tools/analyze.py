from dataclasses import dataclass

from ..settings import ToolSettings
from ..tool import ToolHandler
from ..tooltypes import Action, DBObject


@dataclass
class AnalyzeSettings(ToolSettings[DBObject]):
    verbose: bool = False
    skip_locked: bool = False


class AnalyzeTool(ToolHandler[DBObject, AnalyzeSettings]):
    name = "analyze"
    description = "Update planner statistics"

    def create_tool_settings(self) -> AnalyzeSettings:
        return AnalyzeSettings()

    def generate_object_queries(self, session, settings: AnalyzeSettings, obj: DBObject) -> list[Action]:
        options = [opt for opt, enabled in (("VERBOSE", settings.verbose), ("SKIP_LOCKED", settings.skip_locked)) if enabled]
        opts = f"({', '.join(options)}) " if options else ""
        return [Action(f"ANALYZE {opts}{obj.db_object_identity()}", title=f"Analyze {obj.label}")]
