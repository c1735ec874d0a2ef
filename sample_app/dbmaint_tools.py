from dataclasses import dataclass, field

from dbmaint import Action, DBObject, ExecutionStatistics, ToolHandler, ToolSettings


@dataclass
class ClusterSettings(ToolSettings[DBObject]):
    index: str = field(default="", metadata={"required": True})
    analyze_after: bool = False


@dataclass
class ClusterStatistics(ExecutionStatistics):
    table: str = ""
    rows: int = -1


class ClusterTool(ToolHandler[DBObject, ClusterSettings]):
    """Example tool: physically reorder tables along an index"""

    name = "cluster"
    description = "Reorder tables along an index"

    def create_tool_settings(self) -> ClusterSettings:
        return ClusterSettings()

    def generate_object_queries(self, session, settings: ClusterSettings, obj: DBObject) -> list[Action]:
        actions = [
            Action.comment(f"-- Cluster {obj.label} on {settings.index}"),
            Action(f'CLUSTER {obj.db_object_identity()} USING "{settings.index}"', title=f"Cluster {obj.label}"),
        ]
        if settings.analyze_after:
            actions.append(Action(f"ANALYZE {obj.db_object_identity()}", title=f"Analyze {obj.label}"))
        return actions

    def get_execute_statistics(self, obj: DBObject, settings, action, session, statement):
        return [ClusterStatistics(table=obj.label, rows=statement.rowcount)]
