"""
Type definitions for the runner module.
"""

from dataclasses import dataclass, field


@dataclass
class ArgType:
    """
    Run configuration, as built by the CLI or the library API.

    Attributes:
        tool: Registered tool name
        objects: Target object names ("schema.name")
        options: Tool-specific properties
        verbosity: 0 = quiet, 1 = normal, 2+ = verbose
        log_rather_than_print: Route progress to logging instead of stderr
        dburl: Database URL (psycopg)
        dbconn: Django connection alias, used when in_django is set
        in_django: Open sessions on Django's connections
        timing: Report per-action execution time
        assume_yes: Skip confirmation for tools that need it
        toolmodules: Extra modules to import tools from
    """

    tool: str = ""
    objects: list[str] = field(default_factory=list)
    options: dict[str, str] = field(default_factory=dict)
    verbosity: int = 1
    log_rather_than_print: bool = True
    dburl: str | None = None
    dbconn: str = "default"
    in_django: bool = False
    timing: bool = False
    assume_yes: bool = False
    toolmodules: list[str] = field(default_factory=list)

    def task_properties(self) -> dict:
        return {"objects": list(self.objects), **self.options}
