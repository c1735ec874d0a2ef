"""
Dry run: render a tool's actions as one SQL script instead of executing them.
"""

from logging import getLogger

from ..tool import ToolHandler
from ..tooltypes import ProgressMonitor, object_label
from .executor import generate_actions
from .progress import NullProgressMonitor
from .session import SessionProvider

logger = getLogger(__name__)

STATEMENT_DELIMITER = ";\n"


def generate_script(
    tool: ToolHandler,
    monitor: ProgressMonitor | None,
    settings,
    open_session: SessionProvider,
) -> str:
    """
    Build the script the tool would run for every object of `settings`.

    Sessions are opened only so the tool can inspect the database while
    generating; nothing is executed through them. Comment actions are
    written out like any other action; actions with a blank script
    contribute nothing.

    Returns:
        str: Statements joined by ";\\n", trimmed, with one trailing
        delimiter unless empty

    Raises:
        SessionError: If a session cannot be opened for any object
        GenerationError: If the tool fails to generate actions
    """
    monitor = monitor or NullProgressMonitor()
    objects = settings.get_object_list()
    scripts = []
    for obj in objects:
        monitor.sub_task(f"Generate [{object_label(obj)}]")
        with open_session(monitor, obj, "Generate tool queries") as session:
            for action in generate_actions(tool, session, settings, obj):
                if not action.is_empty:
                    scripts.append(action.script)

    script = STATEMENT_DELIMITER.join(scripts).strip()
    if script:
        # join doesn't add the trailing delimiter
        script += STATEMENT_DELIMITER
    logger.debug("Generated %d statement(s) for %d object(s)", len(scripts), len(objects))
    return script
