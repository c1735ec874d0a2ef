"""
Command implementations shared by the CLI and the library API.
"""

import sys
from logging import getLogger

from ..exceptions import ToolException
from ..loader import get_tools, import_tool_modules
from ..tool import ToolHandler
from ..tooltypes import Task, TaskResult, object_label
from .executor import ToolRunListener, execute_task
from .helpers import cancel_on_interrupt, format_execution_time, get_tool, vprint
from .progress import NullProgressMonitor, WriterProgressMonitor
from .script import generate_script
from .session import SessionProvider, django_sessions, psycopg_sessions
from .types import ArgType

logger = getLogger(__name__)


def get_session_provider(args: ArgType, tool: ToolHandler) -> SessionProvider:
    if args.in_django:
        return django_sessions(args.dbconn)
    if not args.dburl:
        raise ToolException("No database URL given (argument, DBURL or DB_URL)")
    return psycopg_sessions(args.dburl, autocommit=not tool.is_run_in_separate_transaction())


def cmd_list(args: ArgType):
    """List registered tools"""
    if args.toolmodules:
        import_tool_modules(args.toolmodules)
    tools = get_tools()
    for name, tool in tools.items():
        print(f"{name:<12} {tool.description}")
    return list(tools)


def cmd_run(args: ArgType) -> TaskResult:
    """Execute a tool against the given objects"""
    tool = get_tool(args)
    if tool.is_need_confirmation() and not args.assume_yes:
        raise ToolException(f"Tool '{tool.name}' needs confirmation; pass --yes to proceed")

    monitor = (
        WriterProgressMonitor(sys.stderr)
        if args.verbosity and not args.log_rather_than_print
        else NullProgressMonitor()
    )
    listener = ToolRunListener()
    with cancel_on_interrupt(monitor):
        result = execute_task(
            tool,
            Task(tool.name, args.task_properties()),
            listener,
            get_session_provider(args, tool),
            monitor=monitor,
        )

    if args.timing:
        for obj, action, stat in listener.statistics:
            vprint(args, f"{object_label(obj)}: {action.title or action.script} ({format_execution_time(stat.execution_time_ms)})")
            vprint(args, f"\t{stat}")
    if result.isolated_errors:
        vprint(args, f"{len(result.isolated_errors)} action(s) failed; see the log for details")
    if result.cancelled:
        vprint(args, "Cancelled")
    return result


def cmd_script(args: ArgType) -> str:
    """Print the SQL a tool would execute, without executing it"""
    tool = get_tool(args)
    settings = tool.create_tool_settings()
    settings.load_configuration(None, args.task_properties())
    script = generate_script(tool, None, settings, get_session_provider(args, tool))
    if not args.log_rather_than_print:
        print(script, end="")
    return script
