"""
Runner package for dbmaint tool execution.

Structure:
    types.py - Run configuration (ArgType)
    helpers.py - Utility functions (vprint, timer, get_tool)
    progress.py - Progress monitors with cooperative cancellation
    session.py - Per-object database sessions and providers
    executor.py - Tool execution engine (ToolExecutor, execute_task)
    script.py - Dry-run script generation (generate_script)
    commands.py - Command implementations (cmd_*)
    cli.py - CLI argument parsing (augment_argument_parser, main)
"""

from .commands import cmd_list, cmd_run, cmd_script, get_session_provider
from .executor import ToolExecutor, ToolRunListener, execute_task, generate_actions
from .helpers import format_execution_time, get_tool, timer, vprint
from .progress import NullProgressMonitor, WriterProgressMonitor
from .script import STATEMENT_DELIMITER, generate_script
from .session import Session, django_sessions, psycopg_sessions
from .types import ArgType

__all__ = [
    # Helpers
    "vprint",
    "timer",
    "format_execution_time",
    "get_tool",
    # Types
    "ArgType",
    # Progress
    "NullProgressMonitor",
    "WriterProgressMonitor",
    # Sessions
    "Session",
    "psycopg_sessions",
    "django_sessions",
    # Executor
    "ToolExecutor",
    "ToolRunListener",
    "execute_task",
    "generate_actions",
    # Script generation
    "STATEMENT_DELIMITER",
    "generate_script",
    # Commands
    "cmd_list",
    "cmd_run",
    "cmd_script",
    "get_session_provider",
]
