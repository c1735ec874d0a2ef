"""
Library API: run or preview a tool from Python code.

    from dbmaint.api import run_tool, tool_script

    result = run_tool("vacuum", ["public.orders"], options={"analyze": True})
    print(tool_script("reindex", ["public.orders"]))

The database URL defaults to the DBURL (or DB_URL) environment variable;
a `.env` file is honoured.
"""

import os
from collections.abc import Iterable, Mapping
from typing import Any

from dotenv import load_dotenv

from .runner import ArgType
from .runner import cmd_run as _cmd_run
from .runner import cmd_script as _cmd_script
from .tooltypes import TaskResult

load_dotenv()
_DBURL = os.environ.get("DBURL", os.environ.get("DB_URL"))


def run_tool(
    tool: str,
    objects: Iterable[str],
    dburl: str | None = _DBURL,
    options: Mapping[str, Any] | None = None,
    toolmodules: list[str] | None = None,
    assume_yes: bool = False,
    timing: bool = False,
    use_django: bool = False,
    dbconn: str = "default",
) -> TaskResult:
    """
    Execute `tool` against `objects`.

    Statement failures on individual objects are isolated; inspect
    `TaskResult.isolated_errors` for them. `TaskResult.error` holds the
    first failure that aborted or skipped work.
    """
    args = ArgType(
        tool=tool,
        objects=list(objects),
        options=dict(options or {}),
        dburl=dburl,
        dbconn=dbconn,
        in_django=use_django,
        toolmodules=toolmodules or [],
        assume_yes=assume_yes,
        timing=timing,
        log_rather_than_print=True,
    )
    return _cmd_run(args)


def tool_script(
    tool: str,
    objects: Iterable[str],
    dburl: str | None = _DBURL,
    options: Mapping[str, Any] | None = None,
    toolmodules: list[str] | None = None,
    use_django: bool = False,
    dbconn: str = "default",
) -> str:
    """Return the SQL script `tool` would run against `objects`."""
    args = ArgType(
        tool=tool,
        objects=list(objects),
        options=dict(options or {}),
        dburl=dburl,
        dbconn=dbconn,
        in_django=use_django,
        toolmodules=toolmodules or [],
        log_rather_than_print=True,
    )
    return _cmd_script(args)
