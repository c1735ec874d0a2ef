"""
CLI argument parsing and entry point.
"""

import argparse
import sys

from ..exceptions import ToolException
from ..tooltypes import TaskResult
from .commands import cmd_list, cmd_run, cmd_script
from .helpers import PRINTKWARGS
from .types import ArgType


def parse_option(text: str) -> tuple[str, str]:
    key, eq, value = text.partition("=")
    if not eq or not key.strip():
        raise argparse.ArgumentTypeError(f"Expected key=value, got {text!r}")
    return key.strip().replace("-", "_"), value


def augment_argument_parser(p: argparse.ArgumentParser, in_django=False, log_rather_than_print=True):
    def perhaps_add_db_arg(p: argparse.ArgumentParser):
        if in_django:
            p.add_argument(
                "--dbconn",
                default="default",
                help="Django DB connection key (default:'default'). If you don't know what this is, then you don't need it.",  # noqa: E501
            )
        else:
            p.add_argument(
                "dburl",
                help="PostgreSQL DB connection string. Trivially, this might be 'postgresql:///mydbname'. See https://www.postgresql.org/docs/current/static/libpq-connect.html#id-1.7.3.8.3.6 .",  # noqa: E501
            )

    def add_tool_args(p: argparse.ArgumentParser):
        p.add_argument("tool", help="Tool name, see the 'list' command")
        perhaps_add_db_arg(p)
        p.add_argument("objects", nargs="+", help="Target objects, as 'schema.name' or 'name' for the public schema")
        p.add_argument(
            "-o",
            "--option",
            dest="option_pairs",
            action="append",
            type=parse_option,
            default=[],
            metavar="KEY=VALUE",
            help="Tool option, may be repeated (e.g. -o full=true)",
        )
        p.add_argument(
            "--toolmodule",
            dest="toolmodules",
            action="append",
            default=[],
            help="Import additional tools from this module",
        )

    p.set_defaults(
        func=lambda whatevs: p.print_help(),
        in_django=in_django,
        log_rather_than_print=log_rather_than_print,
        verbosity=1,
        dburl=None,
        dbconn="default",
        timing=False,
        assume_yes=False,
        toolmodules=[],
        option_pairs=[],
    )
    p.add_argument(
        "-q",
        "--quiet",
        help="Be quiet (minimal output)",
        action="store_const",
        const=0,
        dest="verbosity",
    )
    p.add_argument("-v", "--verbose", help="Be verbose", action="store_const", const=2, dest="verbosity")
    subparsers = p.add_subparsers(title="commands")

    p_list = subparsers.add_parser("list", help="List available tools")
    p_list.add_argument(
        "--toolmodule",
        dest="toolmodules",
        action="append",
        default=[],
        help="Import additional tools from this module",
    )
    p_list.set_defaults(func=cmd_list)

    p_run = subparsers.add_parser("run", help="Execute a tool against the given objects")
    add_tool_args(p_run)
    p_run.add_argument("--timing", action="store_true", help="Report per-action statistics and execution time")
    p_run.add_argument("-y", "--yes", dest="assume_yes", action="store_true", help="Don't ask for confirmation")
    p_run.set_defaults(func=cmd_run)

    p_script = subparsers.add_parser("script", help="Print the SQL a tool would run, without running it")
    add_tool_args(p_script)
    p_script.set_defaults(func=cmd_script)

    return p


def args_from_namespace(ns: argparse.Namespace) -> ArgType:
    return ArgType(
        tool=getattr(ns, "tool", ""),
        objects=list(getattr(ns, "objects", [])),
        options=dict(getattr(ns, "option_pairs", [])),
        verbosity=ns.verbosity,
        log_rather_than_print=ns.log_rather_than_print,
        dburl=ns.dburl,
        dbconn=ns.dbconn,
        in_django=ns.in_django,
        timing=ns.timing,
        assume_yes=ns.assume_yes,
        toolmodules=list(ns.toolmodules),
    )


def main():
    p = augment_argument_parser(argparse.ArgumentParser(prog="dbmaint"), log_rather_than_print=False)
    ns = p.parse_args()
    try:
        outcome = ns.func(args_from_namespace(ns))
    except ToolException as argh:
        sys.exit(f"\n\n\nFAIL:\n\n{argh}")
    except KeyboardInterrupt:
        print("\nInterrupted.", **PRINTKWARGS)  # type: ignore
        sys.exit(1)
    if isinstance(outcome, TaskResult) and not outcome.ok:
        sys.exit(f"\n\n\nFAIL:\n\n{outcome.error}")


if __name__ == "__main__":
    main()
