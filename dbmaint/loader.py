from importlib import import_module
from inspect import isabstract, isclass
from logging import getLogger
from types import ModuleType

from dbmaint.exceptions import UnknownToolError
from dbmaint.tool import ToolHandler

logger = getLogger(__name__)

AUTOLOAD_MODULENAME = "dbmaint.tools"


def get_tools() -> dict[str, type[ToolHandler]]:
    """
    Returns all concrete subclasses of "ToolHandler"
    that carry a name, keyed by that name
    """

    def all_subclasses(cls):
        return set(cls.__subclasses__()).union(
            [s for c in cls.__subclasses__() for s in all_subclasses(c)]
        )

    import_module(AUTOLOAD_MODULENAME)
    return {
        tool.name: tool
        for tool in sorted(all_subclasses(ToolHandler), key=lambda t: t.__qualname__)
        if tool.name and not isabstract(tool)
    }


def tools_in_module(module: ModuleType) -> list[type[ToolHandler]]:
    return [
        obj
        for obj in vars(module).values()
        if isclass(obj) and issubclass(obj, ToolHandler) and obj.name and not isabstract(obj)
    ]


def import_tool_modules(module_names: list[str]) -> list[type[ToolHandler]]:
    found = []
    for module_name in module_names:
        logger.debug("Importing tools from %s", module_name)
        found.extend(tools_in_module(import_module(module_name)))
    return found


def tool_by_name(name: str) -> type[ToolHandler]:
    tools = get_tools()
    try:
        return tools[name]
    except KeyError:
        raise UnknownToolError(f"Unknown tool; known tools are: {', '.join(tools) or '<none>'}", name)
