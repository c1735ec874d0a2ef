from .tooltypes import Action, DBObject, ExecutionStatistics, Task, TaskResult  # noqa: F401
from .settings import ToolSettings  # noqa: F401
from .tool import ToolCapabilities, ToolHandler  # noqa: F401
from .exceptions import (
    ConfigurationError,  # noqa: F401
    GenerationError,  # noqa: F401
    SessionError,  # noqa: F401
    StatementError,  # noqa: F401
    ToolException,  # noqa: F401
)
