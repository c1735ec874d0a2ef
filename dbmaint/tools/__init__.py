"""
PostgreSQL maintenance tools bundled with dbmaint.
"""

from .analyze import AnalyzeTool  # noqa: F401
from .reindex import ReindexTool  # noqa: F401
from .truncate import TruncateTool  # noqa: F401
from .vacuum import VacuumStatistics, VacuumTool  # noqa: F401
