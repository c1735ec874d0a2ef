"""
Tool execution engine.

Runs a tool's generated actions against every target object in turn:

    for each object (in settings order):
        open a session
        generate actions              -- a failure here aborts the run
        for each action:
            stop if cancelled
            skip comments and empty scripts
            execute, collect statistics  -- a failure here is isolated
        release the session           -- always, even when cancelled

The listener hears `task_started` once and `task_finished` exactly once,
carrying the first unrecovered error of the run (or None). Listeners that
also implement `execution_started`/`execution_finished` hear those once per
run of a `Task`, nested inside the task pair.
"""

from collections.abc import Sequence
from logging import getLogger
from typing import Generic, TextIO

from ..exceptions import GenerationError, SessionError
from ..tool import SettingsT, ToolCapabilities, ToolHandler
from ..tooltypes import (
    Action,
    ExecutionListener,
    ExecutionObserver,
    ExecutionStatistics,
    ObjectT,
    ProgressMonitor,
    StatisticsListener,
    Task,
    TaskResult,
    object_label,
)
from .helpers import format_execution_time, timer
from .progress import NullProgressMonitor, WriterProgressMonitor
from .session import Session, SessionProvider

logger = getLogger(__name__)


class ToolRunListener:
    """
    Listener that logs task boundaries and keeps the statistics it receives.
    """

    def __init__(self):
        self.statistics: list[tuple[object, Action, ExecutionStatistics]] = []
        self.finished_error: BaseException | None = None

    def task_started(self, settings) -> None:
        logger.info("Tool started on %d object(s)", len(settings.get_object_list()))

    def task_finished(self, settings, error: BaseException | None) -> None:
        self.finished_error = error
        if error is None:
            logger.info("Tool finished")
        else:
            logger.info("Tool finished with error: %s", error)

    def execution_started(self, task: Task) -> None:
        logger.debug("Execution of %r started", task.type_name)

    def execution_finished(self, task: Task, error: BaseException | None) -> None:
        logger.debug("Execution of %r finished", task.type_name)

    def handle_action_statistics(
        self, obj, action: Action, session, statistics: Sequence[ExecutionStatistics]
    ) -> None:
        for stat in statistics:
            self.statistics.append((obj, action, stat))


class ToolExecutor(Generic[ObjectT, SettingsT]):
    """
    Executes one tool over a resolved settings instance.

    Args:
        tool: The tool generating the actions
        open_session: Session provider, called once per object
        listener: Receives start/finish and, when both the tool and the
            listener support it, per-action statistics; execution-level
            start/finish too when it implements `ExecutionObserver`
        monitor: Progress monitor, also polled for cancellation
        log_stream: Optional text sink for this run only; progress labels
            are echoed to it when no monitor is given
    """

    def __init__(
        self,
        tool: ToolHandler[ObjectT, SettingsT],
        open_session: SessionProvider,
        listener: ExecutionListener,
        monitor: ProgressMonitor | None = None,
        log_stream: TextIO | None = None,
    ):
        self.tool = tool
        self.open_session = open_session
        self.listener = listener
        self.log_stream = log_stream
        if monitor is None:
            monitor = WriterProgressMonitor(log_stream) if log_stream is not None else NullProgressMonitor()
        self.monitor = monitor
        self.capabilities = ToolCapabilities.of(tool)
        self.collects_statistics = self.capabilities.produces_statistics and isinstance(
            listener, StatisticsListener
        )
        self.observes_execution = isinstance(listener, ExecutionObserver)

    def run(self, settings: SettingsT, task: Task | None = None) -> TaskResult:
        """
        Process every object of `settings`, in order.

        Returns:
            TaskResult: The outcome also handed to `listener.task_finished`
        """
        result = TaskResult()
        objects = settings.get_object_list()
        tool_name = task.type_name if task else self.tool.name
        purpose = f"Execute {tool_name}"

        self.listener.task_started(settings)
        if task is not None and self.observes_execution:
            self.listener.execution_started(task)  # type: ignore
        try:
            self.monitor.begin_task(f"Execute tool '{tool_name}'", len(objects))
            for ix, obj in enumerate(objects):
                if self.monitor.is_cancelled():
                    result.cancelled = True
                    break
                self.monitor.sub_task(f"Process [{object_label(obj)}] ({ix + 1}/{len(objects)})")
                try:
                    self._process_object(obj, settings, result, purpose)
                except SessionError as e:
                    logger.error("Skipping %s: %s", object_label(obj), e)
                    if result.error is None:
                        result.error = e
                finally:
                    self.monitor.worked(1)
                result.objects_processed += 1
                if result.cancelled:
                    break
        except Exception as e:
            if result.error is None:
                result.error = e
        finally:
            self.monitor.done()
            if result.cancelled:
                logger.debug("Tool '%s' cancelled", tool_name)
            if result.error is not None:
                logger.error("Tool '%s' failed: %s", tool_name, result.error)
            if task is not None and self.observes_execution:
                self.listener.execution_finished(task, result.error)  # type: ignore
            self.listener.task_finished(settings, result.error)

        if self.log_stream is not None:
            self.log_stream.write("Tool execution finished\n")
            self.log_stream.flush()
        return result

    def _process_object(self, obj: ObjectT, settings: SettingsT, result: TaskResult, purpose: str):
        with self.open_session(self.monitor, obj, purpose) as session:
            actions = generate_actions(self.tool, session, settings, obj)
            for action in actions:
                if self.monitor.is_cancelled():
                    result.cancelled = True
                    break
                if action.title:
                    self.monitor.sub_task(action.title)
                try:
                    if action.is_comment or action.is_empty:
                        continue
                    self._execute_action(obj, settings, action, session)
                    result.actions_executed += 1
                except Exception as e:
                    logger.warning("Error executing query on %s: %s", object_label(obj), getattr(e, "dberror", e))
                    logger.debug("Error executing query", exc_info=True)
                    result.isolated_errors.append(e)
                finally:
                    self.monitor.worked(1)

    def _execute_action(self, obj: ObjectT, settings: SettingsT, action: Action, session: Session):
        action_timer = timer()
        next(action_timer)
        statement = session.execute(action.script)
        exec_time = int(next(action_timer) * 1000)
        if not self.collects_statistics:
            return
        statistics = self.tool.get_execute_statistics(obj, settings, action, session, statement)  # type: ignore
        self.monitor.sub_task("\tFinished in " + format_execution_time(exec_time))
        if statistics:
            for stat in statistics:
                stat.execution_time_ms = exec_time
            self.listener.handle_action_statistics(obj, action, session, list(statistics))  # type: ignore


def generate_actions(tool: ToolHandler, session, settings, obj) -> list[Action]:
    """
    Ask `tool` for the actions of one object.

    Raises:
        GenerationError: Wrapping whatever the tool raised
    """
    try:
        return list(tool.generate_object_queries(session, settings, obj))
    except GenerationError:
        raise
    except Exception as e:
        raise GenerationError("Cannot generate actions", obj, e) from e


def execute_task(
    tool: ToolHandler,
    task: Task,
    listener: ExecutionListener,
    open_session: SessionProvider,
    context=None,
    monitor: ProgressMonitor | None = None,
    log_stream: TextIO | None = None,
) -> TaskResult:
    """
    Resolve the tool settings from `task.properties`, then run the tool.

    Raises:
        ConfigurationError: Before anything runs, if the properties do not
            resolve; the listener is not notified in that case.
    """
    settings = tool.create_tool_settings()
    settings.load_configuration(context, task.properties)
    executor = ToolExecutor(tool, open_session, listener, monitor=monitor, log_stream=log_stream)
    return executor.run(settings, task)
