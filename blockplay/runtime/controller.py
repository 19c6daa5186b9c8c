"""
Blockplay Run Controller

Drives one generate -> execute -> settle cycle at a time:

    IDLE --start--> RUNNING --> SETTLING --> IDLE

Every failure inside a cycle ends up as a single output event and the
controller always returns to IDLE. A start request while a run is in
flight is ignored.

The "ran but printed nothing" notice is decided after a fixed settle delay
from the events appended since start, so a reset during the run does not
hide output the program already produced.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, List, Optional

from blockplay.config import RunConfig
from blockplay.errors import GenerationError
from blockplay.generator.codegen import CodeGenerator
from blockplay.graph import BlockGraph
from blockplay.runtime.channel import OutputChannel, OutputEvent
from blockplay.runtime.executor import Executor
from blockplay.runtime.state import RunReport, RunSession, RunState, RunStatus

logger = logging.getLogger(__name__)

StateListener = Callable[[RunState], None]


class RunController:
    """State machine for program runs."""

    def __init__(self,
                 generator: CodeGenerator,
                 executor: Executor,
                 channel: OutputChannel,
                 graph_source: Callable[[], BlockGraph],
                 config: Optional[RunConfig] = None):
        self.generator = generator
        self.executor = executor
        self.channel = channel
        self.graph_source = graph_source
        self.config = config or RunConfig()
        self.sink = channel.append
        self._state = RunState.IDLE
        self._session: Optional[RunSession] = None
        self._run_count = 0
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is not RunState.IDLE

    @property
    def session(self) -> Optional[RunSession]:
        return self._session

    def add_listener(self, listener: StateListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def start(self) -> Optional[RunReport]:
        """
        Run the current graph once.

        Returns:
            RunReport of the finished cycle, or None if a run was already in flight
        """
        if self._state is not RunState.IDLE:
            logger.debug("Start ignored, controller is %s", self._state.value)
            return None

        self._run_count += 1
        session = RunSession(run_number=self._run_count, start_length=self.channel.length())
        self._session = session

        def collect(event: Optional[OutputEvent]) -> None:
            if event is not None:
                session.events.append(event)

        self.channel.subscribe(collect)
        self._set_state(RunState.RUNNING)
        started = time.perf_counter()
        try:
            if self.config.start_delay:
                await asyncio.sleep(self.config.start_delay)
            self._run_once(session)

            self._set_state(RunState.SETTLING)
            await asyncio.sleep(self.config.settle_delay)
            self._settle(session)
            await asyncio.sleep(self.config.idle_delay)
        finally:
            self.channel.unsubscribe(collect)
            self._session = None
            self._set_state(RunState.IDLE)

        report = RunReport(
            run_number=session.run_number,
            status=session.status,
            source=session.source,
            events=list(session.events),
            error=session.error,
            duration_ms=(time.perf_counter() - started) * 1000,
        )
        logger.info("Run %d finished: %s (%d events)",
                    report.run_number, report.status.value, len(report.events))
        return report

    def reset(self) -> None:
        """Clear the output log. Does not touch the run state."""
        self.channel.reset()

    def _run_once(self, session: RunSession) -> None:
        try:
            source = self.generator.generate(self.graph_source())
        except GenerationError as e:
            self._fail(session, RunStatus.GENERATION_FAILED, e.message)
            return
        except Exception as e:
            logger.exception("Unexpected failure while generating code")
            self._fail(session, RunStatus.GENERATION_FAILED, str(e) or type(e).__name__)
            return

        session.source = source
        if not source.strip():
            session.status = RunStatus.EMPTY
            self.channel.append(self.config.empty_program_message)
            return

        try:
            result = self.executor.execute(source, self.sink)
        except Exception as e:
            logger.exception("Unexpected failure while executing code")
            self._fail(session, RunStatus.EXECUTION_FAILED, str(e) or type(e).__name__)
            return

        if result.success:
            session.status = RunStatus.COMPLETED
        else:
            self._fail(session, RunStatus.EXECUTION_FAILED, result.error.message)

    def _settle(self, session: RunSession) -> None:
        if not session.events:
            self.channel.append(self.config.no_output_message)
            if session.status is RunStatus.COMPLETED:
                session.status = RunStatus.NO_OUTPUT

    def _fail(self, session: RunSession, status: RunStatus, message: str) -> None:
        logger.warning("Run %d failed: %s", session.run_number, message)
        session.status = status
        session.error = message
        self.channel.append(self.config.error_message(message))

    def _set_state(self, state: RunState) -> None:
        if state is self._state:
            return
        logger.debug("Run controller %s -> %s", self._state.value, state.value)
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.warning("State listener %r failed", listener, exc_info=True)
