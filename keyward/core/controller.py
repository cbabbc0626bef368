"""
Debounced Analysis Controller
==============================

Drives the ``idle -> loading -> success | error`` analysis cycle for a
password field that changes on every keystroke.

State lives in an immutable :class:`~keyward.core.models.AnalysisState`
and only changes through :func:`reduce`, a pure function of the current
state and one message:

- :class:`InputChanged` bumps ``request_id``; empty input returns to
  ``idle`` at once, anything else enters ``loading``.
- :class:`AnalysisSucceeded` / :class:`AnalysisFailed` carry the
  ``request_id`` they were issued under and are dropped unless it is still
  current, so a slow, superseded lookup can never overwrite a newer result.

:class:`AnalysisController` owns the side effects.  Each non-empty input
restarts a debounce timer; when the timer survives the quiet period the
strength score and the breach lookup run concurrently for that value.
Superseded analyses are not aborted once started; their results are simply
discarded by the reducer.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, Optional, Union

from shared.logger import KeywardLogger

from keyward.analyzers.breach import BreachChecker
from keyward.analyzers.strength import StrengthScorer
from keyward.core.history import HistoryStore
from keyward.core.models import (
    AnalysisResult,
    AnalysisState,
    AnalysisStatus,
    BreachOutcome,
)

DEFAULT_DEBOUNCE = 0.3


# ===================================================================== #
#  Messages and Reducer
# ===================================================================== #


@dataclass(frozen=True)
class InputChanged:
    empty: bool


@dataclass(frozen=True)
class AnalysisSucceeded:
    request_id: int
    result: AnalysisResult
    breach: BreachOutcome


@dataclass(frozen=True)
class AnalysisFailed:
    request_id: int
    message: str


Action = Union[InputChanged, AnalysisSucceeded, AnalysisFailed]


def reduce(state: AnalysisState, action: Action) -> AnalysisState:
    """Return the state that follows *state* after *action*.

    Completion messages whose ``request_id`` is not the current one are
    stale and leave *state* untouched (the same object is returned).
    """
    if isinstance(action, InputChanged):
        request_id = state.request_id + 1
        if action.empty:
            return AnalysisState(status=AnalysisStatus.IDLE, request_id=request_id)
        # The previous result stays visible while the new one loads.
        return state.model_copy(
            update={
                "status": AnalysisStatus.LOADING,
                "request_id": request_id,
                "error": None,
            }
        )

    if action.request_id != state.request_id:
        return state

    if isinstance(action, AnalysisSucceeded):
        return AnalysisState(
            status=AnalysisStatus.SUCCESS,
            request_id=action.request_id,
            result=action.result,
            breach=action.breach,
        )
    if isinstance(action, AnalysisFailed):
        return AnalysisState(
            status=AnalysisStatus.ERROR,
            request_id=action.request_id,
            error=action.message,
        )
    raise TypeError(f"unknown action: {action!r}")


# ===================================================================== #
#  Controller
# ===================================================================== #

Listener = Callable[[AnalysisState], None]


class AnalysisController:
    """Debounced, last-input-wins analysis of a changing password.

    Must be used from within a running event loop.

    Usage::

        controller = AnalysisController(StrengthScorer(), checker, history)
        controller.subscribe(render)
        controller.set_input("hunter")
        controller.set_input("hunter2")
        await controller.wait()
        print(controller.state.result.score)

    Args:
        scorer: Synchronous strength scorer.
        checker: Breach checker; ``None`` reports every breach outcome as
            ``unknown``.
        history: Store receiving an entry for each applied success.
        debounce: Quiet period in seconds before an input is analysed.
    """

    def __init__(
        self,
        scorer: StrengthScorer,
        checker: Optional[BreachChecker] = None,
        history: Optional[HistoryStore] = None,
        *,
        debounce: float = DEFAULT_DEBOUNCE,
    ) -> None:
        self.scorer = scorer
        self.checker = checker
        self.history = history if history is not None else HistoryStore()
        self.debounce = debounce
        self.logger = KeywardLogger("controller")

        self._state = AnalysisState()
        self._listeners: list[Listener] = []
        self._timer: Optional[asyncio.Task[None]] = None
        self._inflight: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> AnalysisState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with every new state; returns an unsubscribe hook."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def dispatch(self, action: Action) -> AnalysisState:
        """Apply *action* through the reducer and notify on change."""
        new_state = reduce(self._state, action)
        if new_state is not self._state:
            self._state = new_state
            for listener in list(self._listeners):
                listener(new_state)
        return self._state

    # ------------------------------------------------------------------ #
    #  Input
    # ------------------------------------------------------------------ #

    def set_input(self, password: str) -> None:
        """Register a new value of the password field."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        if not isinstance(password, str):
            password = ""
        self.dispatch(InputChanged(empty=not password))
        if not password:
            return

        request_id = self._state.request_id
        self._timer = asyncio.get_running_loop().create_task(
            self._debounced(request_id, password)
        )

    def clear(self) -> None:
        self.set_input("")

    async def wait(self) -> None:
        """Wait until no timer or analysis is pending."""
        while True:
            pending = [t for t in self._inflight if not t.done()]
            if self._timer is not None and not self._timer.done():
                pending.append(self._timer)
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def close(self) -> None:
        """Cancel any pending timer and let started analyses finish."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        await self.wait()

    # ------------------------------------------------------------------ #
    #  Analysis cycle
    # ------------------------------------------------------------------ #

    async def _debounced(self, request_id: int, password: str) -> None:
        await asyncio.sleep(self.debounce)
        if self._timer is asyncio.current_task():
            self._timer = None
        # Once fired, the analysis outlives later input changes.
        task = asyncio.get_running_loop().create_task(
            self._analyze(request_id, password)
        )
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _analyze(self, request_id: int, password: str) -> None:
        breach_task = asyncio.get_running_loop().create_task(
            self._check_breach(password)
        )
        try:
            result = self.scorer.score(password)
        except Exception as exc:
            breach_task.cancel()
            self.logger.error("Scoring failed for request %d: %s", request_id, exc)
            self.dispatch(AnalysisFailed(request_id, str(exc) or type(exc).__name__))
            return

        breach = await breach_task
        self.dispatch(AnalysisSucceeded(request_id, result, breach))
        if self._state.request_id != request_id:
            self.logger.debug("Discarded stale result for request %d", request_id)
            return
        self.history.append(password, result)

    async def _check_breach(self, password: str) -> BreachOutcome:
        if self.checker is None:
            return BreachOutcome.unknown("breach check disabled")
        try:
            return await self.checker.check(password)
        except Exception as exc:
            self.logger.warning("Breach check raised %s", type(exc).__name__)
            return BreachOutcome.unknown(type(exc).__name__)
