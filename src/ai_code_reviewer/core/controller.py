"""Request lifecycle controller.

Owns the single ``RequestState`` for a review session and drives it
through Idle -> Validating -> InFlight -> Success | Failed. Every
transition is re-emitted to subscribed listeners.

The controller is meant for a single-threaded asyncio caller. The busy
check and the move to ``Validating`` happen before the first await, so a
second ``analyze`` call made while a request is outstanding is rejected
without touching the model client or the current state.

There is no timeout or cancellation primitive: if the model client never
resolves, the controller stays ``InFlight``.
"""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

from ai_code_reviewer.core.prompt_builder import build_review_prompt
from ai_code_reviewer.core.response_parser import parse_analysis_response
from ai_code_reviewer.errors import SchemaViolationError, TransportError
from ai_code_reviewer.models.analysis import AnalysisRequest, AnalysisResult
from ai_code_reviewer.models.language import Language
from ai_code_reviewer.models.schema import response_schema
from ai_code_reviewer.models.state import (
    BUSY_STATUSES,
    AnalysisError,
    ErrorKind,
    Failed,
    Idle,
    InFlight,
    RequestState,
    Success,
    Validating,
)
from ai_code_reviewer.utils.logging import LogEventNames
from ai_code_reviewer.utils.metrics import MetricsRegistry, Timer, get_metrics

if TYPE_CHECKING:
    from ai_code_reviewer.interfaces.llm import ModelClient

log = structlog.get_logger()

StateListener = Callable[[RequestState], None]


class AnalysisController:
    """Runs code reviews and exposes their lifecycle as a state machine.

    ``analyze`` never raises for review failures; the outcome is always
    reported as the returned (and emitted) ``Success`` or ``Failed`` state.

    Example:
        controller = AnalysisController(client)
        controller.subscribe(lambda state: print(state.status))
        state = await controller.analyze("python", "def add(a, b):\\n    return a + b")
    """

    def __init__(
        self,
        client: ModelClient,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            client: Model client used for every request
            metrics: Metrics registry (defaults to the global registry)
        """
        self._client = client
        self._metrics = metrics or get_metrics()
        self._state: RequestState = Idle()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> RequestState:
        """The current lifecycle state."""
        return self._state

    @property
    def is_busy(self) -> bool:
        """True while a request is being validated or awaiting the model."""
        return self._state.status in BUSY_STATUSES

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener for state transitions.

        Args:
            listener: Called with each new state

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def analyze(self, language: Language | str, code: str) -> RequestState:
        """Review ``code`` and return the resulting state.

        While another request is outstanding the call is rejected and the
        current (busy) state is returned unchanged.

        Args:
            language: Language of the snippet
            code: Source code, sent to the model verbatim

        Returns:
            The state after this call
        """
        self._metrics.analyses_requested.inc()

        if self.is_busy:
            log.warning(LogEventNames.ANALYSIS_REJECTED_BUSY, status=str(self._state.status))
            self._metrics.analyses_rejected_busy.inc()
            return self._state

        if not isinstance(code, str) or not code.strip():
            log.info(LogEventNames.INPUT_REJECTED, reason=str(ErrorKind.EMPTY_INPUT))
            return self._fail(ErrorKind.EMPTY_INPUT, "No code to analyze")

        try:
            request = AnalysisRequest(language=Language.parse(language), code=code)
        except ValueError as e:
            log.info(LogEventNames.INPUT_REJECTED, reason="unsupported_language")
            return self._fail(ErrorKind.UNKNOWN_FAILURE, str(e))

        self._transition(Validating())

        with structlog.contextvars.bound_contextvars(request_id=uuid.uuid4().hex[:12]):
            return await self._run(request)

    async def _run(self, request: AnalysisRequest) -> RequestState:
        log.info(
            LogEventNames.ANALYSIS_STARTED,
            language=str(request.language),
            code_length=len(request.code),
            line_count=request.line_count,
        )

        model = str(getattr(self._client, "model_name", "unknown"))
        try:
            prompt = build_review_prompt(request.language, request.code)
            self._transition(InFlight())
            self._metrics.analyses_in_flight.set(1)
            with Timer(self._metrics.llm_request_duration, labels={"model": model}):
                raw = await self._client.generate(prompt, response_schema())
            result = parse_analysis_response(raw)
        except asyncio.CancelledError:
            self._fail(ErrorKind.UNKNOWN_FAILURE, "Analysis cancelled")
            raise
        except (TransportError, ConnectionError, TimeoutError) as e:
            return self._fail(ErrorKind.TRANSPORT_FAILURE, str(e))
        except SchemaViolationError as e:
            return self._fail(ErrorKind.SCHEMA_VIOLATION, str(e))
        except Exception as e:
            log.exception(LogEventNames.ANALYSIS_FAILED, kind=str(ErrorKind.UNKNOWN_FAILURE))
            return self._fail(ErrorKind.UNKNOWN_FAILURE, str(e) or type(e).__name__, logged=True)
        finally:
            self._metrics.analyses_in_flight.set(0)

        self._check_issue_lines(request, result)
        log.info(
            LogEventNames.ANALYSIS_SUCCEEDED,
            score=result.score,
            issue_count=result.issue_count,
        )
        self._metrics.analyses_completed.inc(labels={"outcome": "success"})
        return self._transition(Success(result))

    def _fail(self, kind: ErrorKind, message: str, logged: bool = False) -> RequestState:
        if not logged:
            log.warning(LogEventNames.ANALYSIS_FAILED, kind=str(kind), error=message)
        self._metrics.analyses_completed.inc(labels={"outcome": str(kind)})
        return self._transition(Failed(AnalysisError(kind=kind, message=message)))

    def _check_issue_lines(self, request: AnalysisRequest, result: AnalysisResult) -> None:
        # Out-of-range lines are kept as reported; they are only logged
        line_count = request.line_count
        for issue in result.issues:
            if issue.line > line_count:
                log.warning(
                    LogEventNames.ISSUE_LINE_OUT_OF_RANGE,
                    line=issue.line,
                    line_count=line_count,
                )

    def _transition(self, state: RequestState) -> RequestState:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                log.error(
                    LogEventNames.STATE_LISTENER_ERROR,
                    status=str(state.status),
                    error=str(e),
                )
        return state
