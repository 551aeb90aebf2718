"""Shared fixtures for AI Advisory tests."""

import asyncio
import json
from collections.abc import Callable

import httpx
import pytest

from advisory.agent import AdvisoryOrchestrator, AnalysisClient, ProgressSimulator
from advisory.agent.state import ConversationState
from advisory.exceptions import RequestFailure
from advisory.models import AnalysisResult

ENDPOINT = "https://analysis.test/webhook/abc"

REPORT_PAYLOAD = {
    "error": False,
    "status": 200,
    "name": "Report.pdf",
    "url": "https://x/y.pdf",
}


# ---------------------------------------------------------------------------
# Doubles
# ---------------------------------------------------------------------------


class SleepRecorder:
    """Stands in for asyncio.sleep in the backoff path."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class ScriptedBackend:
    """httpx handler returning one scripted response per call.

    Each script item is an int status (with the report payload on 2xx),
    an ``httpx.Response``, or an exception instance to raise.
    """

    def __init__(self, script: list) -> None:
        self.script = list(script)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(item, Exception):
            raise item
        if isinstance(item, httpx.Response):
            return item
        if 200 <= item < 300:
            return httpx.Response(item, json=REPORT_PAYLOAD)
        return httpx.Response(item, text="upstream says no")

    @property
    def bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]


class FakeAnalysisClient:
    """Records calls; returns a result or raises."""

    def __init__(
        self,
        result: AnalysisResult | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.result = result or AnalysisResult(**REPORT_PAYLOAD)
        self.error = error
        self.delay = delay
        self.calls: list[tuple[str, str, str]] = []
        self.on_send: Callable[[], None] | None = None

    async def send(
        self,
        message: str,
        company_id: str,
        user_id: str,
        max_attempts: int | None = None,
    ) -> AnalysisResult:
        self.calls.append((message, company_id, user_id))
        if self.on_send is not None:
            self.on_send()
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


class StateRecorder:
    """on_change listener keeping every published state."""

    def __init__(self) -> None:
        self.states: list[ConversationState] = []

    def __call__(self, state: ConversationState) -> None:
        self.states.append(state)

    def statuses_of(self, message_id: str) -> list[str]:
        """Distinct consecutive statuses a message went through."""
        seen: list[str] = []
        for state in self.states:
            message = state.find_message(message_id)
            if message is None or message.status is None:
                continue
            if not seen or seen[-1] != message.status.value:
                seen.append(message.status.value)
        return seen


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_client(sleep_recorder: SleepRecorder):
    """Factory for an AnalysisClient talking to a scripted backend."""

    def _make(backend: Callable, **kwargs) -> AnalysisClient:
        options = {
            "endpoint_url": ENDPOINT,
            "gateway_url": "",
            "max_attempts": 3,
            "timeout_seconds": 5.0,
            "retry_delay_seconds": 3.0,
            "transport": httpx.MockTransport(backend),
            "sleep": sleep_recorder,
        }
        options.update(kwargs)
        return AnalysisClient(**options)

    return _make


@pytest.fixture
def fast_simulator() -> ProgressSimulator:
    """Simulator that ticks quickly but never runs out during a test."""
    return ProgressSimulator(total_seconds=60.0, tick_seconds=0.01)


@pytest.fixture
def recorder() -> StateRecorder:
    return StateRecorder()


@pytest.fixture
def fake_client() -> FakeAnalysisClient:
    return FakeAnalysisClient()


@pytest.fixture
def orchestrator(fake_client, fast_simulator, recorder) -> AdvisoryOrchestrator:
    orch = AdvisoryOrchestrator(
        client=fake_client,  # type: ignore[arg-type]
        simulator=fast_simulator,
        on_change=recorder,
    )
    orch.enter_chat()
    return orch


@pytest.fixture
def request_failure() -> RequestFailure:
    return RequestFailure("Analysis request failed after 3 attempts", attempts=3)
