"""Tests for advisory.agent.interface (the orchestrator)."""

import httpx
import pytest

from advisory.agent import PHASES, ProgressSimulator
from advisory.agent.interface import (
    ANALYSIS_COMPLETE,
    REQUEST_ERROR,
    AdvisoryOrchestrator,
    SendOutcome,
    build_reply,
    validate_identifiers,
)
from advisory.agent.state import ViewMode
from advisory.exceptions import IdentifierValidationError
from advisory.models import AnalysisResult, ContentKind, MessageStatus, NotificationVariant
from advisory.prompts import get_apology_message
from conftest import FakeAnalysisClient, ScriptedBackend

WITH_IDS = "Company ID: COMP-1 User ID: USER-9 please review our pricing"


def _last_user_message(orchestrator: AdvisoryOrchestrator):
    return [m for m in orchestrator.state.messages if m.is_user][-1]


class TestValidateIdentifiers:
    def test_trims(self):
        assert validate_identifiers("  C1 ", "\tU1\n") == ("C1", "U1")

    @pytest.mark.parametrize(
        ("company_id", "user_id", "missing"),
        [
            ("", "U1", ["company_id"]),
            ("C1", "   ", ["user_id"]),
            (" ", "", ["company_id", "user_id"]),
        ],
    )
    def test_blank_rejected(self, company_id, user_id, missing):
        with pytest.raises(IdentifierValidationError) as exc_info:
            validate_identifiers(company_id, user_id)
        assert exc_info.value.missing_fields == missing
        assert exc_info.value.user_message == "Please provide both Company ID and User ID."


class TestBuildReply:
    def test_clean_success_with_link(self):
        reply = build_reply(
            AnalysisResult(error=False, status=200, name="Q3.pdf", url="https://x/y.pdf")
        )
        assert "Your Q3.pdf has been generated successfully" in reply.text
        assert reply.content.kind == ContentKind.RICH_TEXT
        assert reply.content.link.url == "https://x/y.pdf"
        assert reply.content.link.label == "Download PDF Report"

    def test_missing_name_uses_generic_word(self):
        reply = build_reply(AnalysisResult(error=False, status=200))
        assert "Your report has been generated" in reply.text
        assert reply.content.link is None
        assert reply.content.kind == ContentKind.PLAIN_TEXT

    def test_error_flag_gives_issue_narrative(self):
        reply = build_reply(
            AnalysisResult(error=True, status=200, url="https://x/partial.pdf")
        )
        assert "there was an issue generating the report" in reply.text
        # Link still offered when a URL is present
        assert reply.content.link.url == "https://x/partial.pdf"

    def test_missing_error_flag_is_not_clean(self):
        reply = build_reply(AnalysisResult(status=200, name="R.pdf"))
        assert "there was an issue" in reply.text

    @pytest.mark.parametrize(
        "url",
        ["javascript:alert(1)", "/relative/path.pdf", 'https://x/a.pdf" onclick="x'],
    )
    def test_unusable_url_dropped(self, url):
        reply = build_reply(AnalysisResult(error=False, status=200, url=url))
        assert reply.content.link is None


class TestNavigation:
    def test_fixture_starts_in_chat_with_welcome(self, orchestrator):
        assert orchestrator.state.view == ViewMode.CHAT
        assert len(orchestrator.state.messages) == 1

    def test_go_home_and_back(self, orchestrator, recorder):
        orchestrator.go_home()
        assert orchestrator.state.view == ViewMode.LANDING
        orchestrator.enter_chat()
        assert len(orchestrator.state.messages) == 1
        assert recorder.states[-1] is orchestrator.state

    def test_drain_notifications_publishes(self, orchestrator, recorder):
        assert orchestrator.drain_notifications() == ()
        assert recorder.states[-1].notifications == ()


class TestHandleSend:
    @pytest.mark.asyncio
    async def test_blank_input_ignored(self, orchestrator, fake_client):
        outcome = await orchestrator.handle_send("   \n ")

        assert outcome == SendOutcome.IGNORED
        assert fake_client.calls == []
        assert len(orchestrator.state.messages) == 1

    @pytest.mark.asyncio
    async def test_uses_input_field_by_default(self, orchestrator, fake_client):
        orchestrator.set_input(WITH_IDS)
        outcome = await orchestrator.handle_send()

        assert outcome == SendOutcome.COMPLETED
        assert fake_client.calls == [(WITH_IDS, "COMP-1", "USER-9")]
        assert orchestrator.state.input_text == ""

    @pytest.mark.asyncio
    async def test_missing_identifiers_open_dialog(self, orchestrator, fake_client):
        outcome = await orchestrator.handle_send("Analyze my market")

        assert outcome == SendOutcome.NEEDS_IDENTIFIERS
        assert fake_client.calls == []
        assert len(orchestrator.state.messages) == 1
        assert orchestrator.state.is_dialog_open
        assert orchestrator.state.pending.pending_message_text == "Analyze my market"
        assert not orchestrator.state.is_loading

    @pytest.mark.asyncio
    async def test_partial_identifiers_prefill_dialog(self, orchestrator):
        await orchestrator.handle_send("Company ID: C1 how are we doing?")

        assert orchestrator.state.dialog_company_id == "C1"
        assert orchestrator.state.dialog_user_id == ""

    @pytest.mark.asyncio
    async def test_user_id_alone_is_gated(self, orchestrator, fake_client):
        outcome = await orchestrator.handle_send("User ID: U1 anything new?")

        assert outcome == SendOutcome.NEEDS_IDENTIFIERS
        assert fake_client.calls == []
        assert orchestrator.state.dialog_company_id == ""
        assert orchestrator.state.dialog_user_id == "U1"

    @pytest.mark.asyncio
    async def test_short_label_form(self, orchestrator, fake_client):
        outcome = await orchestrator.handle_send("Comp ID: X1 User Id: Y1")

        assert outcome == SendOutcome.COMPLETED
        assert fake_client.calls == [("Comp ID: X1 User Id: Y1", "X1", "Y1")]

    @pytest.mark.asyncio
    async def test_success(self, orchestrator, recorder):
        outcome = await orchestrator.handle_send(WITH_IDS)
        state = orchestrator.state

        assert outcome == SendOutcome.COMPLETED
        user_message = _last_user_message(orchestrator)
        assert user_message.status == MessageStatus.SENT
        assert recorder.statuses_of(user_message.id) == ["sending", "sent"]

        reply = state.messages[-1]
        assert not reply.is_user
        assert "Report.pdf" in reply.text
        assert reply.content.link.url == "https://x/y.pdf"

        assert not state.is_loading
        assert not state.is_typing
        assert state.progress is None
        assert state.notifications == (ANALYSIS_COMPLETE,)

    @pytest.mark.asyncio
    async def test_sent_before_request_is_awaited(self, orchestrator, fake_client):
        seen = []
        fake_client.on_send = lambda: seen.append(
            (_last_user_message(orchestrator).status, orchestrator.state.is_loading)
        )

        await orchestrator.handle_send(WITH_IDS)

        assert seen == [(MessageStatus.SENT, True)]

    @pytest.mark.asyncio
    async def test_request_failure(self, fast_simulator, recorder, request_failure):
        client = FakeAnalysisClient(error=request_failure)
        orchestrator = AdvisoryOrchestrator(
            client=client, simulator=fast_simulator, on_change=recorder
        )
        orchestrator.enter_chat()

        outcome = await orchestrator.handle_send(WITH_IDS)
        state = orchestrator.state

        assert outcome == SendOutcome.FAILED
        user_message = _last_user_message(orchestrator)
        assert user_message.status == MessageStatus.ERROR
        assert recorder.statuses_of(user_message.id) == ["sending", "sent", "error"]
        assert state.messages[-1].text == get_apology_message()
        assert not state.is_loading
        assert not state.is_typing
        assert state.progress is None
        assert state.notifications == (REQUEST_ERROR,)
        assert REQUEST_ERROR.variant == NotificationVariant.DESTRUCTIVE

    @pytest.mark.asyncio
    async def test_unexpected_error_is_contained(self, fast_simulator):
        orchestrator = AdvisoryOrchestrator(
            client=FakeAnalysisClient(error=RuntimeError("boom")),
            simulator=fast_simulator,
        )
        orchestrator.enter_chat()

        outcome = await orchestrator.handle_send(WITH_IDS)

        assert outcome == SendOutcome.FAILED
        assert _last_user_message(orchestrator).status == MessageStatus.ERROR
        assert not orchestrator.state.is_loading

    @pytest.mark.asyncio
    async def test_progress_published_while_waiting(self, fast_simulator, recorder):
        orchestrator = AdvisoryOrchestrator(
            client=FakeAnalysisClient(delay=0.05),
            simulator=fast_simulator,
            on_change=recorder,
        )
        orchestrator.enter_chat()

        await orchestrator.handle_send(WITH_IDS)

        snapshots = [s.progress for s in recorder.states if s.progress is not None]
        assert len(snapshots) >= 2
        assert snapshots[0].percentage == 0
        assert snapshots[0].phase == PHASES[0]
        assert orchestrator.state.progress is None

    @pytest.mark.asyncio
    async def test_notifications_drained_once(self, orchestrator):
        await orchestrator.handle_send(WITH_IDS)

        assert orchestrator.drain_notifications() == (ANALYSIS_COMPLETE,)
        assert orchestrator.drain_notifications() == ()

    @pytest.mark.asyncio
    async def test_estimate_runs_out_before_reply(self, recorder):
        orchestrator = AdvisoryOrchestrator(
            client=FakeAnalysisClient(delay=0.1),
            simulator=ProgressSimulator(total_seconds=0.03, tick_seconds=0.01),
            on_change=recorder,
        )
        orchestrator.enter_chat()

        outcome = await orchestrator.handle_send(WITH_IDS)

        first_shown = next(
            i for i, s in enumerate(recorder.states) if s.progress is not None
        )
        # Estimate gone while the assistant is still typing
        assert any(
            s.progress is None and s.is_typing for s in recorder.states[first_shown:]
        )
        assert outcome == SendOutcome.COMPLETED
        state = orchestrator.state
        assert "Report.pdf" in state.messages[-1].text
        assert _last_user_message(orchestrator).status == MessageStatus.SENT
        assert not state.is_loading
        assert not state.is_typing


class TestIdentifierDialog:
    @pytest.mark.asyncio
    async def test_submit_merges_identifiers(self, orchestrator, fake_client):
        await orchestrator.handle_send("Analyze my market")
        outcome = await orchestrator.submit_identifiers("  C1 ", "U1")

        assert outcome == SendOutcome.COMPLETED
        assert fake_client.calls == [
            ("Analyze my market\n\nCompany ID: C1\nUser ID: U1", "C1", "U1")
        ]
        assert not orchestrator.state.is_dialog_open
        assert _last_user_message(orchestrator).text.startswith("Analyze my market")

    @pytest.mark.asyncio
    async def test_submit_uses_dialog_fields(self, orchestrator, fake_client):
        await orchestrator.handle_send("Company ID: C1 hello")
        orchestrator.update_identifier_fields("C1", "U7")

        outcome = await orchestrator.submit_identifiers()

        assert outcome == SendOutcome.COMPLETED
        assert fake_client.calls[0][1:] == ("C1", "U7")

    @pytest.mark.asyncio
    async def test_submit_blank_keeps_dialog_open(self, orchestrator, fake_client):
        await orchestrator.handle_send("Analyze my market")
        outcome = await orchestrator.submit_identifiers("C1", "   ")

        assert outcome == SendOutcome.NEEDS_IDENTIFIERS
        assert fake_client.calls == []
        assert orchestrator.state.is_dialog_open
        assert orchestrator.state.dialog_company_id == "C1"

        (note,) = orchestrator.drain_notifications()
        assert note.title == "Missing Information"
        assert note.description == "Please provide both Company ID and User ID."
        assert note.variant == NotificationVariant.DESTRUCTIVE

    @pytest.mark.asyncio
    async def test_submit_without_pending(self, orchestrator, fake_client):
        outcome = await orchestrator.submit_identifiers("C1", "U1")

        assert outcome == SendOutcome.IGNORED
        assert fake_client.calls == []

    @pytest.mark.asyncio
    async def test_cancel_discards_pending(self, orchestrator, fake_client):
        await orchestrator.handle_send("Analyze my market")
        orchestrator.cancel_identifiers()

        state = orchestrator.state
        assert not state.is_dialog_open
        assert state.input_text == ""
        assert len(state.messages) == 1
        assert fake_client.calls == []


class TestWithRequestClient:
    @pytest.mark.asyncio
    async def test_recovers_after_bad_gateway(
        self, make_client, sleep_recorder, fast_simulator
    ):
        backend = ScriptedBackend([502, 502, 200])
        orchestrator = AdvisoryOrchestrator(
            client=make_client(backend), simulator=fast_simulator
        )
        orchestrator.enter_chat()

        outcome = await orchestrator.handle_send(WITH_IDS)

        assert outcome == SendOutcome.COMPLETED
        assert len(backend.requests) == 3
        assert sleep_recorder.delays == [3.0, 3.0]
        assert _last_user_message(orchestrator).status == MessageStatus.SENT
        assert "Report.pdf" in orchestrator.state.messages[-1].text

    @pytest.mark.asyncio
    async def test_network_failure_settles_with_apology(
        self, make_client, fast_simulator
    ):
        backend = ScriptedBackend([httpx.ConnectError("connection refused")])
        orchestrator = AdvisoryOrchestrator(
            client=make_client(backend), simulator=fast_simulator
        )
        orchestrator.enter_chat()

        outcome = await orchestrator.handle_send(WITH_IDS)

        assert outcome == SendOutcome.FAILED
        assert len(backend.requests) == 3
        assert _last_user_message(orchestrator).status == MessageStatus.ERROR
        assert orchestrator.state.messages[-1].text == get_apology_message()
        assert orchestrator.state.notifications == (REQUEST_ERROR,)

    @pytest.mark.asyncio
    async def test_mistyped_success_payload_is_final(
        self, make_client, sleep_recorder, fast_simulator
    ):
        backend = ScriptedBackend(
            [
                httpx.Response(
                    200,
                    json={"error": False, "status": 200, "name": 42, "url": "https://x/y.pdf"},
                )
            ]
        )
        orchestrator = AdvisoryOrchestrator(
            client=make_client(backend), simulator=fast_simulator
        )
        orchestrator.enter_chat()

        outcome = await orchestrator.handle_send(WITH_IDS)

        assert outcome == SendOutcome.COMPLETED
        assert len(backend.requests) == 1
        assert sleep_recorder.delays == []
        reply = orchestrator.state.messages[-1]
        assert "Your report has been generated successfully" in reply.text
        assert reply.content.link.url == "https://x/y.pdf"

    @pytest.mark.asyncio
    async def test_string_false_error_flag_gets_issue_text(
        self, make_client, fast_simulator
    ):
        backend = ScriptedBackend(
            [httpx.Response(200, json={"error": "false", "name": "R.pdf"})]
        )
        orchestrator = AdvisoryOrchestrator(
            client=make_client(backend), simulator=fast_simulator
        )
        orchestrator.enter_chat()

        outcome = await orchestrator.handle_send(WITH_IDS)

        assert outcome == SendOutcome.COMPLETED
        assert "there was an issue generating the report" in orchestrator.state.messages[-1].text
