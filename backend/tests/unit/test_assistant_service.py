"""
Unit tests for the virtual assistant: greeting, send flow, failure
handling and the single in-flight request guard.
"""

import threading

import pytest

from unisovet.core.exceptions import AssistantServiceError
from unisovet.db.seed import seed_appointments, seed_clients, seed_pets
from unisovet.services.assistant_service import (
    APOLOGY,
    GREETING,
    ROLE_MODEL,
    ROLE_USER,
    VirtualAssistant,
    build_context,
)

pytestmark = pytest.mark.assistant


@pytest.fixture
def assistant(fake_completion, fixed_now):
    snapshot = (seed_clients(), seed_pets(), seed_appointments(fixed_now))
    return VirtualAssistant(fake_completion, lambda: snapshot, phone="(15) 1111-2222")


class TestPanel:
    def test_first_open_greets(self, assistant):
        assistant.open()
        assert [(m.role, m.content) for m in assistant.messages] == [
            (ROLE_MODEL, GREETING)
        ]

    def test_greeting_is_not_repeated(self, assistant):
        assistant.open()
        assistant.close()
        assistant.open()
        assert len(assistant.messages) == 1

    def test_toggle_flips_visibility(self, assistant):
        assert assistant.toggle() is True
        assert assistant.toggle() is False


class TestSend:
    def test_blank_message_is_ignored(self, assistant, fake_completion):
        assert assistant.send("   ") is False
        assert assistant.send("") is False
        assert fake_completion.calls == []
        assert assistant.messages == ()

    def test_reply_is_appended_after_user_message(self, assistant, fake_completion):
        fake_completion.reply = "O Rex é um Labrador."

        assert assistant.send("Qual a raça do Rex?") is True

        assert [(m.role, m.content) for m in assistant.messages] == [
            (ROLE_USER, "Qual a raça do Rex?"),
            (ROLE_MODEL, "O Rex é um Labrador."),
        ]
        assert assistant.is_loading is False

    def test_request_carries_history_and_context(self, assistant, fake_completion):
        assistant.open()
        assistant.send("Olá")

        contents, instruction = fake_completion.calls[0]
        assert contents[-1] == {"role": ROLE_USER, "parts": [{"text": "Olá"}]}
        assert contents[0]["role"] == ROLE_MODEL
        assert "(15) 1111-2222" in instruction
        assert "Rex" in instruction
        assert "Vacina anual" in instruction

    def test_failure_appends_apology_and_reenables_input(
        self, assistant, fake_completion
    ):
        fake_completion.error = AssistantServiceError("timeout")

        assert assistant.send("Tem horário amanhã?") is True

        assert assistant.messages[-1].role == ROLE_MODEL
        assert assistant.messages[-1].content == APOLOGY
        assert assistant.can_send is True

    def test_unexpected_errors_are_contained(self, assistant, fake_completion):
        fake_completion.error = RuntimeError("boom")
        assistant.send("Oi")
        assert assistant.messages[-1].content == APOLOGY

    def test_second_send_is_rejected_while_in_flight(self, assistant, fake_completion):
        fake_completion.gate = threading.Event()
        worker = threading.Thread(target=assistant.send, args=("Primeira",))
        worker.start()
        try:
            assert fake_completion.started.wait(timeout=5)
            assert assistant.is_loading is True
            assert assistant.can_send is False
            assert assistant.send("Segunda") is False
        finally:
            fake_completion.gate.set()
            worker.join(timeout=5)

        assert len(fake_completion.calls) == 1
        assert [m.content for m in assistant.messages] == [
            "Primeira",
            fake_completion.reply,
        ]
        assert assistant.can_send is True


class TestContext:
    def test_sections_appear_in_order(self, fixed_now):
        text = build_context(seed_clients(), seed_pets(), seed_appointments(fixed_now))
        assert text.index("Clientes:") < text.index("Pets:") < text.index("Agendamentos:")
        assert "(15) 99999-8888" in text

    def test_context_keeps_accented_text(self):
        text = build_context(seed_clients(), [], [])
        assert "João da Silva" in text

    def test_context_tracks_live_data(self, shell):
        shell.add_client({"name": "Beatriz Souza", "email": "b@x.com", "phone": "1"})
        assert "Beatriz Souza" in shell.assistant.system_instruction()


def test_state_reports_transcript(assistant):
    assistant.open()
    state = assistant.state()
    assert state["isOpen"] is True
    assert state["isLoading"] is False
    assert state["messages"] == [{"role": ROLE_MODEL, "content": GREETING}]
