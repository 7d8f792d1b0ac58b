"""Unit tests for the chat orchestrator."""
import asyncio

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from dressme.assistant import RemoteError, Role
from dressme.orchestration import NO_API_KEY_MESSAGE, ChatOrchestrator, ChatState
from dressme.prompts import get_chat_system_prompt


class TestChatTranscript:
    """Tests for transcript bookkeeping."""

    def test_starts_with_system_prompt_from_file(self, fake_client):
        """The opening system turn is the packaged chat prompt."""
        chat = ChatOrchestrator(fake_client)

        assert len(chat.transcript) == 1
        assert chat.transcript[0].role is Role.SYSTEM
        assert chat.transcript[0].content == get_chat_system_prompt()
        assert chat.visible_messages() == []

    def test_custom_system_prompt(self, fake_client):
        chat = ChatOrchestrator(fake_client, system_prompt="Be brief.")

        assert chat.transcript[0].content == "Be brief."

    def test_empty_system_prompt_is_omitted(self, fake_client):
        chat = ChatOrchestrator(fake_client, system_prompt="")

        assert chat.transcript == []

    def test_transcript_is_a_copy(self, fake_client):
        chat = ChatOrchestrator(fake_client)

        chat.transcript.clear()

        assert len(chat.transcript) == 1

    @pytest.mark.asyncio
    async def test_reset_discards_conversation(self, fake_client):
        chat = ChatOrchestrator(fake_client)
        await chat.send("hello")

        chat.reset()

        assert [m.role for m in chat.transcript] == [Role.SYSTEM]


class TestChatSend:
    """Tests for the append-request-append cycle."""

    @pytest.mark.asyncio
    async def test_styling_question_gets_reply(self, make_client):
        client = make_client(reply="Pair it with dark denim and white sneakers.")
        chat = ChatOrchestrator(client)

        reply = await chat.send("How should I style this jacket?")

        assert reply is not None
        assert reply.role is Role.ASSISTANT
        assert reply.content == "Pair it with dark denim and white sneakers."
        visible = chat.visible_messages()
        assert [(m.role, m.content) for m in visible] == [
            (Role.USER, "How should I style this jacket?"),
            (Role.ASSISTANT, "Pair it with dark denim and white sneakers."),
        ]
        assert chat.state is ChatState.READY

    @pytest.mark.asyncio
    async def test_request_carries_full_transcript(self, fake_client):
        chat = ChatOrchestrator(fake_client, system_prompt="Be brief.")

        await chat.send("first")
        await chat.send("second")

        sent = fake_client.chat_calls[1]
        assert [(m.role, m.content) for m in sent] == [
            (Role.SYSTEM, "Be brief."),
            (Role.USER, "first"),
            (Role.ASSISTANT, fake_client.reply),
            (Role.USER, "second"),
        ]

    @pytest.mark.asyncio
    async def test_input_is_trimmed(self, fake_client):
        chat = ChatOrchestrator(fake_client)

        await chat.send("  hi there \n")

        assert chat.visible_messages()[0].content == "hi there"

    @pytest.mark.asyncio
    async def test_failure_becomes_error_turn(self, make_client):
        client = make_client(chat_error=RemoteError(500, "boom"))
        chat = ChatOrchestrator(client)

        reply = await chat.send("hello")

        assert reply is not None
        assert reply.content == "Error: Remote API error 500: boom"
        assert [m.role for m in chat.visible_messages()] == [Role.USER, Role.ASSISTANT]
        assert not chat.is_sending

    @pytest.mark.asyncio
    async def test_no_api_key_sets_notice(self):
        chat = ChatOrchestrator(None)

        reply = await chat.send("hello")

        assert reply is None
        assert chat.notice == NO_API_KEY_MESSAGE
        assert chat.visible_messages() == []

    @pytest.mark.asyncio
    async def test_send_while_sending_is_rejected(self, fake_client):
        fake_client.gate = asyncio.Event()
        chat = ChatOrchestrator(fake_client)

        first = asyncio.create_task(chat.send("first"))
        await asyncio.sleep(0)
        assert chat.is_sending
        assert not chat.can_send("second")

        assert await chat.send("second") is None
        with pytest.raises(RuntimeError):
            chat.reset()

        fake_client.gate.set()
        await first

        assert len(fake_client.chat_calls) == 1
        assert len(chat.visible_messages()) == 2

    @pytest.mark.asyncio
    async def test_model_and_temperature_forwarded(self, fake_client, monkeypatch):
        seen = {}

        async def chat_spy(transcript, model=None, temperature=0.7):
            seen.update(model=model, temperature=temperature)
            return "ok"

        monkeypatch.setattr(fake_client, "chat", chat_spy)
        chat = ChatOrchestrator(fake_client, model="gpt-4o", temperature=0.2)

        await chat.send("hello")

        assert seen == {"model": "gpt-4o", "temperature": 0.2}

    def test_can_send(self, fake_client):
        assert ChatOrchestrator(fake_client).can_send("hi")
        assert not ChatOrchestrator(fake_client).can_send("   ")
        assert not ChatOrchestrator(None).can_send("hi")

    @pytest.mark.asyncio
    async def test_observer_sees_each_turn(self, fake_client):
        seen = []
        chat = ChatOrchestrator(fake_client, on_update=lambda c: seen.append(len(c.transcript)))
        seen.clear()

        await chat.send("hello")

        assert seen == [2, 3]


class TestChatProperties:
    """Property tests for send()."""

    @settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(st.text(alphabet=" \t\n\r", max_size=20))
    def test_blank_input_is_rejected_without_request(self, make_client, text: str):
        """Property test: whitespace-only input never reaches the client."""
        client = make_client()
        chat = ChatOrchestrator(client, system_prompt="sys")

        reply = asyncio.run(chat.send(text))

        assert reply is None
        assert client.chat_calls == []
        assert len(chat.transcript) == 1

    @settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(st.text(min_size=1, max_size=200).filter(lambda s: s.strip()))
    def test_accepted_input_appends_two_turns(self, make_client, text: str):
        """Property test: each accepted send adds one user and one assistant turn."""
        client = make_client(reply="noted")
        chat = ChatOrchestrator(client, system_prompt="sys")

        asyncio.run(chat.send(text))

        transcript = chat.transcript
        assert len(transcript) == 3
        assert transcript[1].role is Role.USER
        assert transcript[1].content == text.strip()
        assert transcript[2].role is Role.ASSISTANT
        assert len(client.chat_calls) == 1
