"""Tests for the terminal prompter."""

import asyncio
import io
import threading
from unittest.mock import patch

import pytest
from rich.console import Console

from devinit_client.templates import ConsolePrompter


@pytest.fixture
def console():
    return Console(file=io.StringIO(), force_terminal=False)


class TestConsolePrompter:
    """Test ConsolePrompter.prompt_for_value."""

    @pytest.mark.asyncio
    async def test_returns_answer(self, console):
        """The typed value is returned."""
        prompter = ConsolePrompter(console)
        with patch(
            "devinit_client.templates.prompts.Prompt.ask", return_value="MIT"
        ) as mock_ask:
            value = await prompter.prompt_for_value("license")

        assert value == "MIT"
        assert '"license"' in mock_ask.call_args.args[0]

    @pytest.mark.asyncio
    async def test_end_of_input_dismisses(self, console):
        """End of input is a dismissed prompt."""
        prompter = ConsolePrompter(console)
        with patch(
            "devinit_client.templates.prompts.Prompt.ask", side_effect=EOFError
        ):
            value = await prompter.prompt_for_value("license")

        assert value is None

    @pytest.mark.asyncio
    async def test_interrupt_while_waiting_dismisses(self, console):
        """Interrupting a blocked prompt returns None instead of hanging."""
        prompter = ConsolePrompter(console)
        started = threading.Event()
        release = threading.Event()

        def blocking_ask(identifier):
            started.set()
            release.wait(5)
            return "too late"

        with patch.object(prompter, "_ask", side_effect=blocking_ask):
            task = asyncio.create_task(prompter.prompt_for_value("license"))
            while not started.is_set():
                await asyncio.sleep(0.01)
            task.cancel()
            value = await asyncio.wait_for(task, timeout=1)
            release.set()

        assert value is None

    @pytest.mark.asyncio
    async def test_prompt_thread_is_daemon(self, console):
        """A pending prompt never blocks interpreter exit."""
        prompter = ConsolePrompter(console)
        seen = []

        def record_thread(identifier):
            seen.append(threading.current_thread())
            return "x"

        with patch.object(prompter, "_ask", side_effect=record_thread):
            await prompter.prompt_for_value("license")

        assert seen[0].daemon
        assert seen[0] is not threading.main_thread()

    @pytest.mark.asyncio
    async def test_unexpected_error_propagates(self, console):
        """Errors other than dismissal reach the caller."""
        prompter = ConsolePrompter(console)
        with patch(
            "devinit_client.templates.prompts.Prompt.ask",
            side_effect=RuntimeError("terminal gone"),
        ):
            with pytest.raises(RuntimeError, match="terminal gone"):
                await prompter.prompt_for_value("license")
