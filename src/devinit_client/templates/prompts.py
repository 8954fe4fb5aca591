"""Interactive prompting for template variable values."""

import asyncio
import threading
from typing import Optional, Protocol

from rich.console import Console
from rich.prompt import Prompt


class Prompter(Protocol):
    """Supplies a value for one template variable.

    ``prompt_for_value`` returns None when the user dismisses the prompt.
    """

    async def prompt_for_value(self, identifier: str) -> Optional[str]: ...


class ConsolePrompter:
    """Prompter that asks on the terminal with rich.

    End of input or Ctrl-C counts as dismissing the prompt. The blocking read
    runs on a daemon thread, so an interrupted prompt never keeps the process
    alive at exit.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    async def prompt_for_value(self, identifier: str) -> Optional[str]:
        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()

        def settle(value: Optional[str], error: Optional[BaseException]) -> None:
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(value)

        def worker() -> None:
            value: Optional[str] = None
            error: Optional[BaseException] = None
            try:
                value = self._ask(identifier)
            except Exception as e:
                error = e
            try:
                loop.call_soon_threadsafe(settle, value, error)
            except RuntimeError:
                # Event loop already closed after the prompt was interrupted.
                pass

        threading.Thread(
            target=worker, name=f"prompt-{identifier}", daemon=True
        ).start()

        try:
            return await future
        except (KeyboardInterrupt, asyncio.CancelledError):
            self.console.print()
            return None

    def _ask(self, identifier: str) -> Optional[str]:
        try:
            return Prompt.ask(
                f'Define template variable [bold cyan]"{identifier}"[/bold cyan]',
                console=self.console,
            )
        except (EOFError, KeyboardInterrupt):
            self.console.print()
            return None
