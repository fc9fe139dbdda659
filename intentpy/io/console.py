import asyncio
import sys


class InputHandler:
    async def get_input(self, prompt: str) -> str:
        """Return user input for the given prompt."""
        raise NotImplementedError


class OutputHandler:
    async def send_output(self, message: str) -> None:
        """Send a message to the user."""
        raise NotImplementedError


class ConsoleInput(InputHandler):
    async def get_input(self, prompt: str) -> str:
        # Run blocking input in a thread so the event loop isn't blocked
        def _read() -> str:
            try:
                return input(prompt)
            except (EOFError, KeyboardInterrupt):
                return ""

        return await asyncio.to_thread(_read)


class ConsoleOutput(OutputHandler):
    async def send_output(self, message: str) -> None:
        sys.stdout.write(message + "\n")
        sys.stdout.flush()
