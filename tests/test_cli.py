import pytest

from intentpy.ai_clients import MockAIClient
from intentpy.cli import _build_parser, build_config, run_repl
from intentpy.core import IntentConfig
from intentpy.io import InputHandler, OutputHandler
from intentpy.logging import IntentLogger
from intentpy.nlu import IntentResolver
from intentpy.pipeline import IntentPipeline


class ScriptedInput(InputHandler):
    def __init__(self, lines):
        self.lines = list(lines)

    async def get_input(self, prompt):
        return self.lines.pop(0) if self.lines else ""


class CapturedOutput(OutputHandler):
    def __init__(self):
        self.messages = []

    async def send_output(self, message):
        self.messages.append(message)


def test_build_config_applies_flags(monkeypatch):
    monkeypatch.setattr("intentpy.core.config.load_dotenv", lambda path=None: None)
    args = _build_parser().parse_args(
        ["--provider", "mock", "--max-retries", "2", "--page", "reports", "--history"]
    )

    config = build_config(args)

    assert config.ai_provider == "mock"
    assert config.max_retries == 2
    assert config.default_context.page == "reports"
    assert config.prompt.include_history is True


@pytest.mark.asyncio
async def test_repl_processes_until_exit():
    config = IntentConfig(ai_provider="mock")
    resolver = IntentResolver(config, ai_client=MockAIClient(), logger=IntentLogger())
    pipeline = IntentPipeline(config, resolver=resolver)
    output = CapturedOutput()

    await run_repl(
        pipeline,
        ScriptedInput(["show me sales from last month", "asdkjasd", "exit", "never read"]),
        output,
    )

    joined = "\n".join(output.messages)
    assert '"action": "filter"' in joined
    assert "Low confidence intent" in joined
    assert len(resolver.get_history()) == 1
