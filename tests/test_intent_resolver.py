"""Tests for the confidence-gated intent resolution loop."""

import asyncio
import json

import pytest

from intentpy.ai_clients import BaseAIClient, LLMResponse, MockAIClient
from intentpy.core import FailureKind, IntentConfig
from intentpy.logging import IntentLogger
from intentpy.nlu import CORRECTION_SUGGESTION, Intent, IntentResolver
from intentpy.prompt import PromptContext, PromptOptions


class ScriptedAIClient(BaseAIClient):
    """Returns queued responses in order and records every prompt."""

    name = "scripted"

    def __init__(self, responses):
        self.responses = list(responses)
        self.prompts = []

    @property
    def call_count(self):
        return len(self.prompts)

    async def generate(self, prompt, options=None):
        self.prompts.append(prompt)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, LLMResponse):
            return response
        if isinstance(response, dict):
            response = json.dumps(response)
        return LLMResponse(content=response)


def make_resolver(client=None, **overrides):
    config = IntentConfig(ai_provider="mock", **overrides)
    return IntentResolver(config, ai_client=client or MockAIClient(), logger=IntentLogger())


@pytest.mark.asyncio
async def test_sales_last_month_resolves_first_try():
    client = MockAIClient()
    resolver = make_resolver(client)

    result = await resolver.resolve("Show me sales from last month")

    assert result.success
    assert result.error is None
    assert result.retries == 0
    assert result.intent == Intent(
        action="filter", target="sales", params={"dateRange": "last_month"}, confidence=0.95
    )
    assert client.call_count == 1
    assert result.processing_time >= 0


@pytest.mark.asyncio
async def test_gibberish_fails_with_low_confidence_after_one_retry():
    client = MockAIClient()
    resolver = make_resolver(client)

    result = await resolver.resolve("asdkjasd")

    assert not result.success
    assert result.intent is None
    assert result.error_kind == FailureKind.LOW_CONFIDENCE
    assert result.correction_suggestion == CORRECTION_SUGGESTION
    assert result.retries == 1
    assert client.call_count == 2
    assert json.loads(result.raw_model_output) == {
        "action": "unknown",
        "params": {"rawInput": "asdkjasd"},
        "confidence": 0.4,
    }


@pytest.mark.asyncio
async def test_low_confidence_without_retry_when_disabled():
    client = MockAIClient()
    resolver = make_resolver(client, retry_on_low_confidence=False)

    result = await resolver.resolve("asdkjasd")

    assert result.error_kind == FailureKind.LOW_CONFIDENCE
    assert result.retries == 0
    assert client.call_count == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "text",
    ["what is my password", "Charge my credit card", "my SSN is 123", "show the private key"],
)
async def test_sensitive_input_never_reaches_model(text):
    client = MockAIClient()
    resolver = make_resolver(client)

    result = await resolver.resolve(text)

    assert not result.success
    assert result.error_kind == FailureKind.SENSITIVE_CONTENT
    assert result.error == "Input contains sensitive content"
    assert client.call_count == 0
    assert len(resolver.get_history()) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("raw, expected", [(7, 1.0), (-3, 0.0), (0.75, 0.75)])
async def test_confidence_is_clamped(raw, expected):
    client = ScriptedAIClient([{"action": "open", "confidence": raw}])
    resolver = make_resolver(client, min_confidence=0.0)

    result = await resolver.resolve("open it")

    assert result.success
    assert result.intent.confidence == expected
    assert resolver.get_history()[-1].intent.confidence == expected


@pytest.mark.asyncio
@pytest.mark.parametrize("max_retries", [0, 1, 3])
async def test_retry_budget_bounds_model_calls(max_retries):
    client = ScriptedAIClient([LLMResponse.failure("rate limited")])
    resolver = make_resolver(client, max_retries=max_retries)

    result = await resolver.resolve("show dashboard")

    assert not result.success
    assert result.error_kind == FailureKind.MODEL_ERROR
    assert result.error == "LLM error: rate limited"
    assert result.retries == max_retries
    assert client.call_count == max_retries + 1


@pytest.mark.asyncio
async def test_malformed_output_is_retried():
    client = ScriptedAIClient(["Sure! Here you go", {"action": "navigate", "target": "settings", "confidence": 0.9}])
    resolver = make_resolver(client)

    result = await resolver.resolve("go to settings")

    assert result.success
    assert result.retries == 1
    assert result.intent.target == "settings"
    assert client.call_count == 2


@pytest.mark.asyncio
async def test_missing_action_is_decode_error_with_raw_output():
    client = ScriptedAIClient(['{"target": "sales", "confidence": 0.9}'])
    resolver = make_resolver(client)

    result = await resolver.resolve("show sales")

    assert not result.success
    assert result.error_kind == FailureKind.DECODE_ERROR
    assert "action" in result.error
    assert result.raw_model_output == '{"target": "sales", "confidence": 0.9}'
    assert client.call_count == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity", "1e400"])
async def test_non_finite_confidence_is_decode_error(literal):
    raw = '{"action": "delete", "confidence": ' + literal + '}'
    client = ScriptedAIClient([raw, {"action": "delete", "confidence": 0.9}])
    resolver = make_resolver(client)

    result = await resolver.resolve("do the thing")

    assert result.success
    assert result.retries == 1
    assert result.intent.confidence == 0.9
    assert client.call_count == 2


@pytest.mark.asyncio
async def test_non_finite_confidence_fails_when_budget_exhausted():
    client = ScriptedAIClient(['{"action": "delete", "confidence": NaN}'])
    resolver = make_resolver(client, max_retries=0)

    result = await resolver.resolve("do the thing")

    assert not result.success
    assert result.intent is None
    assert result.error_kind == FailureKind.DECODE_ERROR
    assert "finite" in result.error


@pytest.mark.asyncio
async def test_fenced_json_is_accepted():
    client = ScriptedAIClient(['```json\n{"action": "sort", "params": {"field": "date"}}\n```'])
    resolver = make_resolver(client)

    result = await resolver.resolve("sort by date")

    assert result.success
    assert result.intent == Intent(action="sort", params={"field": "date"})


@pytest.mark.asyncio
async def test_retry_resends_identical_prompt():
    client = ScriptedAIClient(["nope", {"action": "greet", "confidence": 0.9}])
    resolver = make_resolver(client)

    await resolver.resolve("  please   say hello ")

    assert client.prompts[0] == client.prompts[1]
    assert 'User input: "say hello"' in client.prompts[0]


@pytest.mark.asyncio
async def test_history_is_bounded_and_fifo():
    client = ScriptedAIClient([{"action": "noop", "confidence": 0.9}])
    resolver = make_resolver(client, history_limit=3)

    for i in range(5):
        await resolver.resolve(f"command {i}")
        assert len(resolver.get_history()) <= 3

    assert [item.input for item in resolver.get_history()] == ["command 2", "command 3", "command 4"]


@pytest.mark.asyncio
async def test_failures_are_not_recorded_in_history():
    resolver = make_resolver(MockAIClient())

    await resolver.resolve("asdkjasd")

    assert resolver.get_history() == []


@pytest.mark.asyncio
async def test_history_feeds_prompt_when_enabled():
    client = ScriptedAIClient([{"action": "navigate", "target": "dashboard", "confidence": 0.9}])
    resolver = make_resolver(client, prompt=PromptOptions(include_history=True))

    await resolver.resolve("open dashboard")
    await resolver.resolve("now the settings")

    assert "Recent history:" not in client.prompts[0]
    assert 'Input: "navigate to dashboard"' in client.prompts[1]
    assert '"target": "dashboard"' in client.prompts[1]
    assert resolver.get_history()[0].intent == Intent(
        action="navigate", target="dashboard", confidence=0.9
    )


@pytest.mark.asyncio
async def test_keep_history_false_disables_recording():
    resolver = make_resolver(MockAIClient(), keep_history=False)

    await resolver.resolve("show me sales from last month")

    assert resolver.get_history() == []


@pytest.mark.asyncio
async def test_clear_history():
    resolver = make_resolver(MockAIClient())
    await resolver.resolve("show me sales from last month")

    resolver.clear_history()

    assert resolver.get_history() == []


@pytest.mark.asyncio
async def test_resolution_is_deterministic_with_stub():
    first = make_resolver(MockAIClient())
    second = make_resolver(MockAIClient())

    a = await first.resolve("export this as pdf")
    b = await second.resolve("export this as pdf")

    assert a.intent == b.intent
    assert a.intent.action == "export"


@pytest.mark.asyncio
async def test_call_context_overrides_default_context():
    client = ScriptedAIClient([{"action": "navigate", "confidence": 0.9}])
    config = IntentConfig(
        ai_provider="mock",
        default_context=PromptContext(page="home", available_actions=["navigate"]),
    )
    resolver = IntentResolver(config, ai_client=client, logger=IntentLogger())

    await resolver.resolve("go", PromptContext(page="reports", available_targets=["sales"]))

    prompt = client.prompts[0]
    assert "- Current page: reports" in prompt
    assert "- Available actions: navigate" in prompt
    assert "- Available targets: sales" in prompt


@pytest.mark.asyncio
async def test_update_default_context_accepts_dict():
    client = ScriptedAIClient([{"action": "navigate", "confidence": 0.9}])
    resolver = make_resolver(client)

    resolver.update_default_context({"page": "inbox"})
    await resolver.resolve("go")

    assert "- Current page: inbox" in client.prompts[0]


@pytest.mark.asyncio
async def test_unexpected_client_exception_is_caught():
    class ExplodingClient(BaseAIClient):
        name = "exploding"

        async def generate(self, prompt, options=None):
            raise RuntimeError("kaboom")

    resolver = make_resolver(ExplodingClient())

    result = await resolver.resolve("show dashboard")

    assert not result.success
    assert result.error_kind == FailureKind.UNEXPECTED_ERROR
    assert "kaboom" in result.error


@pytest.mark.asyncio
async def test_concurrent_calls_record_in_completion_order():
    class DelayedClient(BaseAIClient):
        name = "delayed"

        async def generate(self, prompt, options=None):
            text = MockAIClient.extract_input(prompt)
            await asyncio.sleep(0.05 if "slow" in text else 0)
            return LLMResponse(content=json.dumps({"action": text, "confidence": 0.9}))

    resolver = make_resolver(DelayedClient(), history_limit=2)

    results = await asyncio.gather(resolver.resolve("slow one"), resolver.resolve("fast one"))

    assert all(r.success for r in results)
    assert [item.input for item in resolver.get_history()] == ["fast one", "slow one"]


@pytest.mark.asyncio
async def test_resolve_voice_with_awaitable_transcript():
    async def transcript():
        return "show me sales from last month"

    resolver = make_resolver(MockAIClient())

    result = await resolver.resolve_voice(transcript())

    assert result.success
    assert result.intent.action == "filter"


@pytest.mark.asyncio
async def test_resolve_voice_failure():
    async def broken():
        raise RuntimeError("microphone unplugged")

    resolver = make_resolver(MockAIClient())

    result = await resolver.resolve_voice(broken())

    assert result.error_kind == FailureKind.VOICE_ERROR
    assert "microphone unplugged" in result.error


def test_set_provider_switches_client():
    resolver = make_resolver(ScriptedAIClient([{"action": "x"}]))

    resolver.set_provider("mock")

    assert isinstance(resolver.ai_client, MockAIClient)


def test_parse_result_to_dict_omits_unset_fields():
    resolver = make_resolver(MockAIClient())
    result = asyncio.run(resolver.resolve("show me sales from last month"))

    data = result.to_dict()

    assert data["success"] is True
    assert data["intent"]["action"] == "filter"
    assert "error" not in data
    assert "correction_suggestion" not in data
