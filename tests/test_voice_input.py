import pytest

from intentpy.ai_clients import MockAIClient
from intentpy.core import FailureKind, IntentConfig, VoiceInputError
from intentpy.io import MockVoiceInput
from intentpy.logging import IntentLogger
from intentpy.nlu import IntentResolver


@pytest.mark.asyncio
async def test_listen_replays_transcripts_in_order():
    voice = MockVoiceInput(["hello there", "go to settings"])

    assert await voice.listen() == "hello there"
    assert voice.stop() == "hello there"
    assert await voice.listen() == "go to settings"


@pytest.mark.asyncio
async def test_scripted_error_is_reported_and_raised():
    errors = []
    failure = RuntimeError("microphone unavailable")
    voice = MockVoiceInput(["ignored"], error=failure, on_error=errors.append)

    with pytest.raises(RuntimeError):
        await voice.listen()
    assert errors == [failure]


@pytest.mark.asyncio
async def test_exhausted_transcripts_raise_voice_error():
    voice = MockVoiceInput()

    with pytest.raises(VoiceInputError, match="No speech detected"):
        await voice.listen()


@pytest.mark.asyncio
async def test_resolver_reports_voice_failure():
    resolver = IntentResolver(
        IntentConfig(ai_provider="mock"), ai_client=MockAIClient(), logger=IntentLogger()
    )
    voice = MockVoiceInput(error=RuntimeError("mic"))

    result = await resolver.resolve_voice(voice.listen())

    assert not result.success
    assert result.error_kind == FailureKind.VOICE_ERROR
    assert result.error == "Voice processing error: mic"
