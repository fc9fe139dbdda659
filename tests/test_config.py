import intentpy.core.config as config_module
from intentpy.core import IntentConfig


def test_defaults(monkeypatch):
    monkeypatch.delenv("INTENTPY_PROVIDER", raising=False)
    config = IntentConfig()

    assert config.ai_provider == "mock"
    assert config.max_retries == 1
    assert config.min_confidence == 0.6
    assert config.history_limit == 10
    assert config.retry_on_low_confidence is True
    assert config.prompt.include_history is False


def test_provider_specific_api_key(monkeypatch):
    monkeypatch.delenv("INTENTPY_API_KEY", raising=False)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")

    assert IntentConfig(ai_provider="openai").resolved_api_key() == "sk-env"
    assert IntentConfig(ai_provider="openai", api_key="sk-explicit").resolved_api_key() == "sk-explicit"
    assert IntentConfig(ai_provider="mock").resolved_api_key() is None


def test_from_env_reads_dotenv_and_environment(monkeypatch):
    loaded = []
    monkeypatch.setattr(config_module, "load_dotenv", lambda path=None: loaded.append(path))
    monkeypatch.setenv("INTENTPY_PROVIDER", "anthropic")
    monkeypatch.setenv("INTENTPY_MAX_RETRIES", "3")
    monkeypatch.setenv("INTENTPY_MIN_CONFIDENCE", "0.8")

    config = IntentConfig.from_env(".env.test")

    assert loaded == [".env.test"]
    assert config.ai_provider == "anthropic"
    assert config.max_retries == 3
    assert config.min_confidence == 0.8
