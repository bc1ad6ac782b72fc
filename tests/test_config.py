from courtside.config import Settings


def test_defaults_from_empty_environment(monkeypatch):
    for name in (
        "OPENAI_API_KEY",
        "ANTHROPIC_API_KEY",
        "COURTSIDE_PROVIDER",
        "COURTSIDE_NEWS_MODEL",
        "COURTSIDE_ANALYSIS_MODEL",
        "COURTSIDE_CHAT_MODEL",
        "COURTSIDE_NEWS_REFRESH_SECONDS",
        "COURTSIDE_MATCHUP_REFRESH_SECONDS",
        "COURTSIDE_MAX_RETRIES",
        "COURTSIDE_RETRY_INITIAL_DELAY",
        "COURTSIDE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert not settings.has_api_key
    assert settings.news_refresh_seconds == 300.0
    assert settings.matchup_refresh_seconds == 120.0
    assert settings.max_retries == 3
    assert settings.retry_initial_delay == 2.0
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", " sk-ant ")
    monkeypatch.setenv("COURTSIDE_PROVIDER", "Anthropic")
    monkeypatch.setenv("COURTSIDE_ANALYSIS_MODEL", "claude-opus-4-1")
    monkeypatch.setenv("COURTSIDE_MAX_RETRIES", "5")
    monkeypatch.setenv("COURTSIDE_RETRY_INITIAL_DELAY", "not-a-number")
    monkeypatch.setenv("COURTSIDE_LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.anthropic_api_key == "sk-ant"
    assert settings.provider == "anthropic"
    assert settings.max_retries == 5
    assert settings.retry_initial_delay == 2.0
    assert settings.log_level == "DEBUG"
    assert settings.model_for("analysis", "anthropic") == "claude-opus-4-1"
    assert settings.model_for("news", "anthropic") == "claude-sonnet-4-20250514"


def test_model_defaults_per_provider():
    settings = Settings()
    assert settings.model_for("news", "openai") == "gpt-4.1-mini"
    assert settings.model_for("analysis", "openai") == "gpt-5-mini"
    assert settings.model_for("chat", "unknown") == "gpt-4.1-mini"
