from pathlib import Path

import pytest

from notifier.config import Config, ConfigurationError, resolve_display_name


ENV_VARS = ("CHANGE_LOG_PATH", "SLACK_WEBHOOK_URL", "SERVICE_NAME", "GITHUB_REPOSITORY")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> pytest.MonkeyPatch:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_display_name_from_repository() -> None:
    assert resolve_display_name(None, "acme/my-cool-api") == "My Cool Api"


def test_display_name_keeps_rest_of_word() -> None:
    assert resolve_display_name(None, "acme/iOS-sdk") == "IOS Sdk"


def test_display_name_without_owner() -> None:
    assert resolve_display_name(None, "billing") == "Billing"


def test_display_name_override_wins() -> None:
    assert resolve_display_name("Payments", "acme/billing-service") == "Payments"


def test_blank_override_falls_back_to_repository() -> None:
    assert resolve_display_name("  ", "acme/billing-service") == "Billing Service"


def test_display_name_requires_a_source() -> None:
    with pytest.raises(ConfigurationError):
        resolve_display_name(None, None)


def test_from_env(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("CHANGE_LOG_PATH", "docs/CHANGES.md")
    clean_env.setenv("SLACK_WEBHOOK_URL", " https://hooks.example.com/T/B/X ")
    clean_env.setenv("GITHUB_REPOSITORY", "acme/release-bot")

    cfg = Config.from_env()

    assert cfg.change_log_path == Path.cwd() / "docs" / "CHANGES.md"
    assert cfg.webhook_url == "https://hooks.example.com/T/B/X"
    assert cfg.display_name_override is None
    assert cfg.display_name == "Release Bot"
    cfg.validate()


def test_from_env_defaults_change_log_path(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("CHANGE_LOG_PATH", "")
    cfg = Config.from_env()
    assert cfg.change_log_path == Path.cwd() / "CHANGELOG.md"


def test_validate_reports_all_missing(clean_env: pytest.MonkeyPatch) -> None:
    cfg = Config.from_env()
    with pytest.raises(ConfigurationError) as excinfo:
        cfg.validate()
    assert "SLACK_WEBHOOK_URL" in str(excinfo.value)
    assert "SERVICE_NAME or GITHUB_REPOSITORY" in str(excinfo.value)


def test_validate_accepts_override_without_repository() -> None:
    cfg = Config(
        change_log_path=Path("CHANGELOG.md"),
        webhook_url="https://hooks.example.com/x",
        display_name_override="Payments",
    )
    cfg.validate()
    assert cfg.display_name == "Payments"
