import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


DEFAULT_CHANGE_LOG_PATH = "CHANGELOG.md"


class ConfigurationError(RuntimeError):
    pass


def resolve_display_name(override: Optional[str], repository: Optional[str]) -> str:
    """Pick the name shown in the message header.

    An explicit override wins. Otherwise "owner/my-service" becomes
    "My Service": hyphens turn into spaces and each word gets an upper-cased
    first letter, the rest of the word untouched.
    """
    if override and override.strip():
        return override.strip()
    if not repository:
        raise ConfigurationError("No display name: set SERVICE_NAME or GITHUB_REPOSITORY")
    name = repository.rsplit("/", 1)[-1]
    words = name.replace("-", " ").split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)


@dataclass
class Config:
    change_log_path: Path
    webhook_url: str
    display_name_override: Optional[str] = None
    repository: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Config":
        logging.debug("Loading configuration...")
        load_dotenv()
        change_log = os.getenv("CHANGE_LOG_PATH", "").strip() or DEFAULT_CHANGE_LOG_PATH
        cfg = cls(
            change_log_path=Path.cwd() / change_log,
            webhook_url=os.getenv("SLACK_WEBHOOK_URL", "").strip(),
            display_name_override=os.getenv("SERVICE_NAME", "").strip() or None,
            repository=os.getenv("GITHUB_REPOSITORY", "").strip() or None,
        )
        logging.debug(
            f"Loaded config: change_log_path={cfg.change_log_path}, "
            f"webhook={'***' if cfg.webhook_url else 'MISSING'}, "
            f"service_name={cfg.display_name_override}, repository={cfg.repository}"
        )
        return cfg

    @property
    def display_name(self) -> str:
        return resolve_display_name(self.display_name_override, self.repository)

    def validate(self) -> None:
        missing = []
        if not self.webhook_url:
            missing.append("SLACK_WEBHOOK_URL")
        if not self.display_name_override and not self.repository:
            missing.append("SERVICE_NAME or GITHUB_REPOSITORY")
        if missing:
            logging.error(f"Missing required environment variables: {', '.join(missing)}")
            raise ConfigurationError(
                "Missing required environment variables: " + ", ".join(missing)
            )
        logging.debug("Configuration validation passed")
