"""Load and persist the local state file and environment overrides."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from . import render
from .exceptions import ConfigError
from .interactive import Prompter
from .models import Config

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".bitbucket-pr-cli.json"
DEFAULT_API_URL = "https://api.bitbucket.org/2.0"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Settings:
    """Runtime settings resolved from the environment."""

    config_path: Path
    api_url: str
    timeout: float


def load_settings() -> Settings:
    raw_path = os.environ.get("BITBUCKET_PR_CLI_CONFIG")
    config_path = Path(raw_path).expanduser() if raw_path else DEFAULT_CONFIG_PATH
    api_url = os.environ.get("BITBUCKET_API_URL") or DEFAULT_API_URL
    return Settings(
        config_path=config_path,
        api_url=api_url.rstrip("/"),
        timeout=_parse_timeout(os.environ.get("BITBUCKET_PR_CLI_TIMEOUT")),
    )


def _parse_timeout(raw: str | None) -> float:
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid BITBUCKET_PR_CLI_TIMEOUT=%r", raw)
        return DEFAULT_TIMEOUT
    return value if value > 0 else DEFAULT_TIMEOUT


class ConfigStore:
    """Reads and writes the JSON state document as a whole."""

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> Config:
        """Return the stored configuration, or an empty one if it is missing or unreadable."""

        try:
            return Config.from_dict(self._read())
        except ConfigError as exc:
            logger.warning("%s", exc)
            render.warning(f"Error loading config: {exc}")
            return Config()

    def save(self, config: Config) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to write %s: %s", self.path, exc)
            render.error(f"Error saving config: {exc}")
            return False
        logger.debug("Saved configuration to %s", self.path)
        return True

    def _read(self) -> dict:
        if not self.path.exists():
            logger.debug("No configuration at %s", self.path)
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Unable to read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"{self.path} must contain a JSON object.")
        return data


def run_setup(store: ConfigStore, config: Config, prompter: Prompter) -> Config:
    """Prompt for credentials and workspace, keeping saved repositories and branches."""

    config.username = prompter.text("Enter your Bitbucket username:", required="Username is required")
    config.password = prompter.secret("Enter your Bitbucket app password:", required="App password is required")
    config.workspace = prompter.text("Enter your Bitbucket workspace:", required="Workspace is required")
    if store.save(config):
        render.success("Configuration saved successfully!")
    return config
