"""Tests for the state file store and environment settings."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from bitbucket_pr_cli.config import (
    DEFAULT_API_URL,
    DEFAULT_CONFIG_PATH,
    DEFAULT_TIMEOUT,
    ConfigStore,
    load_settings,
    run_setup,
)
from bitbucket_pr_cli.models import Config
from fakes import ScriptedPrompter


class ConfigStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.path = Path(self.tmp.name) / "state.json"
        self.store = ConfigStore(self.path)

    def test_missing_file_loads_empty_config(self) -> None:
        config = self.store.load()

        self.assertEqual(config, Config())

    def test_invalid_json_falls_back_to_empty_config(self) -> None:
        self.path.write_text("{not json", encoding="utf-8")

        self.assertEqual(self.store.load(), Config())

    def test_non_object_document_falls_back_to_empty_config(self) -> None:
        self.path.write_text("[1, 2]", encoding="utf-8")

        self.assertEqual(self.store.load(), Config())

    def test_wrongly_typed_document_loads_without_error(self) -> None:
        self.path.write_text(json.dumps({"username": "u", "repos": 5}), encoding="utf-8")

        config = self.store.load()

        self.assertEqual(config.username, "u")
        self.assertEqual(config.repos, [])

    def test_save_writes_whole_document(self) -> None:
        config = Config(username="dev", password="pw", workspace="acme", repos=["svc-api"])
        config.remember_branches("svc-api", "develop", ["staging"])

        self.assertTrue(self.store.save(config))

        data = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(data["repos"], ["svc-api"])
        self.assertEqual(data["sourceBranch"], [{"repo": "svc-api", "source": "develop"}])
        self.assertEqual(data["destinationBranches"], [{"repo": "svc-api", "destination": ["staging"]}])

    def test_reused_selection_round_trips_unchanged(self) -> None:
        config = Config(username="dev", password="pw", workspace="acme", repos=["svc-api"])
        config.remember_branches("svc-api", "develop", ["staging", "prod"])
        self.store.save(config)
        first = self.path.read_text(encoding="utf-8")

        loaded = self.store.load()
        loaded.remember_branches("svc-api", loaded.source_branch("svc-api"), loaded.destinations("svc-api"))
        self.store.save(loaded)

        self.assertEqual(self.path.read_text(encoding="utf-8"), first)

    def test_save_failure_is_reported_not_raised(self) -> None:
        blocker = Path(self.tmp.name) / "file"
        blocker.write_text("", encoding="utf-8")
        store = ConfigStore(blocker / "state.json")

        self.assertFalse(store.save(Config()))


class SettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        with mock.patch.dict("os.environ", {}, clear=True):
            settings = load_settings()

        self.assertEqual(settings.config_path, DEFAULT_CONFIG_PATH)
        self.assertEqual(settings.api_url, DEFAULT_API_URL)
        self.assertEqual(settings.timeout, DEFAULT_TIMEOUT)

    def test_environment_overrides(self) -> None:
        env = {
            "BITBUCKET_PR_CLI_CONFIG": "/tmp/custom.json",
            "BITBUCKET_API_URL": "http://localhost:8080/2.0/",
            "BITBUCKET_PR_CLI_TIMEOUT": "5",
        }
        with mock.patch.dict("os.environ", env, clear=True):
            settings = load_settings()

        self.assertEqual(settings.config_path, Path("/tmp/custom.json"))
        self.assertEqual(settings.api_url, "http://localhost:8080/2.0")
        self.assertEqual(settings.timeout, 5.0)

    def test_invalid_timeout_uses_default(self) -> None:
        with mock.patch.dict("os.environ", {"BITBUCKET_PR_CLI_TIMEOUT": "soon"}, clear=True):
            self.assertEqual(load_settings().timeout, DEFAULT_TIMEOUT)


class SetupTests(unittest.TestCase):
    def test_setup_replaces_credentials_and_keeps_repositories(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = ConfigStore(Path(tmp) / "state.json")
            config = Config(username="old", password="old", workspace="old", repos=["svc-api"])
            config.remember_branches("svc-api", "develop", ["prod"])
            prompter = ScriptedPrompter("dev", "app-pass", "acme")

            result = run_setup(store, config, prompter)
            reloaded = store.load()

        self.assertEqual(prompter.kinds(), ["text", "secret", "text"])
        self.assertEqual((result.username, result.password, result.workspace), ("dev", "app-pass", "acme"))
        self.assertEqual(reloaded.repos, ["svc-api"])
        self.assertEqual(reloaded.source_branch("svc-api"), "develop")


if __name__ == "__main__":
    unittest.main()
