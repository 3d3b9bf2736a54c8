"""Typer-based CLI and main menu for bitbucket-pr-cli."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import typer

from . import __version__, render
from .client import BitbucketClient
from .config import ConfigStore, Settings, load_settings, run_setup
from .exceptions import BitbucketCliError, UserAbort
from .interactive import InquirerPrompter, Prompter, build_choices
from .models import Config, MergeOutcome
from .pull_requests import list_pull_requests, merge_pull_requests
from .repositories import manage_repositories, select_repository
from .workflow import PullRequestWorkflow

app = typer.Typer(help="Browse, create and merge Bitbucket pull requests", add_completion=False)
logger = logging.getLogger(__name__)

MAIN_MENU = [
    ("list", "List Pull Requests"),
    ("create", "Create Pull Requests"),
    ("selectRepo", "Select Repository"),
    ("configure", "Configure CLI"),
    ("exit", "Exit"),
]


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"bitbucket-pr-cli {__version__}")
        raise typer.Exit()


@dataclass
class Shell:
    """Main menu loop; owns the configuration for the lifetime of the process."""

    settings: Settings
    store: ConfigStore
    config: Config
    prompter: Prompter
    client: BitbucketClient = field(init=False)

    def __post_init__(self) -> None:
        self.client = self._build_client()

    def _build_client(self) -> BitbucketClient:
        return BitbucketClient.from_config(self.config, base_url=self.settings.api_url, timeout=self.settings.timeout)

    def run(self) -> None:
        menu = build_choices(MAIN_MENU)
        while True:
            action = self.prompter.select("What would you like to do?", menu)
            logger.debug("Menu action: %s", action)
            if action == "exit":
                break
            if action == "configure":
                self.config = run_setup(self.store, self.config, self.prompter)
                self.client = self._build_client()
            elif action == "selectRepo":
                manage_repositories(self.config, self.store, self.prompter)
            elif action == "create":
                repo = select_repository(self.config, self.store, self.prompter)
                PullRequestWorkflow(self.client, self.config, self.store, self.prompter).create_pull_requests(repo)
            elif action == "list":
                self.list_and_merge()
                if not self.prompter.confirm("Return to main menu?", default=True):
                    break
        render.info("Goodbye!")

    def list_and_merge(self) -> list[MergeOutcome]:
        repo = select_repository(self.config, self.store, self.prompter)
        pull_requests = list_pull_requests(self.client, self.config.workspace, repo)
        if not pull_requests:
            return []
        mapping = {pr.label: pr.id for pr in pull_requests}
        selected = self.prompter.checkbox(
            "Select pull requests to merge (Press Space to select, Enter to confirm):",
            list(mapping.keys()),
        )
        if not selected:
            render.warning("No PRs selected. Returning to main menu.")
            return []
        if not self.prompter.confirm(f"Are you sure you want to merge {len(selected)} PR(s)?", default=False):
            return []
        outcomes = merge_pull_requests(self.client, self.config.workspace, repo, [mapping[label] for label in selected])
        failed = [outcome for outcome in outcomes if not outcome.ok]
        if failed:
            render.warning(f"{len(failed)} of {len(outcomes)} merge(s) failed.")
        else:
            render.success("All selected PRs have been merged!")
        return outcomes


def start(settings: Settings, prompter: Prompter, *, force_setup: bool = False) -> None:
    store = ConfigStore(settings.config_path)
    config = store.load()
    if force_setup or not config.has_credentials:
        config = run_setup(store, config, prompter)
    Shell(settings, store, config, prompter).run()


@app.command()
def main(
    configure: bool = typer.Option(False, "--configure", "-c", help="Run the configuration prompts before the menu."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the bitbucket-pr-cli version and exit.",
    ),
) -> None:
    """Interactive menu for Bitbucket pull requests.

    Credentials, the workspace and saved repositories live in
    ~/.bitbucket-pr-cli.json (override with BITBUCKET_PR_CLI_CONFIG).
    """

    _ = version  # handled via callback
    configure_logging(verbose)
    try:
        start(load_settings(), InquirerPrompter(), force_setup=configure)
    except UserAbort:
        render.info("Goodbye!")
    except BitbucketCliError as exc:
        _fail(str(exc))
    except Exception as exc:
        logger.exception("Unexpected error")
        _fail(f"An error occurred: {exc}")


def _fail(message: str, code: int = 1) -> None:
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code)


if __name__ == "__main__":
    app()
