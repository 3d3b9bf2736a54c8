"""Saved repository list and target repository resolution."""

from __future__ import annotations

from . import render
from .config import ConfigStore
from .interactive import Prompter, build_choices
from .models import Config

ADD_NEW = "__add__"
REPO_REQUIRED = "Repository is required"


def add_repository(config: Config, store: ConfigStore, prompter: Prompter) -> str:
    """Prompt for a repository name not yet saved, persist it and return it."""

    while True:
        name = prompter.text("Enter new repository name:", required=REPO_REQUIRED)
        if not name:
            render.warning(REPO_REQUIRED)
            continue
        if name in config.repos:
            render.warning(f'Repository "{name}" is already saved.')
            continue
        break
    config.repos.append(name)
    store.save(config)
    return name


def remove_repository(config: Config, store: ConfigStore, name: str) -> None:
    config.repos = [repo for repo in config.repos if repo != name]
    store.save(config)


def select_repository(config: Config, store: ConfigStore, prompter: Prompter) -> str:
    """Return the repository the next operation should target."""

    if not config.repos:
        render.warning("No repositories saved. Please add one.")
        name = add_repository(config, store, prompter)
        render.success(f'Repository "{name}" added successfully!')
        return name
    choices = build_choices([(repo, repo) for repo in config.repos] + [(ADD_NEW, "Add New Repository")])
    selection = prompter.select("Select a repository:", choices)
    if selection == ADD_NEW:
        return add_repository(config, store, prompter)
    return str(selection)


def manage_repositories(config: Config, store: ConfigStore, prompter: Prompter) -> None:
    actions = build_choices(
        [
            ("list", "List Saved Repositories"),
            ("add", "Add Repository"),
            ("remove", "Remove Repository"),
            ("back", "Go Back"),
        ]
    )
    while True:
        action = prompter.select("Manage repositories:", actions)
        if action == "back":
            return
        if action == "list":
            render.show_repositories(config.repos)
        elif action == "add":
            name = add_repository(config, store, prompter)
            render.success(f'Repository "{name}" added successfully!')
        elif action == "remove":
            if not config.repos:
                render.error("No repositories saved.")
                continue
            name = prompter.select("Select a repository to remove:", list(config.repos))
            remove_repository(config, store, name)
            render.warning(f'Repository "{name}" removed!')
