"""Multi-step "create pull request(s)" flow with branch reuse."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from . import render
from .branches import list_branches
from .client import BitbucketClient
from .config import ConfigStore
from .exceptions import NoBranchesFound
from .interactive import Prompter
from .models import Config, CreationOutcome, WorkflowSession
from .pull_requests import create_pull_requests

logger = logging.getLogger(__name__)

NO_BRANCHES = "No branches found."
SOURCE_REQUIRED = "You must select one source branch."
DESTINATION_REQUIRED = "You must select at least one destination branch."


@dataclass
class PullRequestWorkflow:
    client: BitbucketClient
    config: Config
    store: ConfigStore
    prompter: Prompter

    def create_pull_requests(self, repo: str) -> list[CreationOutcome]:
        """Resolve source and destinations for ``repo`` then open one PR per destination.

        Returns one outcome per attempted destination; empty when the run was
        aborted because no branches were found.
        """

        session = WorkflowSession(repo=repo)
        try:
            self._resolve_source(session)
            self._resolve_destinations(session)
        except NoBranchesFound as exc:
            render.error(str(exc))
            return []
        self.config.remember_branches(repo, session.source, session.destinations)
        self.store.save(self.config)
        logger.debug("Creating PRs in %s: %s -> %s", repo, session.source, session.destinations)
        return create_pull_requests(
            self.client,
            self.config.workspace,
            repo,
            session.source,
            session.destinations,
        )

    def _resolve_source(self, session: WorkflowSession) -> None:
        saved = self.config.source_branch(session.repo)
        if saved and self.prompter.confirm(f"Do you want to re-use this source branch?: {saved}", default=True):
            session.source = saved
            return
        branches = self._branches(session)
        while True:
            selected = self.prompter.select("Select source branch:", branches, searchable=True)
            if isinstance(selected, str) and selected in branches:
                break
            render.warning(SOURCE_REQUIRED)
        session.source = selected

    def _resolve_destinations(self, session: WorkflowSession) -> None:
        saved = self.config.destinations(session.repo)
        if saved:
            listing = "\n - ".join(saved)
            if self.prompter.confirm(
                f"Do you want to re-create with these destination branches?\n - {listing}\n", default=True
            ):
                session.destinations = saved
                return
        candidates = [branch for branch in self._branches(session) if branch != session.source]
        if not candidates:
            raise NoBranchesFound(f"No destination branches available besides {session.source}.")
        selected: list[str] = []
        while not selected:
            selected = self.prompter.checkbox(
                "Select destination branch(es):",
                candidates,
                checked=[branch for branch in saved if branch in candidates],
                required=DESTINATION_REQUIRED,
            )
            if not selected:
                render.warning(DESTINATION_REQUIRED)
        session.destinations = selected

    def _branches(self, session: WorkflowSession) -> list[str]:
        if not session.branches_fetched:
            with render.spinner("Fetching branches..."):
                listing = list_branches(self.client, self.config.workspace, session.repo)
            if not listing.complete:
                render.warning(f"Failed to fetch branches: {listing.error}")
            if not listing.names:
                raise NoBranchesFound(NO_BRANCHES)
            if listing.complete:
                render.success("Branches fetched successfully!")
            session.branches = listing.names
        return session.branches
