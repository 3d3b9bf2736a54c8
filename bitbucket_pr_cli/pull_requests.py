"""Pull request operations: list, merge and create."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from . import render
from .client import BitbucketClient
from .exceptions import ApiError
from .models import CreationOutcome, MergeOutcome, PullRequest

logger = logging.getLogger(__name__)

PAGE_LENGTH = 50
MERGE_STRATEGY = "merge_commit"
PR_DESCRIPTION = "Created with bitbucket-pr-cli."


def pull_requests_path(workspace: str, repo: str) -> str:
    return f"/repositories/{workspace}/{repo}/pullrequests"


def list_pull_requests(
    client: BitbucketClient,
    workspace: str,
    repo: str,
    state: str = "OPEN",
) -> list[PullRequest]:
    """Return pull requests in ``state`` in the order the service lists them.

    Faults are reported and yield an empty list.
    """

    try:
        with render.spinner("Fetching pull requests..."):
            data = client.get(pull_requests_path(workspace, repo), params={"pagelen": PAGE_LENGTH, "state": state})
    except ApiError as exc:
        render.error(f"Failed to fetch pull requests: {exc}")
        return []
    pull_requests = [PullRequest.from_api(item) for item in data.get("values", [])]
    if not pull_requests:
        logger.info("No %s pull requests in %s", state.lower(), repo)
        render.info(f"No {state.lower()} pull requests found.")
        return []
    render.show_pull_requests(repo, state, pull_requests)
    return pull_requests


def merge_pull_request(
    client: BitbucketClient,
    workspace: str,
    repo: str,
    pr_id: int,
    message: str | None = None,
) -> dict[str, Any]:
    payload = {
        "merge_strategy": MERGE_STRATEGY,
        "message": message or f"Merged pull request #{pr_id} via CLI",
    }
    return client.post(f"{pull_requests_path(workspace, repo)}/{pr_id}/merge", payload)


def merge_pull_requests(
    client: BitbucketClient,
    workspace: str,
    repo: str,
    pr_ids: Sequence[int],
) -> list[MergeOutcome]:
    """Merge each id in order; a failure does not stop the remaining merges."""

    outcomes: list[MergeOutcome] = []
    for pr_id in pr_ids:
        try:
            with render.spinner(f"Merging PR #{pr_id}..."):
                data = merge_pull_request(client, workspace, repo, pr_id)
        except ApiError as exc:
            render.error(f"Failed to merge PR #{pr_id}: {exc}")
            outcomes.append(MergeOutcome(pr_id=pr_id, error=str(exc)))
            continue
        render.success(f"Pull request #{pr_id} has been merged!")
        outcomes.append(MergeOutcome(pr_id=pr_id, data=data))
    return outcomes


def create_pull_request(
    client: BitbucketClient,
    workspace: str,
    repo: str,
    source: str,
    destination: str,
) -> str:
    """Open one pull request and return its web link.

    Nothing prevents duplicates; each call asks the service for a new PR.
    """

    payload = {
        "title": f"Merge {source} into {destination} created by CLI",
        "description": PR_DESCRIPTION,
        "source": {"branch": {"name": source}},
        "destination": {"branch": {"name": destination}},
        "close_source_branch": False,
    }
    data = client.post(pull_requests_path(workspace, repo), payload)
    return str(data.get("links", {}).get("html", {}).get("href", ""))


def create_pull_requests(
    client: BitbucketClient,
    workspace: str,
    repo: str,
    source: str,
    destinations: Sequence[str],
) -> list[CreationOutcome]:
    outcomes: list[CreationOutcome] = []
    for destination in destinations:
        try:
            with render.spinner(f"Creating PR from {source} to {destination}..."):
                link = create_pull_request(client, workspace, repo, source, destination)
        except ApiError as exc:
            render.error(f"Failed to create PR from {source} to {destination}: {exc}")
            outcomes.append(CreationOutcome(source=source, destination=destination, error=str(exc)))
            continue
        render.success(f"PR created: {link}")
        outcomes.append(CreationOutcome(source=source, destination=destination, link=link))
    return outcomes
