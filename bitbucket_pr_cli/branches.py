"""Branch listing with cursor pagination."""

from __future__ import annotations

import logging

from .client import BitbucketClient
from .exceptions import ApiError
from .models import BranchListing

logger = logging.getLogger(__name__)

PAGE_LENGTH = 50


def branches_path(workspace: str, repo: str) -> str:
    return f"/repositories/{workspace}/{repo}/refs/branches?pagelen={PAGE_LENGTH}"


def list_branches(client: BitbucketClient, workspace: str, repo: str) -> BranchListing:
    """Fetch every branch name, following ``next`` until it is absent.

    A failed page stops pagination; the names from earlier pages are returned
    together with the error message.
    """

    names: list[str] = []
    next_page: str | None = branches_path(workspace, repo)
    while next_page:
        try:
            page = client.get(next_page)
        except ApiError as exc:
            logger.warning("Failed to fetch branches for %s after %d: %s", repo, len(names), exc)
            return BranchListing(names=names, error=str(exc))
        names.extend(branch["name"] for branch in page.get("values", []))
        next_page = page.get("next") or None
    logger.debug("Fetched %d branches for %s", len(names), repo)
    return BranchListing(names=names)
