"""Dataclasses shared across modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Config:
    """User state persisted between runs.

    Branch selections are keyed by repository name in memory and written back
    as the list-of-objects layout used by the state file.
    """

    username: str = ""
    password: str = ""
    workspace: str = ""
    repos: list[str] = field(default_factory=list)
    source_branches: dict[str, str] = field(default_factory=dict)
    destination_branches: dict[str, list[str]] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password and self.workspace)

    def source_branch(self, repo: str) -> str | None:
        return self.source_branches.get(repo) or None

    def destinations(self, repo: str) -> list[str]:
        return list(self.destination_branches.get(repo, []))

    def remember_branches(self, repo: str, source: str, destinations: list[str]) -> None:
        self.source_branches[repo] = source
        self.destination_branches[repo] = list(destinations)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        known = {"username", "password", "workspace", "repos", "sourceBranch", "destinationBranches"}
        repos: list[str] = []
        for repo in _as_list(data.get("repos")):
            if isinstance(repo, str) and repo and repo not in repos:
                repos.append(repo)
        sources: dict[str, str] = {}
        for entry in _as_list(data.get("sourceBranch")):
            if isinstance(entry, dict) and entry.get("repo") and isinstance(entry.get("source"), str) and entry["source"]:
                sources[str(entry["repo"])] = str(entry["source"])
        destinations: dict[str, list[str]] = {}
        for entry in _as_list(data.get("destinationBranches")):
            if isinstance(entry, dict) and entry.get("repo"):
                names = [name for name in _as_list(entry.get("destination")) if isinstance(name, str) and name]
                destinations[str(entry["repo"])] = names
        return cls(
            username=str(data.get("username") or ""),
            password=str(data.get("password") or ""),
            workspace=str(data.get("workspace") or ""),
            repos=repos,
            source_branches=sources,
            destination_branches=destinations,
            extra={key: value for key, value in data.items() if key not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = dict(self.extra)
        data.update(
            {
                "username": self.username,
                "password": self.password,
                "workspace": self.workspace,
                "repos": list(self.repos),
                "sourceBranch": [
                    {"repo": repo, "source": source} for repo, source in self.source_branches.items()
                ],
                "destinationBranches": [
                    {"repo": repo, "destination": list(names)}
                    for repo, names in self.destination_branches.items()
                ],
            }
        )
        return data


@dataclass(frozen=True)
class PullRequest:
    """Summary of a pull request as returned by the listing endpoint."""

    id: int
    title: str
    source: str
    destination: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "PullRequest":
        return cls(
            id=int(data["id"]),
            title=str(data.get("title", "")),
            source=_branch_name(data.get("source")),
            destination=_branch_name(data.get("destination")),
        )

    @property
    def label(self) -> str:
        return f"#{self.id}: {self.title} ({self.source} → {self.destination})"


@dataclass(frozen=True)
class BranchListing:
    """Branch names fetched so far plus the error that stopped pagination, if any."""

    names: list[str]
    error: str | None = None

    @property
    def complete(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class CreationOutcome:
    source: str
    destination: str
    link: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class MergeOutcome:
    pr_id: int
    data: dict[str, Any] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class WorkflowSession:
    """Transient state of a single "create pull request(s)" run."""

    repo: str
    source: str | None = None
    destinations: list[str] = field(default_factory=list)
    branches: list[str] | None = None

    @property
    def branches_fetched(self) -> bool:
        return self.branches is not None


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _branch_name(ref: Any) -> str:
    if not isinstance(ref, dict):
        return "?"
    branch = ref.get("branch") or {}
    return str(branch.get("name") or "?")
