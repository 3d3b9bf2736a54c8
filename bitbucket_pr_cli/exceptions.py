"""Custom exception hierarchy for bitbucket-pr-cli."""

from __future__ import annotations

import requests


class BitbucketCliError(Exception):
    """Base error for all custom exceptions."""


class ConfigError(BitbucketCliError):
    """Raised when the local state file cannot be read or written."""


class ApiError(BitbucketCliError):
    """Raised when a Bitbucket API call fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @classmethod
    def from_exception(cls, exc: requests.RequestException) -> "ApiError":
        """Prefer the service's ``error.message`` over the transport message."""

        response = exc.response
        if response is None:
            return cls(str(exc))
        message = _remote_message(response) or str(exc)
        return cls(message, status_code=response.status_code)


class ValidationError(BitbucketCliError):
    """Raised when user input is invalid."""


class UserAbort(BitbucketCliError):
    """Raised when the user cancels an interactive flow."""


class NoBranchesFound(BitbucketCliError):
    """Raised when a repository has no branches to choose from."""


def _remote_message(response: requests.Response) -> str | None:
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return None
