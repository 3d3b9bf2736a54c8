"""Interactive prompt helpers built on InquirerPy."""

from __future__ import annotations

import sys
from typing import Any, Callable, Protocol, Sequence, TypeVar

from InquirerPy import inquirer
from InquirerPy.base.control import Choice
from InquirerPy.validator import EmptyInputValidator

from .exceptions import UserAbort, ValidationError

MAX_HEIGHT = 40

T = TypeVar("T")


class Prompter(Protocol):
    """Synchronous prompts; each call blocks until the operator answers."""

    def confirm(self, message: str, default: bool = True) -> bool:
        ...

    def select(self, message: str, choices: Sequence[Choice | str], *, searchable: bool = False) -> Any:
        ...

    def checkbox(
        self,
        message: str,
        choices: Sequence[str],
        *,
        checked: Sequence[str] = (),
        required: str | None = None,
    ) -> list[str]:
        """Return the selected values in the order they are listed."""
        ...

    def text(self, message: str, *, default: str | None = None, required: str | None = None) -> str:
        ...

    def secret(self, message: str, *, required: str | None = None) -> str:
        ...


def _ensure_tty() -> None:
    if not sys.stdin.isatty():
        raise ValidationError("Interactive mode requires a TTY.")


def _execute(build: Callable[[], Any]) -> Any:
    _ensure_tty()
    try:
        return build().execute()
    except KeyboardInterrupt as exc:  # pragma: no cover - user cancel
        raise UserAbort("User cancelled the prompt.") from exc


class InquirerPrompter:
    """Prompter backed by InquirerPy widgets."""

    def confirm(self, message: str, default: bool = True) -> bool:
        return bool(_execute(lambda: inquirer.confirm(message=message, default=default)))

    def select(self, message: str, choices: Sequence[Choice | str], *, searchable: bool = False) -> Any:
        if searchable:
            return _execute(lambda: inquirer.fuzzy(message=message, choices=list(choices), max_height=MAX_HEIGHT))
        return _execute(
            lambda: inquirer.select(message=message, choices=list(choices), max_height=MAX_HEIGHT, qmark="›")
        )

    def checkbox(
        self,
        message: str,
        choices: Sequence[str],
        *,
        checked: Sequence[str] = (),
        required: str | None = None,
    ) -> list[str]:
        items = [Choice(value=item, name=item, enabled=item in checked) for item in choices]
        validate = (lambda result: len(result) > 0) if required else None
        return list(
            _execute(
                lambda: inquirer.checkbox(
                    message=message,
                    choices=items,
                    validate=validate,
                    invalid_message=required or "",
                    instruction="(space to toggle, enter to confirm)",
                    max_height=MAX_HEIGHT,
                )
            )
        )

    def text(self, message: str, *, default: str | None = None, required: str | None = None) -> str:
        validate = EmptyInputValidator(required) if required else None
        raw = _execute(lambda: inquirer.text(message=message, default=default or "", validate=validate))
        return str(raw).strip()

    def secret(self, message: str, *, required: str | None = None) -> str:
        validate = EmptyInputValidator(required) if required else None
        return str(_execute(lambda: inquirer.secret(message=message, validate=validate)))


def build_choices(options: Sequence[tuple[T, str]]) -> list[Choice]:
    """Return Choice objects from ``(value, label)`` pairs."""

    return [Choice(value=value, name=label) for value, label in options]
