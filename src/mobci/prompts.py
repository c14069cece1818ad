"""Single-question terminal prompts built on click."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Literal, Optional, Union

import click

ValidationResult = Union[bool, str]
Validator = Callable[[Any], Union[ValidationResult, Awaitable[ValidationResult]]]

DEFAULT_INVALID_MESSAGE = "Invalid input."


@dataclass(frozen=True)
class Choice:
    title: str
    value: Any


@dataclass(frozen=True)
class Question:
    """
    Descriptor for one prompt.

    `format` is applied to the raw input before `validate`. `validate` may
    return True, False, or a message; anything but True re-issues the question.
    """
    type: Literal["select", "text", "password"]
    name: str
    message: str
    initial: Optional[str] = None
    choices: Optional[List[Choice]] = None
    format: Optional[Callable[[str], Any]] = None
    validate: Optional[Validator] = None


def _ask(question: Question) -> Any:
    """Blocking read of one raw answer from the terminal."""
    if question.type == "select":
        choices = question.choices or []
        if not choices:
            raise ValueError(f"select prompt {question.name!r} has no choices")
        click.echo(question.message)
        for idx, choice in enumerate(choices, start=1):
            click.echo(f"  {idx}) {choice.title}")
        picked = click.prompt(
            "Choose",
            type=click.IntRange(1, len(choices)),
            default=1,
        )
        return choices[picked - 1].value

    if question.type == "password":
        return click.prompt(
            question.message,
            default="",
            hide_input=True,
            show_default=False,
        )

    return click.prompt(
        question.message,
        default=question.initial if question.initial is not None else "",
        show_default=bool(question.initial),
    )


async def _run_validate(validate: Optional[Validator], value: Any) -> ValidationResult:
    if validate is None:
        return True
    result = validate(value)
    if inspect.isawaitable(result):
        result = await result
    return result


async def prompt_async(question: Question) -> Dict[str, Any]:
    """
    Ask a single question until it validates.

    Returns:
        Mapping of `question.name` to the (formatted) answer.
    """
    while True:
        raw = _ask(question)
        value = question.format(raw) if question.format is not None else raw
        verdict = await _run_validate(question.validate, value)
        if verdict is True:
            return {question.name: value}
        message = verdict if isinstance(verdict, str) and verdict else DEFAULT_INVALID_MESSAGE
        click.echo(click.style(f"✖ {message}", fg="red"), err=True)
