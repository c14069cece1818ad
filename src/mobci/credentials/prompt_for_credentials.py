"""
Schema-driven interactive credential collection.

A CredentialSchema lists the scalar inputs that make up a credential bundle.
The engine asks them in order, validates and post-processes each answer
according to its QuestionType, and optionally transforms the resulting
answer bag into a typed bundle.
"""

from __future__ import annotations

import asyncio
import base64
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, Dict, Generic, List, Mapping, Optional, TypeVar

from mobci.prompts import Choice, Question as PromptQuestion, ValidationResult, prompt_async
from mobci.ui.console import get_console

T = TypeVar("T")


class QuestionType(str, Enum):
    FILE = "file"
    STRING = "string"
    PASSWORD = "password"


@dataclass(frozen=True)
class Question:
    """One scalar input slot in a credential bundle."""
    field: str
    question: str
    type: QuestionType
    base64_encode: bool = False

    def __post_init__(self) -> None:
        if self.base64_encode and self.type != QuestionType.FILE:
            raise ValueError(f"question {self.field!r}: base64_encode only applies to file questions")


@dataclass(frozen=True)
class ProvideMethodQuestion:
    question: Optional[str] = None
    auto_generated: Optional[str] = None
    user_provided: Optional[str] = None


@dataclass(frozen=True)
class CredentialSchema(Generic[T]):
    name: str
    questions: List[Question]
    provide_method_question: Optional[ProvideMethodQuestion] = None
    transform_result_async: Optional[Callable[[Dict[str, str]], Awaitable[T]]] = None

    def __post_init__(self) -> None:
        fields = [q.field for q in self.questions]
        if len(set(fields)) != len(fields):
            dupes = sorted({f for f in fields if fields.count(f) > 1})
            raise ValueError(f"Duplicate fields in credential schema {self.name!r}: {dupes}")


EXPERT_WARNING = """
In this mode, we won't be able to make sure that your credentials are valid.
Please double check that you're uploading valid files for your app otherwise you may encounter strange errors!

When building for iOS make sure you've created your App ID on the Apple Developer Portal, that your App ID
is in app.json as `bundleIdentifier`, and that the provisioning profile you
upload matches that Team ID and App ID.
"""

_expert_warning_shown = False


def _warn_about_manual_credentials_once() -> None:
    global _expert_warning_shown
    if _expert_warning_shown:
        return
    _expert_warning_shown = True
    get_console().print_warning(EXPERT_WARNING)


async def ask_for_user_provided_async(
    schema: CredentialSchema[T],
    initial_values: Optional[Mapping[str, str]] = None,
) -> Optional[T]:
    """
    Ask whether the user supplies credentials and, if so, collect them.

    Returns:
        The credential bundle, or None when the user lets the build service
        provision credentials.
    """
    if await _will_user_provide_credentials_async(schema):
        _warn_about_manual_credentials_once()
        return await get_credentials_from_user_async(schema, initial_values or {})
    return None


async def get_credentials_from_user_async(
    schema: CredentialSchema[T],
    initial_values: Optional[Mapping[str, str]] = None,
) -> T:
    initial_values = initial_values or {}
    results: Dict[str, str] = {}
    for question in schema.questions:
        results[question.field] = await _ask_question_and_process_answer_async(
            question,
            initial_values.get(question.field),
        )
    if schema.transform_result_async is not None:
        return await schema.transform_result_async(results)
    return results  # type: ignore[return-value]


async def _will_user_provide_credentials_async(schema: CredentialSchema) -> bool:
    override = schema.provide_method_question or ProvideMethodQuestion()
    answer = await prompt_async(
        PromptQuestion(
            type="select",
            name="answer",
            message=override.question or f"Will you provide your own {schema.name}?",
            choices=[
                Choice(
                    title=override.auto_generated or "Let the build service handle the process",
                    value=False,
                ),
                Choice(
                    title=override.user_provided or "I want to upload my own file",
                    value=True,
                ),
            ],
        )
    )
    return bool(answer["answer"])


# ---------------------------------------------------------------------
# Per-kind behaviour
# ---------------------------------------------------------------------

def produce_absolute_path(file_path: str) -> str:
    expanded = os.path.expanduser(file_path.strip())
    if os.path.isabs(expanded):
        return expanded
    return os.path.abspath(expanded)


def validate_non_empty_input(value: str) -> bool:
    return value != ""


async def validate_existing_file_async(file_path: str) -> ValidationResult:
    path = Path(file_path)
    if not await asyncio.to_thread(path.exists):
        return "File does not exist."
    if not await asyncio.to_thread(path.is_file):
        return "Input is not a file."
    return True


async def _read_file_answer_async(question: Question, file_path: str) -> str:
    data = await asyncio.to_thread(Path(file_path).read_bytes)
    if question.base64_encode:
        return base64.b64encode(data).decode("ascii")
    return data.decode("utf-8")


async def _identity_async(question: Question, value: str) -> str:
    return value


@dataclass(frozen=True)
class _QuestionKind:
    prompt_type: str
    accepts_initial: bool
    format: Optional[Callable[[str], str]]
    validate: Callable
    process: Callable[[Question, str], Awaitable[str]]


_QUESTION_KINDS: Dict[QuestionType, _QuestionKind] = {
    QuestionType.STRING: _QuestionKind(
        prompt_type="text",
        accepts_initial=True,
        format=None,
        validate=validate_non_empty_input,
        process=_identity_async,
    ),
    QuestionType.PASSWORD: _QuestionKind(
        prompt_type="password",
        accepts_initial=False,
        format=None,
        validate=validate_non_empty_input,
        process=_identity_async,
    ),
    QuestionType.FILE: _QuestionKind(
        prompt_type="text",
        accepts_initial=False,
        format=produce_absolute_path,
        validate=validate_existing_file_async,
        process=_read_file_answer_async,
    ),
}


def _build_question_object(question: Question, initial_value: Optional[str]) -> PromptQuestion:
    kind = _QUESTION_KINDS[question.type]
    return PromptQuestion(
        type=kind.prompt_type,
        name="input",
        message=question.question,
        initial=initial_value if kind.accepts_initial else None,
        format=kind.format,
        validate=kind.validate,
    )


async def _ask_question_and_process_answer_async(
    question: Question,
    initial_value: Optional[str] = None,
) -> str:
    answer = await prompt_async(_build_question_object(question, initial_value))
    return await _QUESTION_KINDS[question.type].process(question, answer["input"])
