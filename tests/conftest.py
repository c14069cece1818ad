"""
Shared fixtures for mobci unit tests.
"""

from pathlib import Path
from typing import Any, List, Tuple

import click
import pytest

from mobci.build.context import BuildContext, CommandContext
from mobci.credentials import prompt_for_credentials
from mobci.model import Platform
from mobci.ui.console import Console, set_console


# ------------------------------------------------------------------
# Terminal input
# ------------------------------------------------------------------


class ScriptedPrompt:
    """Stands in for click.prompt, returning scripted answers in order."""

    def __init__(self, answers):
        self.answers: List[Any] = list(answers)
        self.calls: List[Tuple[str, dict]] = []

    def __call__(self, text, **kwargs):
        self.calls.append((text, kwargs))
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {text!r}")
        return self.answers.pop(0)


@pytest.fixture
def scripted_prompt(monkeypatch):
    def install(*answers) -> ScriptedPrompt:
        fake = ScriptedPrompt(answers)
        monkeypatch.setattr(click, "prompt", fake)
        return fake

    return install


@pytest.fixture(autouse=True)
def fresh_console():
    set_console(Console())
    yield
    set_console(Console())


@pytest.fixture(autouse=True)
def reset_expert_warning(monkeypatch):
    monkeypatch.setattr(prompt_for_credentials, "_expert_warning_shown", False)


# ------------------------------------------------------------------
# Contexts
# ------------------------------------------------------------------


def make_build_context(
    build_profile,
    platform: Platform = Platform.ANDROID,
    project_dir: Path = Path("."),
    non_interactive: bool = False,
    exp=None,
) -> BuildContext:
    return BuildContext(
        command_ctx=CommandContext(
            project_dir=project_dir,
            profile="release",
            exp=exp or {},
            non_interactive=non_interactive,
        ),
        platform=platform,
        build_profile=build_profile,
        project_id="proj-123",
    )


@pytest.fixture
def git_root_at(monkeypatch):
    """Pin the repository root used by job preparation; records the directories asked about."""
    asked: List[str] = []

    def install(root: Path) -> List[str]:
        async def fake_git_root_directory_async(cwd=None):
            asked.append(cwd)
            return root

        monkeypatch.setattr("mobci.build.utils.git_root_directory_async", fake_git_root_directory_async)
        return asked

    return install
