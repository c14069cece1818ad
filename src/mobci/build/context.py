from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from mobci.config import BuildProfile, EasConfig
from mobci.model import Platform


@dataclass
class CommandContext:
    """Facts about one CLI invocation."""
    project_dir: Path
    profile: str = "release"
    exp: Dict[str, Any] = field(default_factory=dict)
    non_interactive: bool = False


@dataclass
class BuildContext:
    command_ctx: CommandContext
    platform: Platform
    build_profile: BuildProfile
    project_id: str


def create_build_context(
    *,
    command_ctx: CommandContext,
    platform: Platform,
    eas_config: EasConfig,
    project_id: str,
) -> BuildContext:
    return BuildContext(
        command_ctx=command_ctx,
        platform=platform,
        build_profile=eas_config.get_build_profile(platform, command_ctx.profile),
        project_id=project_id,
    )
