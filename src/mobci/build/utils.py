from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from mobci.build.context import BuildContext
from mobci.credentials.credentials_json import read_secret_envs_async
from mobci.git_facts.git import git_root_directory_async
from mobci.job import CommonJobProperties
from mobci.model import Credentials, JobData, Platform


async def get_project_root_directory_async(project_dir: str | Path) -> str:
    """Project directory relative to its repository root ("." at the root)."""
    root = await git_root_directory_async(cwd=str(project_dir))
    return os.path.relpath(os.path.realpath(project_dir), os.path.realpath(root)) or "."


async def prepare_job_common_async(
    ctx: BuildContext,
    job_data: JobData,
    platform: Platform,
    build_credentials: Callable[[Credentials], Dict[str, Any]],
) -> CommonJobProperties:
    """Properties shared by every workflow of `platform`."""
    secret_envs: Optional[Dict[str, str]] = await read_secret_envs_async(ctx.command_ctx.project_dir)
    secrets: Dict[str, Any] = {}
    if secret_envs:
        secrets["secret_envs"] = secret_envs
    if job_data.credentials is not None:
        secrets["build_credentials"] = build_credentials(job_data.credentials)

    return CommonJobProperties(
        platform=platform,
        project_url=job_data.archive_url,
        secrets=secrets,
    )
