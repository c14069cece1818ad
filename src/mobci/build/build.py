from __future__ import annotations

import asyncio
import tempfile
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Optional

from mobci.api_client import BuildServiceClient
from mobci.git_facts.git import is_dirty_async, make_archive_async
from mobci.job import Job
from mobci.model import Credentials, JobData
from mobci.ui.console import get_console

from .context import BuildContext


async def noop_async() -> None:
    return None


async def start_build_for_platform_async(
    *,
    ctx: BuildContext,
    project_configuration: Dict[str, Any],
    ensure_credentials_async: Callable[[BuildContext], Awaitable[Optional[Credentials]]],
    ensure_project_configured_async: Callable[[], Awaitable[None]],
    prepare_job_async: Callable[[BuildContext, JobData], Awaitable[Job]],
    client: Optional[BuildServiceClient] = None,
) -> str:
    """
    Platform-independent part of starting a build.

    Order: credentials, project configuration, archive + upload, job
    preparation, submission.

    Returns:
        ID of the build created on the build service
    """
    console = get_console()
    client = client or BuildServiceClient.from_settings()

    console.print_build_started(
        platform=ctx.platform.value,
        profile=ctx.command_ctx.profile,
        workflow=str(ctx.build_profile.workflow),
    )

    credentials = await ensure_credentials_async(ctx)
    await ensure_project_configured_async()

    project_dir = str(ctx.command_ctx.project_dir)
    if await is_dirty_async(cwd=project_dir):
        console.print_warning(
            "Your working tree has uncommitted changes. "
            "Only committed files are included in the build archive."
        )

    with tempfile.TemporaryDirectory(prefix="mobci-") as tmp:
        archive_path = await make_archive_async(Path(tmp) / "project.tar.gz", cwd=project_dir)
        console.print_debug(f"Uploading project archive {archive_path}")
        archive_url = await asyncio.to_thread(client.upload_archive, archive_path)

    job = await prepare_job_async(
        ctx,
        JobData(
            archive_url=archive_url,
            credentials=credentials,
            project_configuration=project_configuration,
        ),
    )
    build_id = await asyncio.to_thread(client.create_build, ctx.project_id, job)
    console.print_build_submitted(ctx.platform.value, build_id)
    return build_id
