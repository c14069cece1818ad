from __future__ import annotations

from mobci.build.build import noop_async, start_build_for_platform_async
from mobci.build.context import CommandContext, create_build_context
from mobci.config import EasConfig
from mobci.credentials.android import ensure_android_credentials_async
from mobci.model import Platform

from .prepare_job import prepare_job_async


async def start_android_build_async(
    command_ctx: CommandContext,
    eas_config: EasConfig,
    project_id: str,
) -> str:
    build_ctx = create_build_context(
        command_ctx=command_ctx,
        platform=Platform.ANDROID,
        eas_config=eas_config,
        project_id=project_id,
    )
    return await start_build_for_platform_async(
        ctx=build_ctx,
        project_configuration={},
        ensure_credentials_async=ensure_android_credentials_async,
        ensure_project_configured_async=noop_async,
        prepare_job_async=prepare_job_async,
    )
