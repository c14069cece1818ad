from __future__ import annotations

import asyncio
from typing import Optional

from mobci.build.build import noop_async, start_build_for_platform_async
from mobci.build.context import BuildContext, CommandContext, create_build_context
from mobci.config import EasConfig
from mobci.credentials.ios import ensure_ios_credentials_async
from mobci.errors import NoSchemesFoundError
from mobci.model import Platform, Workflow
from mobci.prompts import Choice, Question, prompt_async
from mobci.ui.console import bold, get_console

from .configure import sync_project_configuration_async
from .prepare_job import prepare_job_async
from .scheme import EXCLUDED_SCHEME_MARKER, get_schemes_from_xcodeproj


async def start_ios_build_async(
    command_ctx: CommandContext,
    eas_config: EasConfig,
    project_id: str,
) -> str:
    build_ctx = create_build_context(
        command_ctx=command_ctx,
        platform=Platform.IOS,
        eas_config=eas_config,
        project_id=project_id,
    )

    ios_native_project_scheme: Optional[str] = None
    if build_ctx.build_profile.workflow == Workflow.GENERIC:
        ios_native_project_scheme = build_ctx.build_profile.scheme or await resolve_scheme_async(build_ctx)
        await sync_project_configuration_async(command_ctx.project_dir, command_ctx.exp)

    return await start_build_for_platform_async(
        ctx=build_ctx,
        project_configuration={"ios_native_project_scheme": ios_native_project_scheme},
        ensure_credentials_async=ensure_ios_credentials_async,
        ensure_project_configured_async=noop_async,
        prepare_job_async=prepare_job_async,
    )


async def resolve_scheme_async(ctx: BuildContext) -> str:
    """
    Pick the Xcode scheme to build when the profile does not name one.

    Raises:
        NoSchemesFoundError: if the project has no shared schemes
    """
    project_dir = ctx.command_ctx.project_dir
    schemes = await asyncio.to_thread(get_schemes_from_xcodeproj, project_dir)
    if not schemes:
        raise NoSchemesFoundError(str(project_dir))
    if len(schemes) == 1:
        return schemes[0]

    console = get_console()
    sorted_schemes = sorted(schemes)
    console.print_newline()
    console.print_info(
        f"We've found multiple schemes in your Xcode project: {bold(', '.join(sorted_schemes))}"
    )
    console.print_info(
        f"You can specify the scheme you want to build at {bold('builds.ios.PROFILE_NAME.scheme')} in eas.json."
    )

    if ctx.command_ctx.non_interactive:
        candidates = [s for s in sorted_schemes if EXCLUDED_SCHEME_MARKER not in s]
        scheme = candidates[0] if candidates else sorted_schemes[0]
        console.print_info(f"You've run mobci in non-interactive mode, choosing the {bold(scheme)} scheme.")
        console.print_newline()
        return scheme

    answer = await prompt_async(
        Question(
            type="select",
            name="selected_scheme",
            message="Which scheme would you like to build now?",
            choices=[Choice(title=scheme, value=scheme) for scheme in sorted_schemes],
        )
    )
    console.print_newline()
    return answer["selected_scheme"]
