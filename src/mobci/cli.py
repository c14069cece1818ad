# cli.py
from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from mobci.api_client import APIError
from mobci.build.android.build import start_android_build_async
from mobci.build.context import CommandContext
from mobci.build.ios.build import start_ios_build_async
from mobci.config import get_project_id, load_app_config, load_eas_config
from mobci.errors import JobValidationError, MobciError
from mobci.ui.console import Console, get_console, set_console

BUILD_STARTERS = {
    "android": start_android_build_async,
    "ios": start_ios_build_async,
}


async def _run_builds(platforms: list[str], command_ctx: CommandContext, eas_config, project_id: str) -> dict[str, str]:
    # Sequential: credential prompts for one platform must finish before the next starts.
    build_ids: dict[str, str] = {}
    for platform_name in platforms:
        build_ids[platform_name] = await BUILD_STARTERS[platform_name](command_ctx, eas_config, project_id)
    return build_ids


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """mobci: trigger cloud builds of mobile apps."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@click.option(
    "--platform",
    "platform_name",
    required=True,
    type=click.Choice(["android", "ios", "all"]),
    help="Platform to build for",
)
@click.option("--profile", default="release", show_default=True, help="Build profile name from eas.json")
@click.option(
    "--non-interactive",
    is_flag=True,
    default=False,
    help="Never prompt; pick defaults and leave credentials to the build service",
)
@click.option(
    "--project-dir",
    default=".",
    show_default=True,
    type=click.Path(exists=True, file_okay=False),
    help="Project directory containing app.json and eas.json",
)
@click.option("--project-id", default=None, help="Project ID (defaults to expo.extra.eas.projectId in app.json)")
@click.pass_context
def build(ctx, platform_name, profile, non_interactive, project_dir, project_id):
    """Start a build on the build service."""
    console = get_console()
    project_path = Path(project_dir).resolve()

    try:
        exp = load_app_config(project_path)
        eas_config = load_eas_config(project_path)
    except MobciError as e:
        console.print_error(
            "Invalid project configuration",
            str(e),
            suggestion="Run mobci from your project directory or pass --project-dir.",
        )
        sys.exit(1)

    project_id = project_id or get_project_id(exp)
    if not project_id:
        console.print_error(
            "Missing project ID",
            "Could not determine the project ID.",
            suggestion="Set expo.extra.eas.projectId in app.json or pass --project-id.",
        )
        sys.exit(1)

    platforms = ["android", "ios"] if platform_name == "all" else [platform_name]
    command_ctx = CommandContext(
        project_dir=project_path,
        profile=profile,
        exp=exp,
        non_interactive=non_interactive,
    )

    try:
        build_ids = asyncio.run(_run_builds(platforms, command_ctx, eas_config, project_id))
    except (KeyboardInterrupt, click.Abort):
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except JobValidationError as e:
        console.print_error("Invalid build job", str(e), details=e.details)
        sys.exit(1)
    except MobciError as e:
        console.print_error("Build failed", str(e))
        sys.exit(1)
    except APIError as e:
        console.print_error(
            "Build service request failed",
            str(e),
            suggestion="Check MOBCI_API_URL and MOBCI_TOKEN and retry.",
        )
        sys.exit(1)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)

    console.print_newline()
    for name, build_id in build_ids.items():
        console.print_info(f"  {name}: {build_id}")


if __name__ == "__main__":
    cli()
