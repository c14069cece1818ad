from __future__ import annotations

from typing import Any, Dict

from mobci.build.context import BuildContext
from mobci.build.utils import get_project_root_directory_async, prepare_job_common_async
from mobci.errors import UnknownWorkflowError
from mobci.job import AndroidGenericJobDraft, AndroidManagedJobDraft, Job, sanitize_job
from mobci.model import AndroidCredentials, JobData, Platform, Workflow


async def prepare_job_async(ctx: BuildContext, job_data: JobData) -> Job:
    """
    Assemble and sanitize the Android job.

    The workflow is checked before credentials.json or git are consulted.
    """
    build_profile = ctx.build_profile
    if build_profile.workflow not in (Workflow.GENERIC, Workflow.MANAGED):
        raise UnknownWorkflowError(build_profile.workflow)

    common = await prepare_job_common_async(ctx, job_data, Platform.ANDROID, _build_credentials)
    project_root_directory = await get_project_root_directory_async(ctx.command_ctx.project_dir)

    if build_profile.workflow == Workflow.GENERIC:
        draft = AndroidGenericJobDraft(
            common=common,
            project_root_directory=project_root_directory,
            gradle_command=build_profile.gradle_command,
            artifact_path=build_profile.artifact_path,
        )
    else:
        draft = AndroidManagedJobDraft(
            common=common,
            project_root_directory=project_root_directory,
        )

    return sanitize_job(draft)


def _build_credentials(credentials: AndroidCredentials) -> Dict[str, Any]:
    keystore = credentials.keystore
    return {
        "keystore": {
            "data_base64": keystore.keystore,
            "keystore_password": keystore.keystore_password,
            "key_alias": keystore.key_alias,
            "key_password": keystore.key_password,
        },
    }
