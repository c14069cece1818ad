from __future__ import annotations

from typing import Any, Dict

from mobci.build.context import BuildContext
from mobci.build.utils import get_project_root_directory_async, prepare_job_common_async
from mobci.errors import UnknownWorkflowError
from mobci.job import IosGenericJobDraft, IosManagedJobDraft, Job, sanitize_job
from mobci.model import IosCredentials, JobData, Platform, Workflow


async def prepare_job_async(ctx: BuildContext, job_data: JobData) -> Job:
    build_profile = ctx.build_profile
    if build_profile.workflow not in (Workflow.GENERIC, Workflow.MANAGED):
        raise UnknownWorkflowError(build_profile.workflow)

    common = await prepare_job_common_async(ctx, job_data, Platform.IOS, _build_credentials)
    project_root_directory = await get_project_root_directory_async(ctx.command_ctx.project_dir)

    if build_profile.workflow == Workflow.GENERIC:
        draft = IosGenericJobDraft(
            common=common,
            project_root_directory=project_root_directory,
            scheme=job_data.project_configuration.get("ios_native_project_scheme"),
            artifact_path=build_profile.artifact_path,
        )
    else:
        draft = IosManagedJobDraft(
            common=common,
            project_root_directory=project_root_directory,
        )

    return sanitize_job(draft)


def _build_credentials(credentials: IosCredentials) -> Dict[str, Any]:
    certificate = credentials.distribution_certificate
    return {
        "provisioning_profile_base64": credentials.provisioning_profile,
        "distribution_certificate": {
            "data_base64": certificate.cert_p12,
            "password": certificate.cert_password,
        },
    }
