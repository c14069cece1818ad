from __future__ import annotations

from typing import Dict, Optional

from mobci.build.context import BuildContext
from mobci.model import DistributionCertificate, IosCredentials
from mobci.ui.console import get_console

from .credentials_json import read_ios_credentials_async
from .prompt_for_credentials import (
    CredentialSchema,
    ProvideMethodQuestion,
    Question,
    QuestionType,
    ask_for_user_provided_async,
)


async def _ios_credentials_from_answers_async(answers: Dict[str, str]) -> IosCredentials:
    return IosCredentials(
        provisioning_profile=answers["provisioning_profile"],
        distribution_certificate=DistributionCertificate(
            cert_p12=answers["cert_p12"],
            cert_password=answers["cert_password"],
        ),
    )


IOS_CREDENTIALS_SCHEMA: CredentialSchema[IosCredentials] = CredentialSchema(
    name="iOS Distribution Certificate and Provisioning Profile",
    provide_method_question=ProvideMethodQuestion(
        question="Will you provide your own iOS Distribution Certificate and Provisioning Profile?",
        user_provided="I want to upload my own files",
    ),
    questions=[
        Question(
            field="cert_p12",
            question="Path to P12 file:",
            type=QuestionType.FILE,
            base64_encode=True,
        ),
        Question(field="cert_password", question="P12 password:", type=QuestionType.PASSWORD),
        Question(
            field="provisioning_profile",
            question="Path to .mobileprovision file:",
            type=QuestionType.FILE,
            base64_encode=True,
        ),
    ],
    transform_result_async=_ios_credentials_from_answers_async,
)


async def ensure_ios_credentials_async(ctx: BuildContext) -> Optional[IosCredentials]:
    console = get_console()
    command_ctx = ctx.command_ctx

    if ctx.build_profile.credentials_source == "local":
        console.print_debug("Reading iOS credentials from credentials.json")
        return await read_ios_credentials_async(command_ctx.project_dir)

    if command_ctx.non_interactive:
        console.print_debug("Non-interactive mode, leaving iOS credentials to the build service")
        return None

    credentials = await ask_for_user_provided_async(IOS_CREDENTIALS_SCHEMA)
    if credentials is None:
        console.print_info("The build service will generate and manage your iOS credentials.")
    return credentials
