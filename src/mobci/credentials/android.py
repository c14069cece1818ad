from __future__ import annotations

from typing import Dict, Optional

from mobci.build.context import BuildContext
from mobci.model import AndroidCredentials, Keystore
from mobci.ui.console import get_console

from .credentials_json import read_android_credentials_async
from .prompt_for_credentials import (
    CredentialSchema,
    Question,
    QuestionType,
    ask_for_user_provided_async,
)


async def _keystore_from_answers_async(answers: Dict[str, str]) -> AndroidCredentials:
    return AndroidCredentials(
        keystore=Keystore(
            keystore=answers["keystore"],
            keystore_password=answers["keystore_password"],
            key_alias=answers["key_alias"],
            key_password=answers["key_password"],
        )
    )


KEYSTORE_SCHEMA: CredentialSchema[AndroidCredentials] = CredentialSchema(
    name="Android Keystore",
    questions=[
        Question(
            field="keystore",
            question="Path to the Keystore file.",
            type=QuestionType.FILE,
            base64_encode=True,
        ),
        Question(field="keystore_password", question="Keystore password", type=QuestionType.PASSWORD),
        Question(field="key_alias", question="Key alias", type=QuestionType.STRING),
        Question(field="key_password", question="Key password", type=QuestionType.PASSWORD),
    ],
    transform_result_async=_keystore_from_answers_async,
)


async def ensure_android_credentials_async(ctx: BuildContext) -> Optional[AndroidCredentials]:
    """
    Make sure the build has Android credentials, or decide the build service provisions them.

    Returns:
        The credentials to ship with the job, or None for service-managed credentials.
    """
    console = get_console()
    command_ctx = ctx.command_ctx

    if ctx.build_profile.credentials_source == "local":
        console.print_debug("Reading Android credentials from credentials.json")
        return await read_android_credentials_async(command_ctx.project_dir)

    if command_ctx.non_interactive:
        console.print_debug("Non-interactive mode, leaving Android credentials to the build service")
        return None

    credentials = await ask_for_user_provided_async(KEYSTORE_SCHEMA)
    if credentials is None:
        console.print_info("The build service will generate and manage the Keystore for you.")
    return credentials
