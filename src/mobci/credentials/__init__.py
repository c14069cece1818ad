from .prompt_for_credentials import (
    CredentialSchema,
    ProvideMethodQuestion,
    Question,
    QuestionType,
    ask_for_user_provided_async,
    get_credentials_from_user_async,
)

__all__ = [
    "CredentialSchema",
    "ProvideMethodQuestion",
    "Question",
    "QuestionType",
    "ask_for_user_provided_async",
    "get_credentials_from_user_async",
]
