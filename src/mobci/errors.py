from __future__ import annotations


class MobciError(Exception):
    """Base class for errors mobci reports to the user."""


class ConfigError(MobciError):
    """Raised when app.json / eas.json / credentials.json is missing or malformed."""


class UnknownWorkflowError(MobciError):
    """A build profile carries a workflow no assembler knows. Internal error."""

    def __init__(self, workflow: object):
        self.workflow = workflow
        super().__init__(f"Unknown workflow {workflow!r}. Shouldn't happen")


class NoSchemesFoundError(MobciError):
    """The native iOS project declares no shared schemes."""

    def __init__(self, project_dir: str):
        self.project_dir = project_dir
        super().__init__(f"No shared Xcode schemes found in {project_dir}/ios")


class JobValidationError(MobciError):
    """A job draft failed sanitization."""

    def __init__(self, message: str, details: list[str] | None = None):
        self.details = details or []
        super().__init__(message)
