# job.py
"""
Build job schema.

Job preparation happens in two phases. Assemblers first fill a draft
(one dataclass per platform/workflow), then `sanitize_job` validates the
draft against the matching pydantic model. Only the sanitized model is a
submittable Job.
"""
from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Literal, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import JobValidationError
from .model import Platform, Workflow

# -------------------- Schemas --------------------


class _Schema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)


class AndroidKeystore(_Schema):
    data_base64: str = Field(alias="dataBase64", min_length=1)
    keystore_password: str = Field(alias="keystorePassword")
    key_alias: str = Field(alias="keyAlias")
    key_password: Optional[str] = Field(default=None, alias="keyPassword")


class AndroidBuildCredentials(_Schema):
    keystore: AndroidKeystore


class IosDistributionCertificate(_Schema):
    data_base64: str = Field(alias="dataBase64", min_length=1)
    password: str


class IosBuildCredentials(_Schema):
    provisioning_profile_base64: str = Field(alias="provisioningProfileBase64", min_length=1)
    distribution_certificate: IosDistributionCertificate = Field(alias="distributionCertificate")


class AndroidSecrets(_Schema):
    secret_envs: Optional[Dict[str, str]] = Field(default=None, alias="secretEnvs")
    build_credentials: Optional[AndroidBuildCredentials] = Field(default=None, alias="buildCredentials")


class IosSecrets(_Schema):
    secret_envs: Optional[Dict[str, str]] = Field(default=None, alias="secretEnvs")
    build_credentials: Optional[IosBuildCredentials] = Field(default=None, alias="buildCredentials")


class _JobBase(_Schema):
    project_url: str = Field(alias="projectUrl", min_length=1)
    project_root_directory: str = Field(alias="projectRootDirectory")

    @field_validator("project_root_directory")
    @classmethod
    def _normalize_project_root(cls, value: str) -> str:
        value = value.replace("\\", "/")
        if value.startswith("/"):
            raise ValueError("must be relative to the repository root")
        normalized = posixpath.normpath(value or ".")
        if normalized == ".." or normalized.startswith("../"):
            raise ValueError("must be inside the repository")
        return normalized

    def to_payload(self) -> Dict[str, Any]:
        """Wire representation (camelCase keys, unset optionals dropped)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class AndroidGenericJob(_JobBase):
    type: Literal["generic"]
    platform: Literal["android"]
    secrets: AndroidSecrets = Field(default_factory=AndroidSecrets)
    gradle_command: Optional[str] = Field(default=None, alias="gradleCommand")
    artifact_path: Optional[str] = Field(default=None, alias="artifactPath")


class AndroidManagedJob(_JobBase):
    type: Literal["managed"]
    platform: Literal["android"]
    secrets: AndroidSecrets = Field(default_factory=AndroidSecrets)


class IosGenericJob(_JobBase):
    type: Literal["generic"]
    platform: Literal["ios"]
    secrets: IosSecrets = Field(default_factory=IosSecrets)
    scheme: str = Field(min_length=1)
    artifact_path: Optional[str] = Field(default=None, alias="artifactPath")


class IosManagedJob(_JobBase):
    type: Literal["managed"]
    platform: Literal["ios"]
    secrets: IosSecrets = Field(default_factory=IosSecrets)


Job = Union[AndroidGenericJob, AndroidManagedJob, IosGenericJob, IosManagedJob]

# -------------------- Drafts --------------------


@dataclass(frozen=True)
class CommonJobProperties:
    """Properties shared by every workflow of a platform."""
    platform: Platform
    project_url: str
    secrets: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "platform": self.platform.value,
            "project_url": self.project_url,
            "secrets": dict(self.secrets),
        }


@dataclass(frozen=True)
class AndroidGenericJobDraft:
    job_model: ClassVar[Type[_JobBase]] = AndroidGenericJob

    common: CommonJobProperties
    project_root_directory: str
    gradle_command: Optional[str] = None
    artifact_path: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            **self.common.to_payload(),
            "type": Workflow.GENERIC.value,
            "project_root_directory": self.project_root_directory,
            "gradle_command": self.gradle_command,
            "artifact_path": self.artifact_path,
        }


@dataclass(frozen=True)
class AndroidManagedJobDraft:
    job_model: ClassVar[Type[_JobBase]] = AndroidManagedJob

    common: CommonJobProperties
    project_root_directory: str

    def to_payload(self) -> Dict[str, Any]:
        return {
            **self.common.to_payload(),
            "type": Workflow.MANAGED.value,
            "project_root_directory": self.project_root_directory,
        }


@dataclass(frozen=True)
class IosGenericJobDraft:
    job_model: ClassVar[Type[_JobBase]] = IosGenericJob

    common: CommonJobProperties
    project_root_directory: str
    scheme: Optional[str] = None
    artifact_path: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            **self.common.to_payload(),
            "type": Workflow.GENERIC.value,
            "project_root_directory": self.project_root_directory,
            "scheme": self.scheme,
            "artifact_path": self.artifact_path,
        }


@dataclass(frozen=True)
class IosManagedJobDraft:
    job_model: ClassVar[Type[_JobBase]] = IosManagedJob

    common: CommonJobProperties
    project_root_directory: str

    def to_payload(self) -> Dict[str, Any]:
        return {
            **self.common.to_payload(),
            "type": Workflow.MANAGED.value,
            "project_root_directory": self.project_root_directory,
        }


JobDraft = Union[AndroidGenericJobDraft, AndroidManagedJobDraft, IosGenericJobDraft, IosManagedJobDraft]


def sanitize_job(draft: JobDraft) -> Job:
    """
    Validate a draft and turn it into a submittable Job.

    Raises:
        JobValidationError: if the draft is structurally invalid
    """
    try:
        return draft.job_model.model_validate(draft.to_payload())
    except ValidationError as e:
        details = [
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise JobValidationError(
            f"Invalid {draft.common.platform.value} job",
            details=details,
        ) from e
