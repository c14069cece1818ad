"""Loading of app.json (app config) and eas.json (build profiles)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from . import settings
from .errors import ConfigError
from .model import Platform


class _Profile(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    credentials_source: Literal["local", "remote"] = Field(default="remote", alias="credentialsSource")


class AndroidGenericBuildProfile(_Profile):
    workflow: Literal["generic"]
    gradle_command: Optional[str] = Field(default=None, alias="gradleCommand")
    artifact_path: Optional[str] = Field(default=None, alias="artifactPath")


class AndroidManagedBuildProfile(_Profile):
    workflow: Literal["managed"]


class IosGenericBuildProfile(_Profile):
    workflow: Literal["generic"]
    scheme: Optional[str] = None
    artifact_path: Optional[str] = Field(default=None, alias="artifactPath")


class IosManagedBuildProfile(_Profile):
    workflow: Literal["managed"]


AndroidBuildProfile = Annotated[
    Union[AndroidGenericBuildProfile, AndroidManagedBuildProfile],
    Field(discriminator="workflow"),
]
IosBuildProfile = Annotated[
    Union[IosGenericBuildProfile, IosManagedBuildProfile],
    Field(discriminator="workflow"),
]
BuildProfile = Union[
    AndroidGenericBuildProfile,
    AndroidManagedBuildProfile,
    IosGenericBuildProfile,
    IosManagedBuildProfile,
]


class BuildsConfig(BaseModel):
    android: Dict[str, AndroidBuildProfile] = Field(default_factory=dict)
    ios: Dict[str, IosBuildProfile] = Field(default_factory=dict)


class EasConfig(BaseModel):
    builds: BuildsConfig = Field(default_factory=BuildsConfig)

    def get_build_profile(self, platform: Platform, profile_name: str) -> BuildProfile:
        profiles = self.builds.android if platform == Platform.ANDROID else self.builds.ios
        if profile_name not in profiles:
            known = ", ".join(sorted(profiles)) or "none"
            raise ConfigError(
                f"There is no {platform.value} build profile named {profile_name!r} in "
                f"{settings.EAS_CONFIG_FILE} (known profiles: {known})"
            )
        return profiles[profile_name]


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise ConfigError(f"Could not find {path.name} in {path.parent}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path.name} is not valid JSON: {e}") from e


def load_eas_config(project_dir: str | Path) -> EasConfig:
    path = Path(project_dir) / settings.EAS_CONFIG_FILE
    data = _read_json(path)
    try:
        return EasConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"{path.name} is invalid:\n{e}") from e


def load_app_config(project_dir: str | Path) -> Dict[str, Any]:
    """
    Read the app config ("exp") from app.json.

    The config lives under the "expo" key when present, otherwise the whole
    document is the config.
    """
    data = _read_json(Path(project_dir) / settings.APP_CONFIG_FILE)
    if not isinstance(data, dict):
        raise ConfigError(f"{settings.APP_CONFIG_FILE} must contain a JSON object")
    exp = data.get("expo", data)
    if not isinstance(exp, dict):
        raise ConfigError(f'"expo" in {settings.APP_CONFIG_FILE} must be an object')
    return exp


def get_project_id(exp: Dict[str, Any]) -> Optional[str]:
    return ((exp.get("extra") or {}).get("eas") or {}).get("projectId")
