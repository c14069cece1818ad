"""
Project-local credentials.json.

Example:
    {
      "android": {
        "keystore": {
          "keystorePath": "android/keystores/release.keystore",
          "keystorePassword": "...",
          "keyAlias": "...",
          "keyPassword": "..."
        }
      },
      "ios": {
        "provisioningProfilePath": "ios/certs/profile.mobileprovision",
        "distributionCertificate": {"path": "ios/certs/dist.p12", "password": "..."}
      },
      "experimental": {"npmToken": "..."}
    }

Paths are relative to the project directory; a leading "~" expands to the
user's home directory.
"""

from __future__ import annotations

import asyncio
import base64
import json
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mobci import settings
from mobci.errors import ConfigError
from mobci.model import AndroidCredentials, DistributionCertificate, IosCredentials, Keystore


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class KeystoreJson(_Model):
    keystore_path: str = Field(alias="keystorePath")
    keystore_password: str = Field(alias="keystorePassword")
    key_alias: str = Field(alias="keyAlias")
    key_password: str = Field(alias="keyPassword")


class AndroidCredentialsJson(_Model):
    keystore: KeystoreJson


class DistributionCertificateJson(_Model):
    path: str
    password: str


class IosCredentialsJson(_Model):
    provisioning_profile_path: str = Field(alias="provisioningProfilePath")
    distribution_certificate: DistributionCertificateJson = Field(alias="distributionCertificate")


class ExperimentalJson(_Model):
    npm_token: Optional[str] = Field(default=None, alias="npmToken")


class CredentialsJson(_Model):
    android: Optional[AndroidCredentialsJson] = None
    ios: Optional[IosCredentialsJson] = None
    experimental: Optional[ExperimentalJson] = None


def _credentials_json_path(project_dir: str | Path) -> Path:
    return Path(project_dir) / settings.CREDENTIALS_JSON_FILE


def _load(path: Path) -> CredentialsJson:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path.name} is not valid JSON: {e}") from e
    try:
        return CredentialsJson.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"{path.name} is invalid:\n{e}") from e


async def read_credentials_json_async(project_dir: str | Path) -> Optional[CredentialsJson]:
    path = _credentials_json_path(project_dir)
    if not await asyncio.to_thread(path.exists):
        return None
    return await asyncio.to_thread(_load, path)


async def _read_base64_async(project_dir: str | Path, relative: str) -> str:
    path = Path(project_dir) / Path(relative).expanduser()
    data = await asyncio.to_thread(path.read_bytes)
    return base64.b64encode(data).decode("ascii")


async def read_secret_envs_async(project_dir: str | Path) -> Optional[Dict[str, str]]:
    """Secret environment variables for the build, or None if there are none."""
    credentials_json = await read_credentials_json_async(project_dir)
    if credentials_json is None or credentials_json.experimental is None:
        return None
    if not credentials_json.experimental.npm_token:
        return None
    return {"NPM_TOKEN": credentials_json.experimental.npm_token}


async def read_android_credentials_async(project_dir: str | Path) -> AndroidCredentials:
    credentials_json = await read_credentials_json_async(project_dir)
    if credentials_json is None or credentials_json.android is None:
        raise ConfigError(
            f"Android credentials are missing from {settings.CREDENTIALS_JSON_FILE}"
        )
    keystore = credentials_json.android.keystore
    return AndroidCredentials(
        keystore=Keystore(
            keystore=await _read_base64_async(project_dir, keystore.keystore_path),
            keystore_password=keystore.keystore_password,
            key_alias=keystore.key_alias,
            key_password=keystore.key_password,
        )
    )


async def read_ios_credentials_async(project_dir: str | Path) -> IosCredentials:
    credentials_json = await read_credentials_json_async(project_dir)
    if credentials_json is None or credentials_json.ios is None:
        raise ConfigError(
            f"iOS credentials are missing from {settings.CREDENTIALS_JSON_FILE}"
        )
    ios = credentials_json.ios
    return IosCredentials(
        provisioning_profile=await _read_base64_async(project_dir, ios.provisioning_profile_path),
        distribution_certificate=DistributionCertificate(
            cert_p12=await _read_base64_async(project_dir, ios.distribution_certificate.path),
            cert_password=ios.distribution_certificate.password,
        ),
    )
