# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union


class Platform(str, Enum):
    ANDROID = "android"
    IOS = "ios"


class Workflow(str, Enum):
    """
    Build strategy variant.

    GENERIC operates on a pre-existing native project, MANAGED lets the
    build service generate and control the native project.
    """
    GENERIC = "generic"
    MANAGED = "managed"


@dataclass(frozen=True)
class Keystore:
    """Android upload keystore. `keystore` holds the base64-encoded file."""
    keystore: str
    keystore_password: str
    key_alias: str
    key_password: str


@dataclass(frozen=True)
class AndroidCredentials:
    keystore: Keystore


@dataclass(frozen=True)
class DistributionCertificate:
    cert_p12: str  # base64
    cert_password: str


@dataclass(frozen=True)
class IosCredentials:
    provisioning_profile: str  # base64
    distribution_certificate: DistributionCertificate


Credentials = Union[AndroidCredentials, IosCredentials]


@dataclass
class JobData:
    """Facts gathered for one build attempt, consumed once by job preparation."""
    archive_url: str
    credentials: Optional[Credentials] = None
    # platform-specific facts resolved before the build, e.g. the iOS scheme
    project_configuration: Dict[str, Any] = field(default_factory=dict)
