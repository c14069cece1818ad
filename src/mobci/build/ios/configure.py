"""Keep the native iOS project in sync with the app config."""

from __future__ import annotations

import asyncio
import plistlib
from pathlib import Path
from typing import Any, Dict, List, Optional

from mobci.ui.console import get_console

_SKIPPED_DIRS = {"Pods", "build"}


def find_info_plist(project_dir: str | Path) -> Optional[Path]:
    """
    Locate the app target's Info.plist (ios/<Target>/Info.plist).

    Test and extension targets are skipped. Returns None if nothing matches.
    """
    ios_dir = Path(project_dir) / "ios"
    candidates = sorted(
        p for p in ios_dir.glob("*/Info.plist")
        if p.parent.name not in _SKIPPED_DIRS and not p.parent.name.endswith("Tests")
    )
    return candidates[0] if candidates else None


def _desired_values(exp: Dict[str, Any]) -> Dict[str, str]:
    ios = exp.get("ios") or {}
    desired: Dict[str, str] = {}
    if exp.get("version"):
        desired["CFBundleShortVersionString"] = str(exp["version"])
    if ios.get("buildNumber"):
        desired["CFBundleVersion"] = str(ios["buildNumber"])
    if ios.get("bundleIdentifier"):
        desired["CFBundleIdentifier"] = str(ios["bundleIdentifier"])
    return desired


def sync_project_configuration(project_dir: str | Path, exp: Dict[str, Any]) -> List[str]:
    """
    Write version, build number and bundle identifier from the app config into Info.plist.

    Returns:
        Keys that were changed
    """
    desired = _desired_values(exp)
    if not desired:
        return []

    plist_path = find_info_plist(project_dir)
    if plist_path is None:
        return []

    with plist_path.open("rb") as f:
        info = plistlib.load(f)

    changed = [key for key, value in desired.items() if info.get(key) != value]
    if not changed:
        return []

    info.update({key: desired[key] for key in changed})
    with plist_path.open("wb") as f:
        plistlib.dump(info, f)
    return changed


async def sync_project_configuration_async(project_dir: str | Path, exp: Dict[str, Any]) -> None:
    changed = await asyncio.to_thread(sync_project_configuration, project_dir, exp)
    if changed:
        get_console().print_info(f"Updated Info.plist: {', '.join(changed)}")
