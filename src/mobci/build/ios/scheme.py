from __future__ import annotations

from pathlib import Path
from typing import List

# Schemes containing this marker target a platform variant (Apple TV) and are
# skipped when a scheme has to be picked without asking.
EXCLUDED_SCHEME_MARKER = "tvOS"


def get_schemes_from_xcodeproj(project_dir: str | Path) -> List[str]:
    """
    Names of the shared schemes declared by the Xcode project(s) under ios/.

    Only shared schemes (xcshareddata) are visible to a remote build.
    """
    ios_dir = Path(project_dir) / "ios"
    return [
        scheme_file.stem
        for scheme_file in ios_dir.glob("*.xcodeproj/xcshareddata/xcschemes/*.xcscheme")
        if scheme_file.is_file()
    ]
