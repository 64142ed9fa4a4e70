"""
Semantic version helpers for pipeline manifests.
"""

from __future__ import annotations

import re
from typing import Tuple

SEMVER_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")


def is_semver(version: str) -> bool:
    return bool(SEMVER_PATTERN.match(version.strip()))


def parse_semver(version: str) -> Tuple[int, int, int]:
    match = SEMVER_PATTERN.match(version.strip())
    if not match:
        raise ValueError(f"Invalid semantic version: {version}")
    return int(match.group(1)), int(match.group(2)), int(match.group(3))


def bump_semver(version: str, part: str = "patch") -> str:
    major, minor, patch = parse_semver(version)
    if part == "major":
        return f"{major + 1}.0.0"
    if part == "minor":
        return f"{major}.{minor + 1}.0"
    if part == "patch":
        return f"{major}.{minor}.{patch + 1}"
    raise ValueError(f"Unknown version part '{part}'. Use major/minor/patch.")


def normalize_pipeline_name(name: str) -> str:
    sanitized = re.sub(r"[^a-zA-Z0-9_-]+", "_", name.strip()).strip("_")
    return sanitized or "workflow"
