# SPDX-FileCopyrightText: 2026 Jiri Vyskocil
# SPDX-License-Identifier: Apache-2.0

"""Version information for lbq, used by ``lbq --version``."""

import json
from importlib import metadata
from typing import Any


def get_version_info() -> tuple[str, str | None]:
    """Get version and VCS revision information.

    The version comes from the installed package (``lbq.__version__``).  When
    lbq was installed from a VCS URL (``pip install git+https://...``), pip
    records PEP 610 metadata in ``direct_url.json``; its requested revision
    (or commit id) is returned as the second element.  For releases and
    local installs the revision is None.
    """
    try:
        from lbq import __version__

        version = __version__
    except (ImportError, AttributeError):
        version = "unknown"

    return version, _get_pep610_revision()


def _get_pep610_revision(dist_name: str = "lbq") -> str | None:
    """Return VCS revision from PEP 610 metadata, if available."""
    try:
        dist = metadata.distribution(dist_name)
        direct_url = dist.read_text("direct_url.json")
    except (
        metadata.PackageNotFoundError,
        FileNotFoundError,
        PermissionError,
        UnicodeDecodeError,
        OSError,
    ):
        return None

    if not direct_url:
        return None

    try:
        data = json.loads(direct_url)
    except json.JSONDecodeError:
        return None

    vcs_info = data.get("vcs_info")
    if not isinstance(vcs_info, dict):
        return None

    def validate_and_strip(value: Any) -> str | None:
        """Validate that value is a non-empty string after stripping whitespace."""
        if isinstance(value, str):
            stripped = value.strip()
            if stripped:
                return stripped
        return None

    # Try requested_revision first, then commit_id
    if result := validate_and_strip(vcs_info.get("requested_revision")):
        return result

    if result := validate_and_strip(vcs_info.get("commit_id")):
        return result

    return None


def format_version_string(version: str, revision: str | None) -> str:
    """Format version and revision into a display string.

    Returns:
        Formatted string like "0.3.1" or "0.3.1 [main]", followed by the
        license line.
    """
    base_version = version
    if revision:
        base_version = f"{version} [{revision}]"
    return f"{base_version}\nLicense: Apache-2.0"
