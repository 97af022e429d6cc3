"""Build metadata reported by the health endpoint.

APP_VERSION and GIT_COMMIT come from environment variables set at deploy time.
Outside a deploy, GIT_COMMIT is read from the working tree and falls back to "dev".
"""

import os
import subprocess

UNKNOWN_BUILD = "dev"


def _git_short_sha() -> str:
    try:
        return subprocess.check_output(
            ["git", "rev-parse", "--short", "HEAD"],  # noqa: S607
            text=True,
            stderr=subprocess.DEVNULL,
        ).strip()
    except (FileNotFoundError, subprocess.CalledProcessError):
        return UNKNOWN_BUILD


APP_VERSION: str = os.environ.get("APP_VERSION", UNKNOWN_BUILD)
GIT_COMMIT: str = os.environ.get("GIT_COMMIT") or _git_short_sha() or UNKNOWN_BUILD


def build_summary() -> dict[str, str]:
    return {"version": APP_VERSION, "commit": GIT_COMMIT}
