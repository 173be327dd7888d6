"""
Rename detection between the two most recent commits of a local checkout.

Runs `git diff --name-status HEAD~1 HEAD`. A rename line looks like
"R100<TAB>old/path<TAB>new/path"; the status letter may carry a similarity score.
"""

from __future__ import annotations

import logging
import subprocess

logger = logging.getLogger(__name__)

RENAME_STATUS = "R"


def parse_renamed_files(output: str) -> list[str]:
    """Return the new paths of rename lines (status R, exactly three tab-separated fields)."""
    renamed: list[str] = []
    for line in output.splitlines():
        if not line:
            continue
        parts = line.split("\t")
        if len(parts) == 3 and parts[0][:1] == RENAME_STATUS:
            renamed.append(parts[2])
    return renamed


def list_renamed_files(repository_path: str) -> list[str]:
    """
    Return files renamed in the most recent commit of the repository at repository_path.

    Raises:
        ValueError: If repository_path is empty.
        subprocess.CalledProcessError: If git exits non-zero.
    """
    if not repository_path:
        raise ValueError("Repository path cannot be empty")
    result = subprocess.run(
        ["git", "diff", "--name-status", "HEAD~1", "HEAD"],
        cwd=repository_path,
        check=True,
        capture_output=True,
        text=True,
    )
    renamed = parse_renamed_files(result.stdout)
    logger.debug("git rename check: %s renamed file(s) in %s", len(renamed), repository_path)
    return renamed


def is_file_renamed(repository_path: str, file_path: str) -> bool:
    """True if file_path is the new name of a file renamed in the most recent commit."""
    return file_path in list_renamed_files(repository_path)
