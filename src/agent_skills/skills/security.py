"""Security validation for skill subsystem.

This module provides security functions for skill name sanitization,
git input validation, and resource path containment.
"""

import os
import re
from pathlib import Path

from agent_skills.skills.errors import SkillSecurityError

# Only HTTPS remotes are accepted for plugin installs
GIT_URL_PATTERN = re.compile(r"^https://[\w.-]+(:\d+)?(/[\w.~%+@-]+)+/?$")

# Branch, tag or commit: alphanumeric, dots, dashes, underscores, slashes
GIT_REF_PATTERN = re.compile(r"^[\w./-]+$")

# Partial or full commit hash
COMMIT_SHA_PATTERN = re.compile(r"^[0-9a-fA-F]{7,40}$")

# Directory-safe name: starts alphanumeric, then alphanumeric/dot/hyphen/underscore
DIRECTORY_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9._-]{0,63}$")


def sanitize_skill_name(name: str) -> str:
    """Validate a skill directory name for security.

    Ensures names are safe to join onto the plugins directory and prevents
    directory traversal. This is looser than the manifest naming rules
    because repository names (e.g. "My_Skill", "pdf.tools") are used as provisional
    directory names before the manifest is read.

    Args:
        name: Skill name to validate

    Returns:
        The validated name (unchanged if valid)

    Raises:
        SkillSecurityError: If name contains invalid characters or patterns

    Examples:
        >>> sanitize_skill_name("pdf-tools")
        'pdf-tools'
        >>> sanitize_skill_name("../etc/passwd")
        Traceback (most recent call last):
        ...
        SkillSecurityError: Invalid skill name: '../etc/passwd' (path traversal detected)
    """
    # Reserved names
    reserved = {".", "..", "~", "__pycache__", ""}
    if name in reserved:
        raise SkillSecurityError(f"Reserved skill name: '{name}'")

    # Reject path traversal patterns (check before regex)
    if ".." in name or "/" in name or "\\" in name:
        raise SkillSecurityError(f"Invalid skill name: '{name}' (path traversal detected)")

    # Reject spaces (check before regex for clearer error)
    if " " in name:
        raise SkillSecurityError(f"Invalid skill name: '{name}' (spaces not allowed)")

    if not DIRECTORY_NAME_PATTERN.match(name):
        raise SkillSecurityError(
            f"Invalid skill name: '{name}' "
            "(must start with alphanumeric and contain only alphanumeric, dots, hyphens, "
            "and underscores, max 64 chars)"
        )

    return name


def is_safe_skill_name(name: str) -> bool:
    """Non-raising form of sanitize_skill_name."""
    try:
        sanitize_skill_name(name)
    except SkillSecurityError:
        return False
    return True


def is_valid_git_url(url: str) -> bool:
    """Check that a git URL is an HTTPS remote.

    Examples:
        >>> is_valid_git_url("https://github.com/user/repo.git")
        True
        >>> is_valid_git_url("git@github.com:user/repo.git")
        False
    """
    return GIT_URL_PATTERN.match(url) is not None


def is_valid_ref(ref: str) -> bool:
    """Check that a git ref cannot be mistaken for a command-line option."""
    if ref.startswith("-") or ".." in ref:
        return False
    return GIT_REF_PATTERN.match(ref) is not None


def is_commit_sha(ref: str) -> bool:
    """Check whether a ref looks like a (partial) commit hash.

    Hex-only branch names such as "deadbeef" are also classified as hashes;
    the follow-up fetch fails cleanly if no such commit exists.
    """
    return COMMIT_SHA_PATTERN.match(ref) is not None


def _relative_path_escapes(relative: str) -> bool:
    """Check a relative path for parent traversal or absolute form."""
    if relative == os.pardir or relative.startswith(os.pardir + os.sep):
        return True
    return os.path.isabs(relative)


def escapes_directory(directory: Path, resource_path: str) -> bool:
    """Lexical containment check (no filesystem access).

    Joins ``resource_path`` onto ``directory`` and checks whether the
    relative path back from ``directory`` leaves it. Catches "../x" and
    absolute paths before any I/O. Symlinks are not seen here.

    Args:
        directory: Skill directory
        resource_path: Requested path relative to the skill directory

    Returns:
        True if the path escapes the directory
    """
    base = os.path.normpath(str(directory))
    candidate = os.path.normpath(os.path.join(base, resource_path))
    try:
        relative = os.path.relpath(candidate, base)
    except ValueError:
        # Different drives on Windows
        return True
    return _relative_path_escapes(relative)


def escapes_resolved_directory(directory: Path, candidate: Path) -> bool:
    """Symlink-resolved containment check.

    Resolves both paths through any symlinks and checks whether the real
    candidate lies outside the real directory. Catches a resource that is
    itself a symlink pointing elsewhere.

    Args:
        directory: Skill directory
        candidate: Path inside the skill directory (must exist)

    Returns:
        True if the resolved path escapes the resolved directory

    Raises:
        OSError: If either path does not exist
    """
    resolved_directory = Path(directory).resolve(strict=True)
    resolved_candidate = Path(candidate).resolve(strict=True)
    try:
        relative = os.path.relpath(resolved_candidate, resolved_directory)
    except ValueError:
        return True
    return _relative_path_escapes(relative)


def extract_repo_name(url: str) -> str:
    """Extract the repository name from a git URL.

    Examples:
        >>> extract_repo_name("https://github.com/user/pdf-tools.git")
        'pdf-tools'
        >>> extract_repo_name("https://github.com/user/pdf-tools/")
        'pdf-tools'
    """
    match = re.search(r"/([^/]+?)(?:\.git)?$", url.rstrip("/"))
    return match.group(1) if match else "unknown-skill"
