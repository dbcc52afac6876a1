"""Plugin installer for git-backed skill packages.

This module handles plugin installation, updates, and removal with git
operations. Each operation is a single function working directly on the
plugins directory; install records in the settings file are maintained by
the caller (see ``agent_skills.cli.skill_commands``).

Failures are reported as messages on the result objects rather than raised,
because they are shown directly to an operator.
"""

import gc
import logging
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path

from git import Git, Repo

from agent_skills.config.constants import (
    DATA_DIR_NAME,
    DEFAULT_GIT_TIMEOUT,
    GIT_DIR_NAME,
    PLUGINS_DIR_NAME,
    SKILL_FILE_NAME,
)
from agent_skills.skills.errors import SkillError, SkillInstallError, SkillSecurityError
from agent_skills.skills.manifest import SKILL_NAME_RULE, is_valid_skill_name
from agent_skills.skills.parser import parse_skill_md
from agent_skills.skills.security import (
    extract_repo_name,
    is_commit_sha,
    is_safe_skill_name,
    is_valid_git_url,
    is_valid_ref,
    sanitize_skill_name,
)

logger = logging.getLogger(__name__)

__all__ = [
    "InstallResult",
    "UpdateResult",
    "extract_repo_name",
    "get_plugins_dir",
    "install_skill",
    "list_installed_plugins",
    "remove_skill",
    "update_skill",
]


@dataclass
class InstallResult:
    """Outcome of install_skill."""

    success: bool
    skill_name: str
    path: Path | None = None
    error: str | None = None


@dataclass
class UpdateResult:
    """Outcome of update_skill.

    ``message`` explains a successful no-op, such as a plugin pinned to a tag.
    """

    success: bool
    updated: bool = False
    error: str | None = None
    message: str | None = None


def get_plugins_dir(base_dir: Path | None = None) -> Path:
    """Get the plugins directory (default: ~/.agent/plugins)."""
    if base_dir is not None:
        return Path(base_dir)
    return Path.home() / DATA_DIR_NAME / PLUGINS_DIR_NAME


def _close_repo(repo: Repo) -> None:
    """Release git file handles (important on Windows)."""
    repo.close()
    if sys.platform == "win32":
        gc.collect()


def _git_error_message(error: Exception) -> str:
    stderr = getattr(error, "stderr", None)
    if isinstance(stderr, str) and stderr.strip():
        return stderr.strip()
    return str(error)


def _clone(url: str, target: Path, ref: str | None, timeout: int) -> None:
    """Shallow-clone url into target, checking out ref if given.

    Commit hashes cannot be used as a clone branch selector, so they are
    fetched shallowly after a default clone and checked out detached.
    """
    git = Git()

    if ref is not None and is_commit_sha(ref):
        git.clone(url, str(target), depth=1, kill_after_timeout=timeout)
        repo = Repo(target)
        try:
            repo.git.fetch("origin", ref, depth=1, kill_after_timeout=timeout)
            repo.git.checkout("FETCH_HEAD")
        finally:
            _close_repo(repo)
    elif ref is not None:
        git.clone(url, str(target), depth=1, branch=ref, kill_after_timeout=timeout)
    else:
        git.clone(url, str(target), depth=1, kill_after_timeout=timeout)


def _read_declared_name(clone_dir: Path) -> str:
    """Validate the cloned package and return its declared skill name.

    Raises:
        SkillInstallError: If SKILL.md is missing or invalid
    """
    skill_md = clone_dir / SKILL_FILE_NAME
    if not skill_md.is_file():
        raise SkillInstallError(
            f"Repository does not contain a '{SKILL_FILE_NAME}' file. Not a valid skill package."
        )

    try:
        content = skill_md.read_text(encoding="utf-8")
        # Directory name is provisional until the declared name is known
        parsed = parse_skill_md(content, clone_dir.name, skip_name_validation=True)
    except UnicodeDecodeError as e:
        raise SkillInstallError(f"Invalid '{SKILL_FILE_NAME}': file must be UTF-8 encoded") from e
    except SkillError as e:
        raise SkillInstallError(f"Invalid '{SKILL_FILE_NAME}': {e}") from e

    # The declared name becomes the permanent directory name
    declared_name = parsed.manifest.name
    if not is_valid_skill_name(declared_name) or not is_safe_skill_name(declared_name):
        raise SkillInstallError(
            f"Invalid skill name '{declared_name}' in '{SKILL_FILE_NAME}': {SKILL_NAME_RULE}"
        )
    return declared_name


def install_skill(
    url: str,
    ref: str | None = None,
    name: str | None = None,
    base_dir: Path | None = None,
    timeout: int = DEFAULT_GIT_TIMEOUT,
) -> InstallResult:
    """Install a skill package from a git repository.

    The repository is cloned into the plugins directory under a provisional
    name (``name`` or the last URL segment), validated, and renamed to the
    name declared in its SKILL.md. Any failure after the clone starts removes
    the clone again, so a failed install leaves nothing behind.

    Args:
        url: HTTPS git repository URL
        ref: Branch, tag or commit hash to check out (default branch if None)
        name: Provisional directory name (derived from the URL if None)
        base_dir: Plugins directory (default: ~/.agent/plugins)
        timeout: Seconds allowed for each git network operation

    Returns:
        InstallResult with the final skill name and path, or an error message

    Example:
        >>> result = install_skill("https://github.com/example/pdf-tools", ref="v1.0.0")
        >>> result.success, result.skill_name
        (True, 'pdf-tools')
    """
    working_name = name or extract_repo_name(url)

    if not is_valid_git_url(url):
        return InstallResult(
            success=False,
            skill_name=working_name,
            error=(
                "Invalid git URL format. Only HTTPS URLs are supported "
                "(e.g., https://github.com/user/repo)"
            ),
        )

    if ref is not None and not is_valid_ref(ref):
        return InstallResult(
            success=False,
            skill_name=working_name,
            error=(
                "Invalid ref format. Only alphanumeric characters, dots, dashes, "
                "underscores, and slashes are allowed."
            ),
        )

    try:
        sanitize_skill_name(working_name)
    except SkillSecurityError as e:
        return InstallResult(success=False, skill_name=working_name, error=str(e))

    plugins_dir = get_plugins_dir(base_dir)
    target = plugins_dir / working_name

    if target.exists():
        return InstallResult(
            success=False,
            skill_name=working_name,
            error=(
                f'Skill "{working_name}" already exists at {target}. '
                "Use update to refresh or remove first."
            ),
        )

    current = target
    try:
        plugins_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Cloning skill from {url}...")
        _clone(url, target, ref, timeout)

        skill_name = _read_declared_name(target)

        if skill_name != working_name:
            final_path = plugins_dir / skill_name
            if final_path.exists():
                raise SkillInstallError(
                    f'Skill "{skill_name}" already exists at {final_path}. '
                    "Choose a different name with '--name' option."
                )
            target.rename(final_path)
            current = final_path
            logger.debug(f"Renamed {target} to {final_path} to match declared name")

        logger.info(f"Successfully installed skill '{skill_name}' at {current}")
        return InstallResult(success=True, skill_name=skill_name, path=current)

    except Exception as e:
        if isinstance(e, SkillInstallError):
            message = str(e)
        else:
            message = f"Failed to install: {_git_error_message(e)}"
        logger.error(f"Failed to install skill from {url}: {message}")

        # Never leave a partial install on disk
        shutil.rmtree(current, ignore_errors=True)
        return InstallResult(success=False, skill_name=working_name, error=message)


def update_skill(
    name: str,
    base_dir: Path | None = None,
    timeout: int = DEFAULT_GIT_TIMEOUT,
) -> UpdateResult:
    """Update an installed plugin with a fast-forward pull.

    Plugins checked out at a tag or commit (detached HEAD) are left as they
    are; they have to be removed and reinstalled to move to another ref.

    Args:
        name: Installed skill name
        base_dir: Plugins directory (default: ~/.agent/plugins)
        timeout: Seconds allowed for the pull

    Returns:
        UpdateResult; ``updated`` is True only if HEAD moved
    """
    try:
        sanitize_skill_name(name)
    except SkillSecurityError as e:
        return UpdateResult(success=False, error=str(e))

    skill_dir = get_plugins_dir(base_dir) / name
    if not skill_dir.is_dir():
        return UpdateResult(success=False, error=f'Skill "{name}" not found at {skill_dir}')
    if not (skill_dir / GIT_DIR_NAME).exists():
        return UpdateResult(success=False, error=f'Skill "{name}" is not a git repository')

    repo = None
    try:
        repo = Repo(skill_dir)

        if repo.head.is_detached:
            logger.warning(f"Skill '{name}' is pinned to a fixed ref, skipping update")
            return UpdateResult(
                success=True,
                updated=False,
                message=(
                    f'Skill "{name}" is pinned to a specific ref. '
                    "Remove and reinstall to update."
                ),
            )

        old_sha = repo.git.rev_parse("HEAD")
        repo.git.pull("--ff-only", kill_after_timeout=timeout)
        new_sha = repo.git.rev_parse("HEAD")

        updated = old_sha != new_sha
        if updated:
            logger.info(f"Updated skill '{name}' from {old_sha[:8]} to {new_sha[:8]}")
        else:
            logger.info(f"Skill '{name}' is already up to date")
        return UpdateResult(success=True, updated=updated)

    except Exception as e:
        message = f"Failed to update: {_git_error_message(e)}"
        logger.error(f"Failed to update skill '{name}': {message}")
        return UpdateResult(success=False, error=message)

    finally:
        if repo is not None:
            _close_repo(repo)


def remove_skill(name: str, base_dir: Path | None = None) -> bool:
    """Remove an installed plugin directory.

    Args:
        name: Installed skill name
        base_dir: Plugins directory (default: ~/.agent/plugins)

    Returns:
        True if the directory was removed, False if invalid, absent or not removable
    """
    if not is_safe_skill_name(name):
        logger.warning(f"Refusing to remove skill with unsafe name: {name!r}")
        return False

    skill_dir = get_plugins_dir(base_dir) / name
    if not skill_dir.exists():
        return False

    try:
        shutil.rmtree(skill_dir)
    except OSError as e:
        logger.error(f"Failed to remove skill '{name}': {e}")
        return False

    logger.info(f"Removed skill directory: {skill_dir}")
    return True


def list_installed_plugins(base_dir: Path | None = None) -> list[str]:
    """List installed plugins, sorted by name.

    A directory counts as an installed plugin only if it holds both a
    ``.git`` directory and a SKILL.md file.
    """
    plugins_dir = get_plugins_dir(base_dir)
    if not plugins_dir.is_dir():
        return []

    installed = []
    for entry in plugins_dir.iterdir():
        if not entry.is_dir():
            continue
        if (entry / GIT_DIR_NAME).exists() and (entry / SKILL_FILE_NAME).is_file():
            installed.append(entry.name)
    return sorted(installed)
