"""Unit tests for skill security helpers."""

import os

import pytest

from agent_skills.skills.errors import SkillErrorType, SkillSecurityError
from agent_skills.skills.security import (
    escapes_directory,
    escapes_resolved_directory,
    extract_repo_name,
    is_commit_sha,
    is_safe_skill_name,
    is_valid_git_url,
    is_valid_ref,
    sanitize_skill_name,
)


@pytest.mark.unit
@pytest.mark.skills
class TestSanitizeSkillName:
    """Test directory name sanitization."""

    @pytest.mark.parametrize("name", ["pdf-tools", "My_Skill", "skill123", "a", "pdf.tools"])
    def test_valid_names(self, name):
        """Should return valid names unchanged."""
        assert sanitize_skill_name(name) == name

    @pytest.mark.parametrize("name", ["", ".", "..", "~", "__pycache__"])
    def test_reserved_names(self, name):
        """Should reject reserved names."""
        with pytest.raises(SkillSecurityError, match="Reserved skill name"):
            sanitize_skill_name(name)

    @pytest.mark.parametrize("name", ["../etc/passwd", "a/b", "a\\b", "x..y"])
    def test_path_traversal(self, name):
        """Should reject traversal patterns."""
        with pytest.raises(SkillSecurityError, match="path traversal detected") as exc_info:
            sanitize_skill_name(name)
        assert exc_info.value.error_type == SkillErrorType.SECURITY_ERROR

    def test_spaces(self):
        """Should reject spaces with a clear message."""
        with pytest.raises(SkillSecurityError, match="spaces not allowed"):
            sanitize_skill_name("my skill")

    @pytest.mark.parametrize("name", ["-skill", "_skill", ".hidden", "skill!", "a" * 65])
    def test_pattern_violations(self, name):
        """Should reject names outside the directory-safe pattern."""
        with pytest.raises(SkillSecurityError):
            sanitize_skill_name(name)

    def test_is_safe_skill_name(self):
        """Should be the non-raising form."""
        assert is_safe_skill_name("pdf-tools")
        assert not is_safe_skill_name("../x")


@pytest.mark.unit
@pytest.mark.skills
class TestGitInputValidation:
    """Test git URL and ref validation."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://github.com/user/repo",
            "https://github.com/user/repo.git",
            "https://gitlab.example.com:8443/group/sub/repo.git",
            "https://github.com/user/repo/",
        ],
    )
    def test_valid_urls(self, url):
        """Should accept HTTPS remotes."""
        assert is_valid_git_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "http://github.com/user/repo",
            "git@github.com:user/repo.git",
            "ssh://git@github.com/user/repo",
            "file:///tmp/repo",
            "https://github.com",
            "https://github.com/user/repo --upload-pack=evil",
            "--upload-pack=evil",
        ],
    )
    def test_invalid_urls(self, url):
        """Should reject non-HTTPS or malformed URLs."""
        assert not is_valid_git_url(url)

    @pytest.mark.parametrize("ref", ["main", "v1.0.0", "feature/x-y", "release_2", "abc1234"])
    def test_valid_refs(self, ref):
        """Should accept branch, tag and hash refs."""
        assert is_valid_ref(ref)

    @pytest.mark.parametrize("ref", ["-b", "--upload-pack=x", "a b", "a;b", "$(x)", "a..b", ""])
    def test_invalid_refs(self, ref):
        """Should reject refs that could inject arguments."""
        assert not is_valid_ref(ref)

    @pytest.mark.parametrize(
        "ref,expected",
        [
            ("abc1234", True),
            ("a" * 40, True),
            ("ABCDEF0", True),
            ("abc123", False),
            ("a" * 41, False),
            ("v1.0.0", False),
            ("main", False),
        ],
    )
    def test_is_commit_sha(self, ref, expected):
        """Should classify 7-40 hex chars as a hash."""
        assert is_commit_sha(ref) is expected

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://github.com/user/pdf-tools.git", "pdf-tools"),
            ("https://github.com/user/pdf-tools", "pdf-tools"),
            ("https://github.com/user/pdf-tools/", "pdf-tools"),
            ("https://host/a/b/c", "c"),
            ("", "unknown-skill"),
        ],
    )
    def test_extract_repo_name(self, url, expected):
        """Should use the last URL segment without .git."""
        assert extract_repo_name(url) == expected


@pytest.mark.unit
@pytest.mark.skills
class TestPathContainment:
    """Test the two path escape checks."""

    @pytest.mark.parametrize(
        "resource", ["scripts/run.sh", "references/a/b.md", "./assets/x.png", "scripts/../SKILL.md"]
    )
    def test_lexical_inside(self, tmp_path, resource):
        """Should accept paths that stay inside the directory."""
        assert not escapes_directory(tmp_path, resource)

    @pytest.mark.parametrize(
        "resource", ["../secret", "../../etc/passwd", "scripts/../../x", "/etc/passwd"]
    )
    def test_lexical_escape(self, tmp_path, resource):
        """Should reject parent traversal and absolute paths."""
        assert escapes_directory(tmp_path / "skill", resource)

    def test_lexical_sibling_prefix(self, tmp_path):
        """Should not be fooled by a sibling sharing the directory prefix."""
        assert escapes_directory(tmp_path / "skill", "../skill-evil/x")

    def test_resolved_inside(self, tmp_path):
        """Should accept a regular file inside the directory."""
        (tmp_path / "file.txt").write_text("x")
        assert not escapes_resolved_directory(tmp_path, tmp_path / "file.txt")

    @pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
    def test_resolved_symlink_escape(self, tmp_path):
        """Should reject a symlink pointing outside the directory."""
        skill_dir = tmp_path / "skill"
        skill_dir.mkdir()
        outside = tmp_path / "outside.txt"
        outside.write_text("secret")
        (skill_dir / "link.txt").symlink_to(outside)

        assert not escapes_directory(skill_dir, "link.txt")
        assert escapes_resolved_directory(skill_dir, skill_dir / "link.txt")

    @pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
    def test_resolved_symlink_inside(self, tmp_path):
        """Should accept a symlink that stays inside the directory."""
        (tmp_path / "real.txt").write_text("x")
        (tmp_path / "link.txt").symlink_to(tmp_path / "real.txt")

        assert not escapes_resolved_directory(tmp_path, tmp_path / "link.txt")

    def test_resolved_missing_path(self, tmp_path):
        """Should raise OSError for a missing candidate."""
        with pytest.raises(OSError):
            escapes_resolved_directory(tmp_path, tmp_path / "missing")
