"""Agent Skills - discovery, progressive disclosure and git installs for skill packages."""

from importlib.metadata import PackageNotFoundError, version

# Read version from package metadata (pyproject.toml)
try:
    __version__ = version("agent-skills")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "0.0.0.dev"

__all__ = ["__version__"]
