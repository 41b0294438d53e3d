# config/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for application configuration.

This module defines the structured settings for the smart installer,
including defaults, type annotations, and descriptions.
It utilizes Pydantic for data validation and settings management.
"""

from typing import Dict, List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Default Static Values (can be overridden by config file/env/cli) ---
BRANCH_DEFAULT: str = "main"
GH_COMMAND_DEFAULT: str = "gh"
GH_SCOPES_DEFAULT: List[str] = ["repo", "read:org"]
MAX_AUTH_ATTEMPTS_DEFAULT: int = 3
PYTHON_COMMAND_DEFAULT: str = "python3"
REQUIREMENTS_FILE_DEFAULT: str = "requirements.txt"
VENV_DIR_NAME_DEFAULT: str = ".temp_venv"
ENTRY_POINT_CANDIDATES_DEFAULT: List[str] = [
    "main.py",
    "install.py",
    "setup.py",
]
LOG_PREFIX_DEFAULT: str = ""

GH_KEYRING_URL_DEFAULT: str = (
    "https://cli.github.com/packages/githubcli-archive-keyring.gpg"
)
GH_KEYRING_PATH_DEFAULT: str = (
    "/usr/share/keyrings/githubcli-archive-keyring.gpg"
)
GH_APT_SOURCES_PATH_DEFAULT: str = "/etc/apt/sources.list.d/github-cli.list"
GH_APT_REPO_URL_DEFAULT: str = "https://cli.github.com/packages"

SYMBOLS_DEFAULT: Dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "package": "📦",
    "rocket": "🚀",
    "lock": "🔐",
    "bulb": "💡",
    "tools": "🔧",
    "critical": "🔥",
    "debug": "🐛",
}


class GitHubCliAptSettings(BaseSettings):
    """Locations used when registering the GitHub CLI apt repository."""

    model_config = SettingsConfigDict(env_prefix="GH_APT_", extra="ignore")

    keyring_url: str = Field(
        default=GH_KEYRING_URL_DEFAULT,
        description="URL of the GitHub CLI archive keyring.",
    )
    keyring_path: str = Field(
        default=GH_KEYRING_PATH_DEFAULT,
        description="Where the keyring is installed.",
    )
    sources_path: str = Field(
        default=GH_APT_SOURCES_PATH_DEFAULT,
        description="apt sources list file for the GitHub CLI repository.",
    )
    repo_url: str = Field(
        default=GH_APT_REPO_URL_DEFAULT,
        description="Base URL of the GitHub CLI apt repository.",
    )


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    branch: str = Field(
        default=BRANCH_DEFAULT,
        validation_alias=AliasChoices("branch", "BRANCH"),
        description="Branch of the target repository to clone.",
    )
    gh_command: str = Field(
        default=GH_COMMAND_DEFAULT,
        description="Name or path of the GitHub CLI executable.",
    )
    gh_scopes: List[str] = Field(
        default_factory=lambda: list(GH_SCOPES_DEFAULT),
        description="OAuth scopes requested during 'gh auth login'.",
    )
    max_auth_attempts: int = Field(
        default=MAX_AUTH_ATTEMPTS_DEFAULT,
        ge=1,
        description="Number of interactive login attempts before giving up.",
    )
    python_command: str = Field(
        default=PYTHON_COMMAND_DEFAULT,
        description="Interpreter used for pip, venv and the launched script.",
    )
    requirements_file: str = Field(
        default=REQUIREMENTS_FILE_DEFAULT,
        description="Dependency manifest looked up at the repository root.",
    )
    venv_dir_name: str = Field(
        default=VENV_DIR_NAME_DEFAULT,
        description="Directory (inside the clone) for the isolated environment.",
    )
    entry_point_candidates: List[str] = Field(
        default_factory=lambda: list(ENTRY_POINT_CANDIDATES_DEFAULT),
        description="Scripts probed, in order, when no entry point is given.",
    )
    log_prefix: str = Field(
        default=LOG_PREFIX_DEFAULT,
        description="Prefix for log messages from the installer.",
    )
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("log_level", "LOG_LEVEL"),
        description="Console log level.",
    )
    use_color: bool = Field(
        default=True,
        description="Colour status lines when writing to a terminal.",
    )

    gh_apt: GitHubCliAptSettings = Field(default_factory=GitHubCliAptSettings)

    # Static symbols, could also be loaded from a separate static config if preferred
    symbols: Dict[str, str] = Field(
        default_factory=lambda: dict(SYMBOLS_DEFAULT)
    )
