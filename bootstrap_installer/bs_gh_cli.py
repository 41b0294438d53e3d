# bootstrap_installer/bs_gh_cli.py
# -*- coding: utf-8 -*-
"""
Ensures the GitHub CLI is installed.

When `gh` is missing, the installer is chosen by probing for a package
manager: Homebrew on macOS, then apt, then yum. Only the first match is
used; its failure is fatal.
"""

import os
import subprocess
import sys
import tempfile
from typing import Callable, List, Optional, Tuple

from bootstrap_installer.bs_errors import InstallFailed, ToolMissing
from bootstrap_installer.bs_utils import get_bs_logger, symbol
from common.command_utils import (
    command_exists,
    first_output_line,
    log_bootstrap,
    run_command,
    run_elevated_command,
)
from config.config_models import AppSettings

logger = get_bs_logger("GitHubCli")


def _install_with_brew(app_settings: AppSettings) -> None:
    run_command(
        ["brew", "install", "gh"], app_settings, current_logger=logger
    )


def _install_with_apt(app_settings: AppSettings) -> None:
    apt = app_settings.gh_apt

    fd, temp_key_path = tempfile.mkstemp(suffix=".gpg")
    os.close(fd)
    try:
        log_bootstrap(
            f"Downloading GitHub CLI keyring from {apt.keyring_url}...",
            "debug",
            logger,
            app_settings,
        )
        run_command(
            ["curl", "-fsSL", apt.keyring_url, "-o", temp_key_path],
            app_settings,
            current_logger=logger,
        )
        run_elevated_command(
            ["mv", temp_key_path, apt.keyring_path],
            app_settings,
            current_logger=logger,
        )
    finally:
        if os.path.exists(temp_key_path):
            os.remove(temp_key_path)

    run_elevated_command(
        ["chmod", "a+r", apt.keyring_path],
        app_settings,
        current_logger=logger,
    )

    arch_res = run_command(
        ["dpkg", "--print-architecture"],
        app_settings,
        capture_output=True,
        current_logger=logger,
    )
    arch = first_output_line(arch_res)
    source_line = (
        f"deb [arch={arch} signed-by={apt.keyring_path}] "
        f"{apt.repo_url} stable main\n"
    )
    run_elevated_command(
        ["tee", apt.sources_path],
        app_settings,
        cmd_input=source_line,
        capture_output=True,
        current_logger=logger,
    )
    run_elevated_command(["apt", "update"], app_settings, current_logger=logger)
    run_elevated_command(
        ["apt", "install", "gh", "-y"], app_settings, current_logger=logger
    )


def _install_with_yum(app_settings: AppSettings) -> None:
    run_elevated_command(
        ["yum", "install", "-y", "gh"], app_settings, current_logger=logger
    )


def select_cli_installer(
    platform: Optional[str] = None,
) -> Tuple[str, Callable[[AppSettings], None]]:
    """
    Picks the installer for the GitHub CLI on this machine.

    Args:
        platform: Value to use instead of sys.platform.

    Returns:
        Tuple of (installer name, install function).

    Raises:
        ToolMissing: If no supported package manager is available.
    """
    current_platform = platform if platform is not None else sys.platform

    if current_platform.startswith("darwin"):
        if command_exists("brew"):
            return "brew", _install_with_brew
        raise ToolMissing(
            "Homebrew required but not found",
            hints=["Please install Homebrew first: https://brew.sh"],
        )

    candidates: List[Tuple[str, Callable[[AppSettings], None]]] = [
        ("apt", _install_with_apt),
        ("yum", _install_with_yum),
    ]
    for name, installer in candidates:
        if command_exists(name):
            return name, installer

    raise ToolMissing(
        "Unsupported system. Please install GitHub CLI manually: https://cli.github.com",
    )


def ensure_gh_cli(
    app_settings: AppSettings, context: Optional[dict] = None, **kwargs
) -> bool:
    """
    Installs the GitHub CLI unless it is already on PATH.

    Args:
        app_settings: The application settings.
        context: The shared orchestrator context. `gh_install_attempted` is
            set to whether an installation ran.

    Returns:
        True if an installation was performed, False if gh was already present.

    Raises:
        ToolMissing: No supported installer exists.
        InstallFailed: The selected installer failed.
    """
    gh = app_settings.gh_command
    if context is not None:
        context["gh_install_attempted"] = False

    if command_exists(gh):
        try:
            version_res = run_command(
                [gh, "--version"],
                app_settings,
                check=False,
                capture_output=True,
                current_logger=logger,
            )
            version = first_output_line(version_res) or "unknown version"
        except OSError:
            version = "unknown version"
        log_bootstrap(
            f"GitHub CLI already installed: {version}",
            "info",
            logger,
            app_settings,
        )
        return False

    log_bootstrap("Installing GitHub CLI...", "info", logger, app_settings)
    installer_name, installer = select_cli_installer()
    log_bootstrap(
        f"{symbol(app_settings, 'package')} Installing via {installer_name}...",
        "info",
        logger,
        app_settings,
    )
    if context is not None:
        context["gh_install_attempted"] = True

    try:
        installer(app_settings)
    except (subprocess.CalledProcessError, OSError) as e:
        raise InstallFailed(
            f"GitHub CLI installation via {installer_name} failed: {e}",
            hints=[
                "Install the GitHub CLI manually: https://cli.github.com",
                "Then re-run this installer.",
            ],
            original_error=e,
        ) from e

    log_bootstrap(
        "GitHub CLI installed successfully", "success", logger, app_settings
    )
    return True
