# bootstrap_installer/bs_dependencies.py
# -*- coding: utf-8 -*-
"""
Installs the cloned repository's Python dependencies.

Modern Python distributions may mark the system interpreter as externally
managed (PEP 668), which blocks plain `pip install`. The install therefore
walks an ordered chain and stops at the first strategy that works:

1. direct: `pip install --user -r requirements.txt`
2. elevated: the same with `--break-system-packages`
3. isolated-environment: a throwaway venv inside the clone

When the venv strategy wins, its interpreter is used to launch the entry
point.
"""

import enum
import os
import shutil
from functools import partial
from pathlib import Path
from typing import List, Optional

from bootstrap_installer.bs_errors import DependencyInstallFailed
from bootstrap_installer.bs_utils import get_bs_logger, symbol
from common.command_utils import log_bootstrap, run_command
from common.strategy_chain import Strategy, run_strategy_chain
from config.config_models import AppSettings

logger = get_bs_logger("Dependencies")


class InstallStrategy(str, enum.Enum):
    """How the dependencies ended up installed."""

    DIRECT = "direct"
    ELEVATED = "elevated"
    ISOLATED_ENVIRONMENT = "isolated-environment"
    FAILED = "failed"
    SKIPPED = "skipped"


def venv_python_path(venv_dir: Path) -> Path:
    """Path of the interpreter inside a venv."""
    if os.name == "nt":
        return venv_dir / "Scripts" / "python.exe"
    return venv_dir / "bin" / "python"


def _pip_install(
    python_cmd: str,
    pip_args: List[str],
    requirements: Path,
    repo_root: Path,
    app_settings: AppSettings,
) -> bool:
    command = [python_cmd, "-m", "pip", "install"] + pip_args + [
        "-r",
        str(requirements),
    ]
    try:
        result = run_command(
            command,
            app_settings,
            check=False,
            capture_output=True,
            current_logger=logger,
            cwd=str(repo_root),
        )
    except OSError as e:
        logger.debug(f"pip could not be started: {e}")
        return False
    return result.returncode == 0


def install_direct(
    requirements: Path, repo_root: Path, app_settings: AppSettings
) -> Optional[str]:
    """User-scoped install into the system interpreter."""
    python_cmd = app_settings.python_command
    if _pip_install(
        python_cmd, ["--user"], requirements, repo_root, app_settings
    ):
        return python_cmd
    return None


def install_elevated(
    requirements: Path, repo_root: Path, app_settings: AppSettings
) -> Optional[str]:
    """User-scoped install overriding the externally-managed marker."""
    python_cmd = app_settings.python_command
    if _pip_install(
        python_cmd,
        ["--break-system-packages", "--user"],
        requirements,
        repo_root,
        app_settings,
    ):
        log_bootstrap(
            "Used --break-system-packages flag for externally-managed Python environment",
            "warning",
            logger,
            app_settings,
        )
        return python_cmd
    return None


def install_isolated(
    requirements: Path, repo_root: Path, app_settings: AppSettings
) -> Optional[str]:
    """
    Builds a venv inside the clone and installs into it.

    Returns the venv interpreter on success. A partially built venv is
    removed on failure.
    """
    venv_dir = repo_root / app_settings.venv_dir_name
    log_bootstrap(
        "Creating temporary virtual environment for dependencies...",
        "info",
        logger,
        app_settings,
    )
    try:
        created = run_command(
            [app_settings.python_command, "-m", "venv", str(venv_dir)],
            app_settings,
            check=False,
            capture_output=True,
            current_logger=logger,
            cwd=str(repo_root),
        )
        if created.returncode == 0:
            venv_python = venv_python_path(venv_dir)
            if _pip_install(
                str(venv_python), [], requirements, repo_root, app_settings
            ):
                log_bootstrap(
                    "Virtual environment created and dependencies installed",
                    "info",
                    logger,
                    app_settings,
                )
                return str(venv_python)
    except OSError as e:
        logger.debug(f"venv could not be created: {e}")

    shutil.rmtree(venv_dir, ignore_errors=True)
    return None


def build_install_strategies(
    requirements: Path, repo_root: Path, app_settings: AppSettings
) -> List[Strategy]:
    """The dependency install chain, in the order it is tried."""
    return [
        Strategy(
            InstallStrategy.DIRECT.value,
            partial(install_direct, requirements, repo_root, app_settings),
            "pip install --user",
        ),
        Strategy(
            InstallStrategy.ELEVATED.value,
            partial(install_elevated, requirements, repo_root, app_settings),
            "pip install --break-system-packages --user",
        ),
        Strategy(
            InstallStrategy.ISOLATED_ENVIRONMENT.value,
            partial(install_isolated, requirements, repo_root, app_settings),
            "temporary virtual environment",
        ),
    ]


def manual_remediation_hints(app_settings: AppSettings) -> List[str]:
    """Advisory menu shown when every install strategy failed."""
    python_cmd = app_settings.python_command
    requirements = app_settings.requirements_file
    return [
        f"{symbol(app_settings, 'bulb')} Your system has an externally-managed Python environment.",
        "   This is common with Python 3.13+ and Homebrew Python installations.",
        "",
        f"{symbol(app_settings, 'tools')} Manual solutions (choose one):",
        "  Option 1 (Recommended): Use pipx",
        "    brew install pipx",
        "    # Then re-run this installer",
        "",
        "  Option 2: Allow system packages (not recommended)",
        f"    {python_cmd} -m pip install --break-system-packages --user -r {requirements}",
        "    # Then re-run this installer",
        "",
        "  Option 3: Use virtual environment",
        f"    {python_cmd} -m venv ~/smart-installer-venv",
        "    source ~/smart-installer-venv/bin/activate",
        f"    pip install -r {requirements}",
        "    # Then re-run this installer",
    ]


def install_dependencies(
    repo_root: Path,
    app_settings: AppSettings,
    context: Optional[dict] = None,
    **kwargs,
) -> InstallStrategy:
    """
    Installs `requirements_file` from the clone root, if present.

    Args:
        repo_root: Root of the cloned repository.
        app_settings: The application settings.
        context: The shared orchestrator context. Receives `install_strategy`
            and `python_command` (the interpreter the entry point must use).

    Returns:
        The strategy that succeeded, or InstallStrategy.SKIPPED when the
        repository has no manifest.

    Raises:
        DependencyInstallFailed: If every strategy failed.
    """
    requirements = repo_root / app_settings.requirements_file
    if context is not None:
        context.setdefault("python_command", app_settings.python_command)

    if not requirements.is_file():
        logger.debug(f"No {app_settings.requirements_file} found; skipping.")
        if context is not None:
            context["install_strategy"] = InstallStrategy.SKIPPED
        return InstallStrategy.SKIPPED

    log_bootstrap(
        "Installing Python dependencies...", "info", logger, app_settings
    )
    outcome = run_strategy_chain(
        build_install_strategies(requirements, repo_root, app_settings),
        current_logger=logger,
    )

    if not outcome.succeeded:
        if context is not None:
            context["install_strategy"] = InstallStrategy.FAILED
        raise DependencyInstallFailed(
            "Failed to install Python dependencies",
            hints=manual_remediation_hints(app_settings)
            + [""]
            + [f"Attempted: {line}" for line in outcome.failure_summary()],
        )

    strategy = InstallStrategy(outcome.strategy)
    if context is not None:
        context["install_strategy"] = strategy
        context["python_command"] = outcome.value
    if strategy is InstallStrategy.ISOLATED_ENVIRONMENT:
        log_bootstrap(
            "Using virtual environment for main installer",
            "info",
            logger,
            app_settings,
        )
    log_bootstrap(
        "Dependencies installed successfully", "success", logger, app_settings
    )
    return strategy
