# bootstrap_installer/bs_clone.py
# -*- coding: utf-8 -*-
import subprocess
from pathlib import Path
from typing import Optional

from bootstrap_installer.bs_errors import CloneFailed
from bootstrap_installer.bs_utils import get_bs_logger
from common.command_utils import log_bootstrap, run_command
from config.config_models import AppSettings

logger = get_bs_logger("Clone")


def clone_repository(
    repo: str,
    working_dir: Path,
    app_settings: AppSettings,
    context: Optional[dict] = None,
    **kwargs,
) -> Path:
    """
    Clones `repo` at the configured branch into `working_dir`.

    `working_dir` must exist and be empty. Network errors and a missing
    branch are both reported as CloneFailed.

    Returns:
        The clone root (`working_dir`).
    """
    branch = app_settings.branch
    log_bootstrap(
        "Downloading installer from private repository...",
        "info",
        logger,
        app_settings,
    )
    log_bootstrap(f"Using branch: {branch}", "info", logger, app_settings)

    try:
        run_command(
            [
                app_settings.gh_command,
                "repo",
                "clone",
                repo,
                str(working_dir),
                "--",
                "-b",
                branch,
            ],
            app_settings,
            current_logger=logger,
        )
    except (subprocess.CalledProcessError, OSError) as e:
        raise CloneFailed(
            f"Failed to clone repository (branch: {branch})", original_error=e
        ) from e

    log_bootstrap(
        "Repository downloaded successfully", "success", logger, app_settings
    )
    if context is not None:
        context["working_dir"] = working_dir
    return working_dir
