# bootstrap_installer/bs_repo_access.py
# -*- coding: utf-8 -*-
from typing import Optional

from bootstrap_installer.bs_errors import AccessDenied
from bootstrap_installer.bs_utils import get_bs_logger
from common.command_utils import log_bootstrap, run_command
from config.config_models import AppSettings

logger = get_bs_logger("RepoAccess")

POSSIBLE_REASONS = [
    "Possible reasons:",
    "• Repository doesn't exist",
    "• You don't have access to this private repository",
    "• You're not a member of the required organization",
]


def verify_repo_access(
    repo: str,
    app_settings: AppSettings,
    context: Optional[dict] = None,
    **kwargs,
) -> None:
    """
    Probes `gh repo view <repo> --json name` once.

    Any failure, whether the repository is missing or forbidden, is reported
    as AccessDenied. There is no retry.
    """
    log_bootstrap(
        f"Verifying access to repository: {repo}", "info", logger, app_settings
    )
    try:
        result = run_command(
            [app_settings.gh_command, "repo", "view", repo, "--json", "name"],
            app_settings,
            check=False,
            capture_output=True,
            current_logger=logger,
        )
        returncode = result.returncode
    except OSError as e:
        logger.debug(f"Could not run gh repo view: {e}")
        returncode = None

    if returncode != 0:
        raise AccessDenied(
            f"Cannot access repository: {repo}", hints=POSSIBLE_REASONS
        )

    log_bootstrap("Repository access verified", "success", logger, app_settings)
