# bootstrap_installer/bs_auth.py
# -*- coding: utf-8 -*-
"""
GitHub authentication via the GitHub CLI.

Skips login when `gh auth status` succeeds. Otherwise runs the browser-based
OAuth flow up to `max_auth_attempts` times, waiting for the user to press
Enter between attempts.
"""

from typing import Callable, Optional

from bootstrap_installer.bs_errors import AuthFailed
from bootstrap_installer.bs_utils import get_bs_logger, print_advisory, symbol
from common.command_utils import log_bootstrap, run_command
from config.config_models import AppSettings

logger = get_bs_logger("Auth")

COMMON_ISSUES = [
    "Common issues and solutions:",
    "• Make sure your browser opened and you completed the authentication",
    "• Check your internet connection",
    "• Try closing and reopening your browser",
    "• Make sure you're logged into the correct GitHub account",
]

TROUBLESHOOTING_TIPS = [
    "Troubleshooting tips:",
    "• Run 'gh auth login' manually first, then re-run this installer",
    "• Check if your GitHub account has access to the target repository",
    "• Ensure you're using the correct GitHub organization account",
]

RETRY_PROMPT = "Press Enter to try again or Ctrl+C to cancel..."


def is_authenticated(app_settings: AppSettings) -> bool:
    """True when `gh auth status` reports a valid session."""
    try:
        result = run_command(
            [app_settings.gh_command, "auth", "status"],
            app_settings,
            check=False,
            capture_output=True,
            current_logger=logger,
        )
    except OSError as e:
        logger.debug(f"Could not run gh auth status: {e}")
        return False
    return result.returncode == 0


def login(app_settings: AppSettings) -> bool:
    """Runs the interactive web login once. True on a clean exit."""
    command = [
        app_settings.gh_command,
        "auth",
        "login",
        "--web",
        "--scopes",
        ",".join(app_settings.gh_scopes),
    ]
    try:
        result = run_command(
            command, app_settings, check=False, current_logger=logger
        )
    except OSError as e:
        logger.debug(f"Could not run gh auth login: {e}")
        return False
    return result.returncode == 0


def ensure_authenticated(
    app_settings: AppSettings,
    context: Optional[dict] = None,
    prompt: Callable[[str], str] = input,
    **kwargs,
) -> int:
    """
    Makes sure the GitHub CLI holds a valid session.

    Args:
        app_settings: The application settings.
        context: The shared orchestrator context. `auth_attempts` records
            how many login attempts were made.
        prompt: Reads one line of user input between attempts.

    Returns:
        Number of login attempts made (0 when already authenticated).

    Raises:
        AuthFailed: After `max_auth_attempts` failed logins.
            Also when no input can be read to start another attempt.
    """
    log_bootstrap(
        "Checking GitHub authentication status...", "info", logger, app_settings
    )
    if context is not None:
        context["auth_attempts"] = 0

    if is_authenticated(app_settings):
        log_bootstrap(
            "Already authenticated with GitHub", "success", logger, app_settings
        )
        return 0

    max_attempts = app_settings.max_auth_attempts
    attempt = 1

    while attempt <= max_attempts:
        log_bootstrap(
            f"GitHub authentication required (attempt {attempt}/{max_attempts})",
            "info",
            logger,
            app_settings,
        )
        print_advisory([
            "",
            f"{symbol(app_settings, 'lock')} This installer needs to authenticate with GitHub to access private repositories.",
            "   You'll be redirected to GitHub in your browser for secure authentication.",
        ])
        if context is not None:
            context["auth_attempts"] = attempt

        if login(app_settings):
            log_bootstrap(
                "GitHub authentication completed",
                "success",
                logger,
                app_settings,
            )
            return attempt

        log_bootstrap(
            f"GitHub authentication failed (attempt {attempt}/{max_attempts})",
            "warning",
            logger,
            app_settings,
        )

        if attempt < max_attempts:
            print_advisory([""] + COMMON_ISSUES + ["", RETRY_PROMPT])
            try:
                prompt("")
            except EOFError as e:
                raise AuthFailed(
                    f"GitHub authentication failed after {attempt} attempts "
                    "(no interactive input available to retry)",
                    hints=TROUBLESHOOTING_TIPS,
                    original_error=e,
                ) from e

        attempt += 1

    raise AuthFailed(
        f"GitHub authentication failed after {max_attempts} attempts",
        hints=TROUBLESHOOTING_TIPS,
    )
