# bootstrap_installer/bs_python.py
# -*- coding: utf-8 -*-
from typing import Optional

from bootstrap_installer.bs_errors import ToolMissing
from bootstrap_installer.bs_utils import get_bs_logger
from common.command_utils import command_exists, log_bootstrap, run_command
from config.config_models import AppSettings

logger = get_bs_logger("Python")


def check_python(
    app_settings: AppSettings, context: Optional[dict] = None, **kwargs
) -> str:
    """
    Checks that the configured Python interpreter is on PATH and logs its version.

    Returns:
        The reported version string, e.g. "3.12.3".

    Raises:
        ToolMissing: If the interpreter cannot be found.
    """
    python_cmd = app_settings.python_command
    if not command_exists(python_cmd):
        raise ToolMissing(
            "Python 3 is required but not found",
            hints=["Please install Python 3.9+ and try again"],
        )

    result = run_command(
        [python_cmd, "--version"],
        app_settings,
        check=False,
        capture_output=True,
        current_logger=logger,
    )
    # Older interpreters print the version on stderr.
    raw = (result.stdout or "").strip() or (result.stderr or "").strip()
    parts = raw.split()
    python_version = parts[1] if len(parts) > 1 else raw or "unknown"

    log_bootstrap(f"Found Python {python_version}", "info", logger, app_settings)
    if context is not None:
        context["python_command"] = python_cmd
    return python_version
