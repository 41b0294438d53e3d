# common/command_utils.py
# -*- coding: utf-8 -*-
"""
Utilities for executing shell commands and logging their output.
"""

import logging
import os
import shutil
import subprocess
from typing import Dict, List, Optional

from config.config_models import SYMBOLS_DEFAULT, AppSettings

module_logger = logging.getLogger(__name__)


def get_symbols(app_settings: Optional[AppSettings]) -> Dict[str, str]:
    """Returns the configured log symbols, falling back to the defaults."""
    return (
        app_settings.symbols
        if app_settings and app_settings.symbols
        else SYMBOLS_DEFAULT
    )


def log_bootstrap(
    message: str,
    level: str = "info",
    current_logger: Optional[logging.Logger] = None,
    app_settings: Optional[AppSettings] = None,
    exc_info: bool = False,
) -> None:
    """
    Logs a bootstrap status line at the given level.

    Args:
        message (str): The log message to be recorded.
        level (str): One of "debug", "info", "success", "warning", "error"
            or "critical". "success" is an INFO record flagged so the console
            formatter can render it as a success line. Defaults to "info".
        current_logger (Optional[logging.Logger]): A logger instance to use for logging. If not provided,
            a module-level logger will be used.
        app_settings (Optional[AppSettings]): Optional application settings that can influence logging behavior.
        exc_info (bool): Indicator to include exception details in the log. By default, this is set to False.

    Returns:
        None
    """
    effective_logger = current_logger if current_logger else module_logger

    if level == "warning":
        effective_logger.warning(message, exc_info=exc_info)
    elif level == "error":
        effective_logger.error(message, exc_info=exc_info)
    elif level == "critical":
        effective_logger.critical(message, exc_info=exc_info)
    elif level == "debug":
        effective_logger.debug(message, exc_info=exc_info)
    elif level == "success":
        effective_logger.info(
            message, exc_info=exc_info, extra={"success": True}
        )
    else:
        effective_logger.info(message, exc_info=exc_info)


def _get_elevated_command_prefix() -> List[str]:
    """
    Determines the command prefix that ensures elevated privileges when required.

    Returns:
        List[str]: ["sudo"] if the effective user is not root, otherwise an
        empty list.
    """
    return [] if os.geteuid() == 0 else ["sudo"]


def run_command(
    command: List[str],
    app_settings: Optional[AppSettings],
    check: bool = True,
    capture_output: bool = False,
    text: bool = True,
    cmd_input: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
    cwd: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
) -> subprocess.CompletedProcess:
    """
    Executes a system command and logs the process details and results.

    Args:
        command (List[str]): The command and its arguments. It is never run
            through a shell.
        app_settings (Optional[AppSettings]): Application settings providing the
            logging symbols. Defaults are used when not provided.
        check (bool): Whether to raise a CalledProcessError when a non-zero exit
            code is returned. Defaults to True.
        capture_output (bool): Whether to capture stdout and stderr. Captured
            streams are logged at debug level. Defaults to False, in which case
            the child inherits the terminal (needed for interactive commands).
        text (bool): Whether output streams are decoded as text. Defaults to True.
        cmd_input (Optional[str]): Input passed to the command's standard input.
        current_logger (Optional[logging.Logger]): Logger to use. A module logger
            is used when not provided.
        cwd (Optional[str]): Working directory for the command.
        env (Optional[Dict[str, str]]): Environment for the command. Inherits the
            current environment when not provided.

    Returns:
        subprocess.CompletedProcess: The completed process instance.

    Raises:
        subprocess.CalledProcessError: If the process exits non-zero and `check` is True.
        FileNotFoundError: If the executable is not found.
    """
    effective_logger = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    command_to_run = list(command)
    command_to_log_str = subprocess.list2cmdline(command_to_run)

    log_bootstrap(
        f"{symbols.get('gear', '⚙️')} Executing: {command_to_log_str}{f' (in {cwd})' if cwd else ''}",
        "debug",
        effective_logger,
        app_settings,
    )
    try:
        result = subprocess.run(
            command_to_run,
            check=check,
            capture_output=capture_output,
            text=text,
            input=cmd_input,
            cwd=cwd,
            env=env,
        )
        if capture_output:
            if result.stdout and result.stdout.strip():
                log_bootstrap(
                    f"   stdout: {result.stdout.strip()}",
                    "debug",
                    effective_logger,
                    app_settings,
                )
            if result.stderr and result.stderr.strip():
                log_bootstrap(
                    f"   stderr: {result.stderr.strip()}",
                    "debug",
                    effective_logger,
                    app_settings,
                )
        return result
    except subprocess.CalledProcessError as e:
        stdout_info = (
            e.stdout.strip()
            if e.stdout and hasattr(e.stdout, "strip")
            else "N/A"
        )
        stderr_info = (
            e.stderr.strip()
            if e.stderr and hasattr(e.stderr, "strip")
            else "N/A"
        )
        cmd_executed_str = (
            subprocess.list2cmdline(e.cmd)
            if isinstance(e.cmd, list)
            else str(e.cmd)
        )

        log_bootstrap(
            f"Command `{cmd_executed_str}` failed (rc {e.returncode}).",
            "debug",
            effective_logger,
            app_settings,
        )
        if stdout_info != "N/A":
            log_bootstrap(
                f"   stdout: {stdout_info}",
                "debug",
                effective_logger,
                app_settings,
            )
        if stderr_info != "N/A":
            log_bootstrap(
                f"   stderr: {stderr_info}",
                "debug",
                effective_logger,
                app_settings,
            )
        raise
    except FileNotFoundError as e:
        log_bootstrap(
            f"Command not found: {e.filename}. Ensure it's installed and in PATH.",
            "debug",
            effective_logger,
            app_settings,
        )
        raise


def run_elevated_command(
    command: List[str],
    app_settings: Optional[AppSettings],
    check: bool = True,
    capture_output: bool = False,
    cmd_input: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
    cwd: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
) -> subprocess.CompletedProcess:
    """
    Executes a command with elevated permissions.

    The command is prefixed with `sudo` unless the process already runs as
    root, then handed to `run_command`.

    Returns:
        subprocess.CompletedProcess: The result of the command execution.

    Raises:
        subprocess.CalledProcessError: If `check` is True and the command fails.
    """
    prefix = _get_elevated_command_prefix()
    elevated_command_list = prefix + list(command)
    return run_command(
        elevated_command_list,
        app_settings,
        check=check,
        capture_output=capture_output,
        text=True,
        cmd_input=cmd_input,
        current_logger=current_logger,
        cwd=cwd,
        env=env,
    )


def command_exists(command_name: str) -> bool:
    """
    Check if a command exists in the system's PATH.

    Parameters:
        command_name (str): The name of the command to check for existence.

    Returns:
        bool: True if the command is found in the system's PATH, False otherwise.
    """
    return shutil.which(command_name) is not None


def first_output_line(result: subprocess.CompletedProcess) -> str:
    """Returns the first non-empty line of a captured command's stdout."""
    for line in (result.stdout or "").splitlines():
        if line.strip():
            return line.strip()
    return ""
