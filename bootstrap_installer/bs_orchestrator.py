# bootstrap_installer/bs_orchestrator.py
# -*- coding: utf-8 -*-
import contextlib
import logging
import signal
import tempfile
import threading
from pathlib import Path
from typing import Callable, Iterator, Optional, Sequence

from bootstrap_installer.bs_auth import ensure_authenticated
from bootstrap_installer.bs_clone import clone_repository
from bootstrap_installer.bs_dependencies import install_dependencies
from bootstrap_installer.bs_gh_cli import ensure_gh_cli
from bootstrap_installer.bs_launch import run_entry_point
from bootstrap_installer.bs_python import check_python
from bootstrap_installer.bs_repo_access import verify_repo_access
from bootstrap_installer.bs_utils import get_bs_logger
from common.command_utils import log_bootstrap
from common.orchestrator import Orchestrator
from config.config_models import AppSettings

WORKDIR_PREFIX = "smart-installer-"


def _raise_system_exit(signum, frame):
    raise SystemExit(128 + signum)


@contextlib.contextmanager
def exit_on_termination_signals() -> Iterator[None]:
    """
    Turns SIGTERM and SIGHUP into SystemExit while the block runs, so that
    `finally` clauses and context managers unwind on external termination.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    signums = [signal.SIGTERM]
    if hasattr(signal, "SIGHUP"):
        signums.append(signal.SIGHUP)

    previous = {}
    for signum in signums:
        previous[signum] = signal.signal(signum, _raise_system_exit)
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


@contextlib.contextmanager
def working_directory() -> Iterator[Path]:
    """A fresh, empty directory removed when the block exits, however it exits."""
    with tempfile.TemporaryDirectory(prefix=WORKDIR_PREFIX) as temp_dir:
        yield Path(temp_dir)


def run_bootstrap_orchestration(
    repo: str,
    installer_path: Optional[str],
    forwarded_args: Sequence[str],
    app_settings: AppSettings,
    prompt: Callable[[str], str] = input,
    logger: Optional[logging.Logger] = None,
    context: Optional[dict] = None,
) -> int:
    """
    Runs the whole install-and-launch sequence for `repo`.

    Preflight (GitHub CLI, authentication, repository access, Python) runs
    first; clone, dependency install and launch then run inside a temporary
    working directory that is deleted on every exit path.

    Args:
        repo: Target repository as OWNER/NAME.
        installer_path: Explicit entry point relative to the clone root, or None
            to auto-detect.
        forwarded_args: Arguments passed verbatim to the entry point.
        app_settings: The application settings.
        prompt: Reads a line between authentication attempts.
        logger: An optional logger instance.
        context: Optional dict that receives the run state (working_dir,
            install_strategy, entry_point, exit_code, ...).

    Returns:
        The entry point's exit status.

    Raises:
        BootstrapError: The first failing step's error. Later steps never run.
    """
    effective_logger = logger or get_bs_logger("Orchestrator")
    run_context = context if context is not None else {}

    log_bootstrap(
        f"Target repository: {repo}", "info", effective_logger, app_settings
    )

    with exit_on_termination_signals():
        preflight = Orchestrator(app_settings, effective_logger, run_context)
        preflight.add_task("Ensure GitHub CLI", ensure_gh_cli)
        preflight.add_task(
            "Ensure Authenticated",
            ensure_authenticated,
            kwargs={"prompt": prompt},
        )
        preflight.add_task("Verify Access", verify_repo_access, args=[repo])
        preflight.add_task("Check Python", check_python)
        preflight.run()

        with working_directory() as workdir:
            effective_logger.debug(f"Working directory: {workdir}")
            fetch = Orchestrator(app_settings, effective_logger, run_context)
            fetch.add_task(
                "Clone Repository", clone_repository, args=[repo, workdir]
            )
            fetch.add_task(
                "Install Dependencies", install_dependencies, args=[workdir]
            )
            fetch.add_task(
                "Launch Entry Point",
                run_entry_point,
                args=[workdir, installer_path, list(forwarded_args)],
            )
            fetch.run()

    return run_context.get("exit_code", 0)
