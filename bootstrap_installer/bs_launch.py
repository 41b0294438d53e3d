# bootstrap_installer/bs_launch.py
# -*- coding: utf-8 -*-
"""
Resolves and runs the entry point of the cloned repository.
"""

import subprocess
from functools import partial
from pathlib import Path
from typing import List, Optional, Sequence

from bootstrap_installer.bs_errors import (
    EntryPointMissing,
    EntryPointNotFound,
)
from bootstrap_installer.bs_utils import get_bs_logger
from common.command_utils import log_bootstrap, run_command
from common.strategy_chain import Strategy, run_strategy_chain
from config.config_models import AppSettings

logger = get_bs_logger("Launch")


def _probe_candidate(repo_root: Path, candidate: str) -> Optional[str]:
    return candidate if (repo_root / candidate).is_file() else None


def _is_inside(repo_root: Path, relative_path: str) -> bool:
    root = repo_root.resolve()
    target = (repo_root / relative_path).resolve()
    return target == root or root in target.parents


def resolve_entry_point(
    repo_root: Path,
    installer_path: Optional[str],
    app_settings: AppSettings,
) -> str:
    """
    Picks the script to run, as a path relative to `repo_root`.

    An explicit `installer_path` must exist inside `repo_root`; auto-detection
    is never used as a fallback for it. Without one, `entry_point_candidates`
    are probed in order and the first existing file wins.

    Raises:
        EntryPointNotFound: The explicit path is not a file inside the clone.
        EntryPointMissing: No candidate exists.
    """
    if installer_path:
        if not _is_inside(repo_root, installer_path):
            raise EntryPointNotFound(
                f"Specified installer is outside the repository: {installer_path}",
                hints=["The installer path must be relative to the repository root."],
            )
        if not (repo_root / installer_path).is_file():
            raise EntryPointNotFound(
                f"Specified installer not found: {installer_path}"
            )
        log_bootstrap(
            f"Using specified installer: {installer_path}",
            "info",
            logger,
            app_settings,
        )
        return installer_path

    candidates = app_settings.entry_point_candidates
    outcome = run_strategy_chain(
        [
            Strategy(name, partial(_probe_candidate, repo_root, name))
            for name in candidates
        ],
        current_logger=logger,
    )
    if not outcome.succeeded:
        raise EntryPointMissing(
            "No installer script found (looking for "
            f"{_human_join(candidates)})"
        )

    log_bootstrap(
        f"Found installer: {outcome.value}", "info", logger, app_settings
    )
    return outcome.value


def _human_join(names: List[str]) -> str:
    if len(names) <= 1:
        return "".join(names)
    if len(names) == 2:
        return f"{names[0]} or {names[1]}"
    return ", ".join(names[:-1]) + f", or {names[-1]}"


def launch_entry_point(
    repo_root: Path,
    entry_point: str,
    forwarded_args: Sequence[str],
    python_cmd: str,
    app_settings: AppSettings,
) -> int:
    """
    Runs `python_cmd entry_point *forwarded_args` with cwd `repo_root`.

    Arguments are passed through as a list, so nothing is re-split or
    re-expanded by a shell.

    Returns:
        The script's exit status.
    """
    args = list(forwarded_args)
    log_bootstrap(
        f"Starting main installer with arguments: {subprocess.list2cmdline(args)}",
        "info",
        logger,
        app_settings,
    )
    print("", flush=True)
    result = run_command(
        [python_cmd, entry_point] + args,
        app_settings,
        check=False,
        current_logger=logger,
        cwd=str(repo_root),
    )
    return result.returncode


def run_entry_point(
    repo_root: Path,
    installer_path: Optional[str],
    forwarded_args: Sequence[str],
    app_settings: AppSettings,
    context: Optional[dict] = None,
    **kwargs,
) -> int:
    """
    Orchestrator task: resolve the entry point and run it.

    Uses `context["python_command"]` when the dependency step selected an
    interpreter (e.g. a venv), otherwise the configured Python.
    """
    python_cmd = app_settings.python_command
    if context is not None:
        python_cmd = context.get("python_command") or python_cmd

    entry_point = resolve_entry_point(repo_root, installer_path, app_settings)
    if context is not None:
        context["entry_point"] = entry_point

    exit_code = launch_entry_point(
        repo_root, entry_point, forwarded_args, python_cmd, app_settings
    )
    if context is not None:
        context["exit_code"] = exit_code
    return exit_code
