#!/usr/bin/env python3
# filename: smart-installer/install.py
# -*- coding: utf-8 -*-
"""
Entry point for the Smart Authenticated Installer.

Installs and authenticates the GitHub CLI, clones a private repository into
a temporary directory, installs its Python dependencies and runs its
installer script with the remaining arguments.

Usage:
    install.py OWNER/REPOSITORY [INSTALLER_PATH] [installer-options...]

The branch defaults to "main" and can be overridden with BRANCH.
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from bootstrap_installer.bs_errors import BootstrapError
from bootstrap_installer.bs_orchestrator import run_bootstrap_orchestration
from bootstrap_installer.bs_utils import print_advisory
from common.command_utils import log_bootstrap
from common.core_utils import resolve_log_level, setup_logging
from config.config_loader import load_app_settings
from config.config_models import AppSettings

PROG = "install.py"

USAGE_EXAMPLES = [
    "Examples:",
    f"  {PROG} myorg/private-installer --dry-run",
    f"  {PROG} myorg/dev-setup V2/src/forge/main.py --email user@company.com",
    f"  {PROG} myorg/dev-setup scripts/setup.py --verbose",
]

logger = logging.getLogger("smart_installer")


def build_parser() -> argparse.ArgumentParser:
    """Parser used for help and usage text."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Smart Authenticated Installer: fetches a private GitHub "
        "repository and runs its installer script.",
        epilog="\n".join(USAGE_EXAMPLES)
        + "\n\nEnvironment: BRANCH selects the branch to clone (default: main).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("repository", metavar="OWNER/REPOSITORY")
    parser.add_argument(
        "installer_path",
        metavar="INSTALLER_PATH",
        nargs="?",
        help="Script to run, relative to the repository root. Auto-detected "
        "(main.py, install.py, setup.py) when omitted.",
    )
    parser.add_argument(
        "installer_args",
        metavar="installer-options",
        nargs=argparse.REMAINDER,
        help="Passed unchanged to the installer script.",
    )
    return parser


def split_cli_args(
    args: List[str],
) -> Tuple[Optional[str], Optional[str], List[str]]:
    """
    Splits argv into (repository, installer_path, forwarded_args).

    The second argument is the installer path unless it looks like an option
    (starts with "-"), in which case it is forwarded like everything after it.
    Splitting is positional so that options meant for the installer, "--"
    included, reach it untouched.
    """
    if not args or args[0].startswith("-"):
        return None, None, list(args)

    repository = args[0]
    rest = list(args[1:])
    if rest and not rest[0].startswith("-"):
        return repository, rest[0], rest[1:]
    return repository, None, rest


def print_usage_error() -> None:
    """Usage text written to stderr when no repository is given."""
    print_advisory(
        [
            "",
            f"Usage: {PROG} OWNER/REPOSITORY [INSTALLER_PATH] [installer-options...]",
            "",
        ]
        + USAGE_EXAMPLES,
        stream=sys.stderr,
    )


def report_failure(error: BootstrapError, app_settings: AppSettings) -> None:
    """Logs a step failure and prints its advisory hints to stderr."""
    log_bootstrap(error.message, "error", logger, app_settings)
    if error.hints:
        print_advisory([""] + error.hints, stream=sys.stderr)


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the Smart Authenticated Installer."""
    all_args = list(args) if args is not None else sys.argv[1:]

    if all_args and all_args[0] in ("-h", "--help", "help"):
        build_parser().print_help()
        return 0

    app_settings = load_app_settings()
    setup_logging(
        log_level=resolve_log_level(app_settings.log_level),
        log_prefix=app_settings.log_prefix,
        symbols=app_settings.symbols,
        use_color=app_settings.use_color,
    )

    print("")
    print(f"{app_settings.symbols.get('rocket', '')} Smart Authenticated Installer")
    print("=================================")
    print("", flush=True)

    repository, installer_path, forwarded_args = split_cli_args(all_args)
    if not repository:
        log_bootstrap("Repository not specified", "error", logger, app_settings)
        print_usage_error()
        return 1

    try:
        return run_bootstrap_orchestration(
            repository,
            installer_path,
            forwarded_args,
            app_settings,
            logger=logger,
        )
    except BootstrapError as e:
        report_failure(e, app_settings)
        return 1
    except KeyboardInterrupt:
        log_bootstrap("Installation cancelled", "warning", logger, app_settings)
        return 130


if __name__ == "__main__":
    sys.exit(main())
