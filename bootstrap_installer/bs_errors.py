# bootstrap_installer/bs_errors.py
# -*- coding: utf-8 -*-
"""
Errors raised by bootstrap steps.

Every error is fatal for the run. The message is the one-line diagnostic;
`hints` holds the advisory lines printed after it.
"""

from typing import List, Optional


class BootstrapError(Exception):
    """Base exception for bootstrap step failures."""

    title: str = "Bootstrap failed"

    def __init__(
        self,
        message: str,
        hints: Optional[List[str]] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.hints = list(hints or [])
        self.original_error = original_error
        super().__init__(message)


class ToolMissing(BootstrapError):
    """A required tool is absent and cannot be installed automatically."""

    title = "Required tool missing"


class InstallFailed(BootstrapError):
    """The chosen installer for the GitHub CLI reported failure."""

    title = "Installation failed"


class AuthFailed(BootstrapError):
    """Interactive GitHub login did not succeed within the attempt limit."""

    title = "Authentication failed"


class AccessDenied(BootstrapError):
    """The target repository could not be queried."""

    title = "Repository access denied"


class CloneFailed(BootstrapError):
    """Cloning the target repository failed."""

    title = "Clone failed"


class DependencyInstallFailed(BootstrapError):
    """Every dependency installation strategy failed."""

    title = "Dependency installation failed"


class EntryPointNotFound(BootstrapError):
    """An explicitly requested entry point does not exist in the clone."""

    title = "Specified installer not found"


class EntryPointMissing(BootstrapError):
    """No entry point was given and none of the candidates exist."""

    title = "No installer script found"
