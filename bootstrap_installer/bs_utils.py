# bootstrap_installer/bs_utils.py
# -*- coding: utf-8 -*-
import logging
import sys
from typing import Iterable, Optional, TextIO

from common.command_utils import get_symbols
from config.config_models import AppSettings


def get_bs_logger(name: str) -> logging.Logger:
    """Returns the logger for a bootstrap module; handlers live on the root logger."""
    return logging.getLogger(f"bootstrap.{name}")


def symbol(app_settings: Optional[AppSettings], key: str) -> str:
    """Looks up one status symbol, e.g. symbol(settings, "lock")."""
    return get_symbols(app_settings).get(key, "")


def print_advisory(
    lines: Iterable[str], stream: Optional[TextIO] = None
) -> None:
    """Prints advisory text (help lists, prompts) followed by a blank line."""
    out = stream if stream is not None else sys.stdout
    for line in lines:
        print(line, file=out)
    print("", file=out)
    out.flush()
