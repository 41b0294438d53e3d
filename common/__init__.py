# common/__init__.py
# -*- coding: utf-8 -*-
"""
Shared helpers: command execution, console logging, task orchestration and
ordered fallback chains.
"""
