# bootstrap_installer/__init__.py
# -*- coding: utf-8 -*-
"""
Bootstrap steps for the smart installer.

Each bs_* module implements one step of the install-and-launch sequence:
GitHub CLI presence, authentication, repository access, Python check,
clone and dependency preparation, and launching the entry point.
"""
