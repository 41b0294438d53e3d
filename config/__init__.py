# config/__init__.py
# -*- coding: utf-8 -*-
"""
Configuration package for the smart installer.

Holds the Pydantic settings model and the loader that layers defaults,
environment variables, an optional YAML file and command-line overrides.
"""
