#!/usr/bin/env python
"""
Legacy entry point for diffeqsim.

Package metadata, dependencies and the src/ layout are declared in
pyproject.toml; this shim only lets ``python setup.py develop`` and old
pip releases without PEP 660 support perform editable installs.
"""

from setuptools import setup

if __name__ == "__main__":
    setup()
