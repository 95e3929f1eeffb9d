# Path: xbrl_tree/core/__init__.py
"""
xbrl_tree Core Package

Submodules:
    - logger: IPO-aware logging system
"""

from .logger import setup_ipo_logging

__all__ = [
    'setup_ipo_logging',
]
