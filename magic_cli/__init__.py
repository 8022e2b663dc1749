"""
Magic CLI — scaffolding and project tooling for Magic framework apps.
"""

__version__ = "1.0.0"
