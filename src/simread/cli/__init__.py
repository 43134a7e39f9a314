"""
simread Command-Line Interface
==============================

This package provides the `simread` command-line tool, a Click-based
application that prints the contents of a .sim firmware image.
"""

__all__ = ["simread"]
