"""
octasm Command-Line Interface
=============================

- **octasm**: assemble a source file, or run the built-in self test

The tool is a Click application with help and error reporting shared
through ``octasm.cli.errors``.
"""

__all__ = ["octasm"]
