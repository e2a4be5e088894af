"""REPL shell for interactive bucket navigation.

This module provides an interactive shell for navigating and editing
a bucket store through a filesystem-like interface.
"""

from bucketsh.repl.shell import BucketShell

__all__ = ["BucketShell"]
