"""
Firefox Runtime - A configuration-driven launcher for Firefox builds.

Reads a small INI-style configuration, prepares the session environment,
provisions desktop integration manifests and execs the browser binary.
"""

__version__ = "0.1.0"
__author__ = "Firefox Runtime Contributors"
