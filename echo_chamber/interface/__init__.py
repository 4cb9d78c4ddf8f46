"""
Interface Module
================

Contains the interactive console menu.
"""

from .console import ConsoleInterface, parse_sequence

__all__ = ["ConsoleInterface", "parse_sequence"]
