"""
Echo Chamber - Source Package
=============================

This package contains the core modules for the Echo Chamber:
- core: Sequence validation, next-term prediction and prediction history
- interface: Interactive console menu
- utils: Logging configuration and custom exceptions
"""

__version__ = "1.0.0"
__author__ = "Echo Chamber Developer"
