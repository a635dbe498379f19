"""
Shared Kernel Module
====================

Generic infrastructure used by every part of the service: logging and
HTTP middleware. No startup or database logic lives here.
"""

__version__ = "1.0.0"
