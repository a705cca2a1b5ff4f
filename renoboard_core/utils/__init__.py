"""Utility functions for RenoBoard Core.

Import convention: use module-level imports for clarity.

    from utils import isodatetime
    timestamp = isodatetime.now()
    epoch = isodatetime.now_unix()
"""

from . import isodatetime

__all__ = ["isodatetime"]
