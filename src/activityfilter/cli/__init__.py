"""
ActivityFilter command-line interface.
"""

from activityfilter import __version__

__all__ = ["__version__"]
