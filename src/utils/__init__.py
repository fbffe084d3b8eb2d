"""
Shared utilities.
"""

from .logging_setup import SafeFormatter, configure_safe_logging, resolve_level

__all__ = ['SafeFormatter', 'configure_safe_logging', 'resolve_level']
