"""
Source package initialization.
"""

from . import config
from . import email_triage
from . import utils

__all__ = [
    'config',
    'email_triage',
    'utils'
]
