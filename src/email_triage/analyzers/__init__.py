"""
Attribute, fallback and live analyzers.
"""

from .attributes import AttributeExtractor
from .fallback import FallbackExtractor
from .live_gateway import LiveGateway

__all__ = ['AttributeExtractor', 'FallbackExtractor', 'LiveGateway']
