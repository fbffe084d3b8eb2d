"""
Scenario library and response template handlers.
"""

from .scenario_library import ScenarioLibrary
from .templates import ResponseTemplateGenerator

__all__ = ['ScenarioLibrary', 'ResponseTemplateGenerator']
