"""
Model-backed services: grant extraction and grant matching.
"""

from .client import LLMClient
from .extraction import GrantExtractor
from .matching import GrantMatchingService

__all__ = ['LLMClient', 'GrantExtractor', 'GrantMatchingService']
