"""
Session controller and result presentation.
"""

from .controller import MatchController, SessionState

__all__ = ['MatchController', 'SessionState']
