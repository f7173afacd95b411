"""
Command parsing and execution.
"""

from .commands import Command, HELP_MESSAGE
from .logic_manager import LogicManager
from .parser import TutorAidParser

__all__ = ["Command", "HELP_MESSAGE", "LogicManager", "TutorAidParser"]
