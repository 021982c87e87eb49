"""
Text processing module for TextKNN.
"""

from .analyzer import ENGLISH_STOP_WORDS, Analyzer

__all__ = ["Analyzer", "ENGLISH_STOP_WORDS"]
