"""
TermSnake - single-player Snake in the terminal.
"""

__version__ = "1.2.0"
