"""
Terminal interaction: themed rich console and the yes/no prompt.
"""

from . import prompts
from .console import get_console
from .prompts import is_affirmative, yes_or_no

__all__ = [
    "get_console",
    "is_affirmative",
    "prompts",
    "yes_or_no",
]
