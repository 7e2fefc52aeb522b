"""Interactive Prompt Package"""

from conventionalize.interactive.flow import InteractiveFlow, State

__all__ = [
    "InteractiveFlow",
    "State",
]
