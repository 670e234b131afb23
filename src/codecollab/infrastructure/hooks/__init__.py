"""Infrastructure hooks module.

Contains built-in hooks and hook registration utilities.
"""

from codecollab.infrastructure.hooks.builtin_hooks import (
    make_welcome_bonus_hook,
    register_builtin_hooks,
)

__all__ = [
    "make_welcome_bonus_hook",
    "register_builtin_hooks",
]
