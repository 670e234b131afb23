"""Domain entities."""

from codecollab.domain.entities.hook_context import HookContext, HookResult

__all__ = ["HookContext", "HookResult"]
