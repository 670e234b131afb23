"""Hook system core module.

Event-based extension points for side effects that must not fail the
operation that fired them.

Example usage:
    from codecollab.core.hooks import HookEvent, HookRegistry

    registry = HookRegistry()

    async def greet(event, data, context):
        logger.info("New member", user_id=data["user_id"])

    registry.register(HookEvent.ON_AUTH_AFTER_REGISTER, greet)
"""

from codecollab.core.hooks.hook_events import HookEvent, get_all_events
from codecollab.core.hooks.hook_registry import HookRegistry, RegisteredHook

__all__ = [
    "HookEvent",
    "HookRegistry",
    "RegisteredHook",
    "get_all_events",
]
