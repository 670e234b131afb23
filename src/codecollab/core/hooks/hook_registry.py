"""Hook registry for post-commit side effects.

A hook is a callback attached to an event name. ``trigger`` runs every hook
for the event inside its own error boundary: a raising hook is logged and
recorded on the returned ``HookResult`` but never stops the other hooks and
never propagates to the code that fired the event.
"""

import asyncio
import itertools
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from codecollab.core.logging import get_logger
from codecollab.domain.entities.hook_context import HookContext, HookResult

logger = get_logger(__name__)

HookCallback = Callable[[str, Optional[dict[str, Any]], Optional[HookContext]], Any]


@dataclass
class RegisteredHook:
    """A callback bound to an event.

    Attributes:
        id: Handle returned by ``register``.
        event: Event name the hook listens to.
        callback: Called as ``callback(event, data, context)``; may be async.
        priority: Higher runs earlier.
        is_builtin: Built-in hooks survive ``unregister`` and ``clear``.
        sequence: Registration order, breaks priority ties.
        tags: Free-form metadata.
    """

    id: str
    event: str
    callback: HookCallback
    priority: int = 0
    is_builtin: bool = False
    sequence: int = 0
    tags: dict[str, Any] = field(default_factory=dict)

    @property
    def sort_key(self) -> tuple[int, int]:
        return (-self.priority, self.sequence)


class HookRegistry:
    """Registry of hooks, kept per event in execution order.

    Example:
        registry = HookRegistry()
        registry.register(HookEvent.ON_AUTH_AFTER_REGISTER, grant_welcome_bonus)
        result = await registry.trigger(
            HookEvent.ON_AUTH_AFTER_REGISTER,
            data={"user_id": user.id},
            context=HookContext(session=session, user_id=user.id),
        )
    """

    def __init__(self) -> None:
        self._by_event: dict[str, list[RegisteredHook]] = {}
        self._by_id: dict[str, RegisteredHook] = {}
        self._sequence = itertools.count(1)

    def register(
        self,
        event: str,
        callback: HookCallback,
        priority: int = 0,
        is_builtin: bool = False,
        tags: Optional[dict[str, Any]] = None,
    ) -> str:
        """Attach ``callback`` to ``event``.

        Args:
            event: Event name, one of ``HookEvent``.
            callback: Sync or async callable taking (event, data, context).
            priority: Higher priority hooks run first; equal priorities run
                in registration order.
            is_builtin: Protect the hook from removal.
            tags: Metadata kept with the registration.

        Returns:
            The hook ID.
        """
        hook = RegisteredHook(
            id=f"hook_{uuid.uuid4().hex[:12]}",
            event=event,
            callback=callback,
            priority=priority,
            is_builtin=is_builtin,
            sequence=next(self._sequence),
            tags=dict(tags or {}),
        )
        hooks = self._by_event.setdefault(event, [])
        hooks.append(hook)
        hooks.sort(key=lambda h: h.sort_key)
        self._by_id[hook.id] = hook

        logger.debug(
            "Hook registered",
            hook_id=hook.id,
            hook_event=event,
            priority=priority,
            is_builtin=is_builtin,
        )
        return hook.id

    def unregister(self, hook_id: str) -> bool:
        """Detach a hook.

        Returns:
            True if removed; False if unknown or built-in.
        """
        hook = self._by_id.get(hook_id)
        if hook is None:
            logger.warning("Hook not found for unregister", hook_id=hook_id)
            return False
        if hook.is_builtin:
            logger.warning("Refusing to unregister built-in hook", hook_id=hook_id)
            return False

        del self._by_id[hook_id]
        remaining = [h for h in self._by_event[hook.event] if h.id != hook_id]
        if remaining:
            self._by_event[hook.event] = remaining
        else:
            del self._by_event[hook.event]

        logger.debug("Hook unregistered", hook_id=hook_id, hook_event=hook.event)
        return True

    async def trigger(
        self,
        event: str,
        data: Optional[dict[str, Any]] = None,
        context: Optional[HookContext] = None,
    ) -> HookResult:
        """Run every hook registered for ``event``.

        A hook that returns a dict replaces ``data`` for the hooks after it.

        Returns:
            HookResult; ``success`` is False if any hook raised.
        """
        result = HookResult(success=True, data=data)
        hooks = list(self._by_event.get(event, ()))
        if not hooks:
            return result

        logger.debug("Triggering hooks", hook_event=event, hook_count=len(hooks))

        for hook in hooks:
            try:
                returned = await self._call(hook, event, result.data, context)
            except Exception as e:
                logger.error(
                    "Hook execution failed",
                    hook_id=hook.id,
                    hook_event=event,
                    error=str(e),
                    exc_type=type(e).__name__,
                )
                result.success = False
                result.errors.append(f"Hook {hook.id} failed: {e}")
                continue
            if isinstance(returned, dict):
                result.data = returned

        return result

    @staticmethod
    async def _call(
        hook: RegisteredHook,
        event: str,
        data: Optional[dict[str, Any]],
        context: Optional[HookContext],
    ) -> Any:
        if asyncio.iscoroutinefunction(hook.callback):
            return await hook.callback(event, data, context)
        return hook.callback(event, data, context)

    def get_hooks_for_event(self, event: str) -> list[RegisteredHook]:
        """Hooks for ``event`` in execution order."""
        return list(self._by_event.get(event, ()))

    def get_hook_by_id(self, hook_id: str) -> Optional[RegisteredHook]:
        return self._by_id.get(hook_id)

    def clear(self) -> None:
        """Drop every hook except the built-in ones."""
        for hook_id in [i for i, h in self._by_id.items() if not h.is_builtin]:
            self.unregister(hook_id)
