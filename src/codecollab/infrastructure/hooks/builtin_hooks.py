"""Built-in hooks for CodeCollab.

These hooks provide core side effects and CANNOT be unregistered.

Built-in hooks:
- welcome bonus: grants the registration bonus points and the community
  badge once a new user has been committed
"""

from typing import Any, Callable, Optional

from codecollab.core.config import Settings, get_settings
from codecollab.core.hooks.hook_events import HookEvent
from codecollab.core.hooks.hook_registry import HookRegistry
from codecollab.core.logging import get_logger
from codecollab.domain.entities.hook_context import HookContext
from codecollab.domain.services.gamification_service import GamificationService
from codecollab.infrastructure.persistence.models import TransactionType

logger = get_logger(__name__)

WELCOME_BONUS_REASON = "Welcome bonus for joining CodeCollab"


def make_welcome_bonus_hook(bonus_points: int, badge_name: str) -> Callable:
    """Build the post-registration hook for the given bonus and badge.

    Args:
        bonus_points: Points granted as a BONUS transaction.
        badge_name: Name of the badge to award.

    Returns:
        Async hook callback.
    """

    async def welcome_bonus_hook(
        event: str,
        data: Optional[dict[str, Any]],
        context: Optional[HookContext],
    ) -> None:
        """Grant the welcome bonus and badge, then commit them.

        Raises:
            ValueError: If the context carries no session or no user.
        """
        if context is None or context.session is None or not context.user_id:
            raise ValueError("welcome bonus hook needs a session and a user_id")

        session = context.session
        gamification = GamificationService(session)

        if bonus_points:
            await gamification.award_points(
                context.user_id,
                bonus_points,
                WELCOME_BONUS_REASON,
                TransactionType.BONUS,
            )
        await gamification.award_badge(context.user_id, badge_name)
        await session.commit()

        logger.debug(
            "Welcome bonus granted",
            user_id=context.user_id,
            points=bonus_points,
            badge_name=badge_name,
        )

    return welcome_bonus_hook


def register_builtin_hooks(
    registry: HookRegistry, settings: Settings | None = None
) -> list[str]:
    """Register all built-in hooks.

    Built-in hooks are registered with ``is_builtin=True`` and a high
    priority so they run before any user hooks.

    Args:
        registry: The HookRegistry to register hooks with.
        settings: Source of the bonus amount and badge name.

    Returns:
        List of registered hook IDs.
    """
    if settings is None:
        settings = get_settings()

    hook_ids = [
        registry.register(
            event=HookEvent.ON_AUTH_AFTER_REGISTER,
            callback=make_welcome_bonus_hook(
                settings.welcome_bonus_points, settings.welcome_badge_name
            ),
            priority=100,
            is_builtin=True,
            tags={"name": "welcome_bonus"},
        )
    ]

    logger.info("Built-in hooks registered", count=len(hook_ids))
    return hook_ids
