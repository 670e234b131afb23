"""Hook context and result types for the hook system.

- HookContext: Context passed to all hook callbacks
- HookResult: Result of a hook trigger operation
"""

import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


@dataclass
class HookContext:
    """Context passed to all hook callbacks.

    Attributes:
        app: The FastAPI application instance, if available.
        session: Database session of the operation that fired the event.
            Hooks write through it and commit their own work.
        user_id: ID of the identity the event concerns.
        request_id: Correlation ID for logging and tracing.
    """

    app: Any = None
    session: Optional["AsyncSession"] = None
    user_id: Optional[str] = None
    request_id: str = ""

    def __post_init__(self) -> None:
        if not self.request_id:
            self.request_id = f"hk_{uuid.uuid4().hex[:12]}"


@dataclass
class HookResult:
    """Result of a hook trigger operation.

    Attributes:
        success: Whether all hooks executed successfully.
        errors: List of error messages from hooks that failed.
        data: Data returned by the last hook that returned a dict.
    """

    success: bool = True
    errors: list[str] = field(default_factory=list)
    data: Optional[dict[str, Any]] = None
