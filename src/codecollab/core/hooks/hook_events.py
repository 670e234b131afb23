"""Hook event definitions.

Adding new events is non-breaking; renaming or removing one breaks every
hook registered against it.
"""


class HookEvent:
    """Hook event names.

    ``after_*`` events fire once the triggering operation has committed.
    Their failures are logged and never propagate to the caller.
    """

    # App Lifecycle Events
    ON_BOOTSTRAP = "on_bootstrap"
    ON_TERMINATE = "on_terminate"

    # Auth Operations
    ON_AUTH_AFTER_REGISTER = "on_auth_after_register"
    ON_AUTH_AFTER_LOGIN = "on_auth_after_login"


def get_all_events() -> list[str]:
    """Get all available hook event names."""
    return [
        value
        for name, value in vars(HookEvent).items()
        if not name.startswith("_") and isinstance(value, str)
    ]
