"""Domain services for CodeCollab.

Validators and the ownership policy are pure; the services orchestrate the
repositories for a single request-scoped session. Import services from
their modules.
"""

from codecollab.domain.services.identity_validator import (
    LoginInput,
    RegistrationInput,
    validate_login,
    validate_registration,
)
from codecollab.domain.services.ownership_policy import (
    OwnershipPolicy,
    can_read,
    can_write,
)
from codecollab.domain.services.password_validator import (
    PasswordValidator,
    default_password_validator,
)
from codecollab.domain.services.snippet_validator import (
    SnippetCreateInput,
    SnippetQuery,
    SnippetUpdateInput,
    validate_snippet_create,
    validate_snippet_query,
    validate_snippet_update,
)

__all__ = [
    "LoginInput",
    "OwnershipPolicy",
    "PasswordValidator",
    "RegistrationInput",
    "SnippetCreateInput",
    "SnippetQuery",
    "SnippetUpdateInput",
    "can_read",
    "can_write",
    "default_password_validator",
    "validate_login",
    "validate_registration",
    "validate_snippet_create",
    "validate_snippet_query",
    "validate_snippet_update",
]
