"""CodeCollab - share and review code snippets.

REST backend providing registration, login, token-based access control
and ownership-scoped snippet management.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
