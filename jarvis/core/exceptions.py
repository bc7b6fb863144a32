"""
Jarvis - Custom Exceptions

All service exceptions derive from JarvisError so callers can catch the
whole family without shadowing builtins like ConnectionError.
"""


class JarvisError(Exception):
    """Base exception for Jarvis.

    All custom exceptions inherit from this base class.
    """
    pass


class ConfigurationError(JarvisError):
    """Raised when configuration is invalid or missing."""
    pass


class AppInitializationError(JarvisError):
    """Raised when the application cannot be constructed."""
    pass


class DatabaseConnectionError(JarvisError):
    """Raised when PostgreSQL or Redis cannot be reached or configured.

    The underlying driver error is always chained as __cause__.
    """
    pass
