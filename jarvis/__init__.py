"""Jarvis: service bootstrap for the Jarvis AI assistant backend.

This package currently provides:
- Environment-driven configuration
- Structured logging
- PostgreSQL/Redis connection bundle
- HTTP-classified application errors
- Process lifecycle with graceful shutdown on SIGINT/SIGTERM
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
