"""
==============================================================================
Core Package
==============================================================================

Core utilities and infrastructure for the application.

Modules:
--------
- exceptions: AppException class and error factory functions
- security: SecurityManager for auth operations
- context: OperatorContext passed into services
- dependencies: FastAPI dependency injection functions

Usage:
------
    from dashboard.core import exceptions
    raise exceptions.product_not_found(product_id)

==============================================================================
"""

from .exceptions import AppException, register_exception_handlers
from .security import SecurityManager, get_security_manager

__all__ = [
    "AppException",
    "register_exception_handlers",
    "SecurityManager",
    "get_security_manager",
]
