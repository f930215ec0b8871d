"""
Core Interfaces Module

Abstract interfaces (ports) shared by every domain. Following the
Dependency Inversion Principle, use cases depend on these abstractions
rather than concrete implementations.
"""

from app.core.interfaces.repository import IRepository

__all__ = [
    "IRepository",
]
