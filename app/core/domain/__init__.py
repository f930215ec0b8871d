"""
Domain Layer - Core DDD building blocks

This module provides base classes for Domain-Driven Design:
- Entities: Objects with identity and lifecycle
- Value Objects: Immutable objects compared by value
- Exceptions: Domain-specific error handling
"""

from app.core.domain.entities import (
    AggregateRoot,
    Entity,
    generate_uuid,
    generate_uuid_str,
    utcnow,
)
from app.core.domain.exceptions import (
    AuthorizationException,
    BusinessRuleViolationException,
    CarrierUnavailableException,
    DomainException,
    DuplicateEntityException,
    EntityNotFoundException,
    InsufficientStockException,
    IntegrationException,
    InvalidOperationException,
    InvalidTransitionException,
    PaymentException,
    ValidationException,
)
from app.core.domain.value_objects import (
    Address,
    Email,
    Money,
    StatusEnum,
    ValueObject,
)

__all__ = [
    # Entities
    "Entity",
    "AggregateRoot",
    "generate_uuid",
    "generate_uuid_str",
    "utcnow",
    # Value Objects
    "ValueObject",
    "Money",
    "Email",
    "Address",
    "StatusEnum",
    # Exceptions
    "DomainException",
    "ValidationException",
    "EntityNotFoundException",
    "BusinessRuleViolationException",
    "InsufficientStockException",
    "InvalidOperationException",
    "InvalidTransitionException",
    "AuthorizationException",
    "DuplicateEntityException",
    "IntegrationException",
    "PaymentException",
    "CarrierUnavailableException",
]
