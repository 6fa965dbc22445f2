"""
Shared Domain Components.

Contém componentes compartilhados entre todos os domínios:
- Exceções de domínio
- Interfaces (Ports)
- Base classes para Domain Events
- Contexto explícito do operador
"""

from .exceptions import (
    DomainException,
    ValidationError,
    EntityNotFoundError,
    BusinessRuleViolationError,
    RepositoryError,
    IntegrationError,
)
from .events import DomainEvent
from .context import ContextoOperador
from .interfaces import UnitOfWork, EventPublisher, EfeitoResultado

__all__ = [
    "DomainException",
    "ValidationError",
    "EntityNotFoundError",
    "BusinessRuleViolationError",
    "RepositoryError",
    "IntegrationError",
    "DomainEvent",
    "ContextoOperador",
    "UnitOfWork",
    "EventPublisher",
    "EfeitoResultado",
]
