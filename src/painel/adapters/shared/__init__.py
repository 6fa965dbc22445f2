"""Componentes de infraestrutura compartilhados entre adapters."""

from .unit_of_work import RemoteUnitOfWork, InMemoryUnitOfWork

__all__ = ["RemoteUnitOfWork", "InMemoryUnitOfWork"]
