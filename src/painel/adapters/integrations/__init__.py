"""Clientes HTTP de serviços externos (backend de email, n8n)."""

from .notificador import HttpNotificador
from .n8n import N8nWorkflowClient

__all__ = ["HttpNotificador", "N8nWorkflowClient"]
