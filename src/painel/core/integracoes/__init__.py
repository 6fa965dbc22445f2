"""
Integrações com serviços externos que não pertencem ao kanban.
"""

from .anon_key import (
    ClienteAnonKeyRepository,
    InMemoryClienteAnonKeyRepository,
    InfoAnonKeyOutputDTO,
    ObterInfoAnonKeyService,
    SalvarAnonKeyService,
)
from .workflow import (
    encontrar_primeira_url,
    WorkflowGateway,
    LinkWorkflowOutputDTO,
    ObterLinkWorkflowService,
)

__all__ = [
    "ClienteAnonKeyRepository",
    "InMemoryClienteAnonKeyRepository",
    "InfoAnonKeyOutputDTO",
    "ObterInfoAnonKeyService",
    "SalvarAnonKeyService",
    "encontrar_primeira_url",
    "WorkflowGateway",
    "LinkWorkflowOutputDTO",
    "ObterLinkWorkflowService",
]
