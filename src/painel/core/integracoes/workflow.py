"""
Descoberta do link de um workflow de automação.

O documento do workflow é um JSON arbitrário; o link procurado é a
primeira string (busca em profundidade) que seja uma URL http(s) e não
aponte para a própria ferramenta de automação.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

from painel.core.shared.exceptions import BusinessRuleViolationError


logger = logging.getLogger(__name__)

_PADRAO_URL = re.compile(r"https?://\S+")
MARCADOR_FERRAMENTA = "n8n"


def encontrar_primeira_url(documento: Any, ignorar: str = MARCADOR_FERRAMENTA) -> Optional[str]:
    """
    Busca em profundidade a primeira URL http(s) que não contenha `ignorar`.

    Listas são percorridas em ordem; dicionários na ordem de inserção
    das chaves.

    Example:
        encontrar_primeira_url({"nodes": [{"url": "https://x.n8n.io"}, {"u": "https://cdn/a.zip"}]})
        # "https://cdn/a.zip"
    """
    if isinstance(documento, str):
        if _PADRAO_URL.fullmatch(documento) and ignorar not in documento:
            return documento
        return None

    if isinstance(documento, dict):
        filhos = documento.values()
    elif isinstance(documento, (list, tuple)):
        filhos = documento
    else:
        return None

    for filho in filhos:
        encontrado = encontrar_primeira_url(filho, ignorar)
        if encontrado:
            return encontrado
    return None


@runtime_checkable
class WorkflowGateway(Protocol):
    """Interface da API da ferramenta de automação."""

    @property
    def configurado(self) -> bool:
        ...

    def obter_workflow(self) -> Any:
        """
        Busca o documento do workflow configurado.

        Raises:
            IntegrationError: Resposta não-2xx (status preservado) ou falha de rede
        """
        ...


@dataclass
class LinkWorkflowOutputDTO:
    link: Optional[str]

    def to_dict(self) -> dict:
        return {"link": self.link}


class ObterLinkWorkflowService:
    """
    Use Case: Descobrir o link publicado no workflow.

    Example:
        service = ObterLinkWorkflowService(N8nWorkflowClient(...))
        service.execute().link
    """

    def __init__(self, gateway: WorkflowGateway):
        self.gateway = gateway

    def execute(self) -> LinkWorkflowOutputDTO:
        """
        Raises:
            BusinessRuleViolationError: Integração não configurada
            IntegrationError: Falha na API de automação
        """
        if not self.gateway.configurado:
            raise BusinessRuleViolationError(
                "Backend não configurado para n8n. Defina N8N_URL, N8N_WORKFLOW_ID e N8N_API_KEY.",
                rule="workflow_nao_configurado",
            )

        documento = self.gateway.obter_workflow()
        link = encontrar_primeira_url(documento)

        if link is None:
            logger.info("Nenhum link encontrado no workflow")
        return LinkWorkflowOutputDTO(link=link)
