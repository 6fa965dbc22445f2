"""
Cliente da API da ferramenta de automação (n8n).

GET <N8N_URL>/api/v1/workflows/<id> com header X-N8N-API-KEY.
"""

import logging
from typing import Any, Optional

import httpx

from painel.core.shared.exceptions import IntegrationError

logger = logging.getLogger(__name__)


class N8nWorkflowClient:
    """
    Implementação HTTP do WorkflowGateway.

    Example:
        client = N8nWorkflowClient("https://n8n.exemplo.com", "chave", "wf-123")
        documento = client.obter_workflow()
    """

    def __init__(
        self,
        base_url: Optional[str] = "",
        api_key: Optional[str] = "",
        workflow_id: Optional[str] = "",
        timeout: float = 15.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = (base_url or "").rstrip("/")
        self.api_key = api_key or ""
        self.workflow_id = workflow_id or ""
        self.timeout = timeout
        self._transport = transport

    @property
    def configurado(self) -> bool:
        return bool(self.base_url and self.api_key and self.workflow_id)

    def obter_workflow(self) -> Any:
        """
        Raises:
            IntegrationError: Falha de rede ou resposta não-2xx (status preservado)
        """
        url = f"{self.base_url}/api/v1/workflows/{self.workflow_id}"
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.get(url, headers={"X-N8N-API-KEY": self.api_key})
        except httpx.HTTPError as e:
            logger.error(f"Falha de rede ao buscar workflow n8n: {e}")
            raise IntegrationError("Falha ao buscar link do n8n.", service="n8n")

        if response.is_error:
            logger.error(f"n8n API error: {response.status_code} {response.text[:200]}")
            raise IntegrationError(
                f"n8n retornou {response.status_code}. Verifique URL, workflow ID e API key.",
                service="n8n",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError:
            logger.error("Resposta do n8n não é JSON")
            raise IntegrationError("Falha ao buscar link do n8n.", service="n8n")
