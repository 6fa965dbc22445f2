"""
Testes do cliente da API de workflows (n8n).

Coverage:
- GET /api/v1/workflows/<id> com X-N8N-API-KEY
- Status de erro preservado
- Falha de rede e resposta não-JSON
"""

import httpx
import pytest

from painel.adapters.integrations.n8n import N8nWorkflowClient
from painel.core.shared.exceptions import IntegrationError


def _client(handler):
    return N8nWorkflowClient(
        "https://n8n.hublabel.test/",
        "chave",
        "wf-1",
        transport=httpx.MockTransport(handler),
    )


class TestN8nWorkflowClient:

    def test_busca_workflow(self):
        requisicoes = []

        def handler(request):
            requisicoes.append(request)
            return httpx.Response(200, json={"id": "wf-1", "nodes": []})

        documento = _client(handler).obter_workflow()

        assert documento == {"id": "wf-1", "nodes": []}
        assert str(requisicoes[0].url) == "https://n8n.hublabel.test/api/v1/workflows/wf-1"
        assert requisicoes[0].headers["X-N8N-API-KEY"] == "chave"

    def test_status_de_erro_preservado(self):
        client = _client(lambda r: httpx.Response(401, json={"message": "unauthorized"}))

        with pytest.raises(IntegrationError) as exc_info:
            client.obter_workflow()

        assert exc_info.value.status_code == 401
        assert exc_info.value.message.startswith("n8n retornou 401")

    def test_falha_de_rede(self):
        def handler(request):
            raise httpx.ConnectError("recusado", request=request)

        with pytest.raises(IntegrationError) as exc_info:
            _client(handler).obter_workflow()

        assert exc_info.value.message == "Falha ao buscar link do n8n."
        assert exc_info.value.status_code is None

    def test_resposta_nao_json(self):
        client = _client(lambda r: httpx.Response(200, text="<html>"))

        with pytest.raises(IntegrationError):
            client.obter_workflow()

    def test_configurado(self):
        assert _client(lambda r: httpx.Response(200)).configurado
        assert not N8nWorkflowClient("https://n8n", "", "wf").configurado
