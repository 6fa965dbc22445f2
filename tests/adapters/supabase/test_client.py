"""
Testes do cliente REST do backend hospedado.

Usa httpx.MockTransport para inspecionar as requisições.

Coverage:
- select/insert/update/delete: caminho, filtros, ordem, headers
- Storage: upload, URL pública, remoção
- Erros: rede e não-2xx viram RepositoryError/IntegrationError
"""

import json

import httpx
import pytest

from painel.adapters.supabase.client import SupabaseRestClient
from painel.core.shared.exceptions import IntegrationError, RepositoryError


class Registro:
    """Transporte que registra as requisições e responde com `responder`."""

    def __init__(self, responder):
        self.requisicoes = []
        self.responder = responder

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requisicoes.append(request)
        return self.responder(request)


def _client(responder):
    registro = Registro(responder)
    client = SupabaseRestClient(
        "https://proj.supabase.co/",
        "service-key",
        transport=httpx.MockTransport(registro),
    )
    return client, registro


class TestTabelas:

    def test_select_com_filtro_ordem_e_single(self):
        client, registro = _client(lambda r: httpx.Response(200, json=[{"id": 1}]))

        row = client.select(
            "instalacoes", filtros={"id": "1"}, ordem=("created_at", False), single=True
        )

        request = registro.requisicoes[0]
        assert row == {"id": 1}
        assert request.method == "GET"
        assert request.url.path == "/rest/v1/instalacoes"
        assert request.url.params["id"] == "eq.1"
        assert request.url.params["order"] == "created_at.desc"
        assert request.url.params["limit"] == "1"
        assert request.url.params["select"] == "*"
        assert request.headers["apikey"] == "service-key"
        assert request.headers["Authorization"] == "Bearer service-key"

    def test_select_single_sem_linhas(self):
        client, _ = _client(lambda r: httpx.Response(200, json=[]))

        assert client.select("instalacoes", filtros={"id": "9"}, single=True) is None

    def test_insert_pede_representacao(self):
        client, registro = _client(
            lambda r: httpx.Response(201, json=[{"id": 7, "dominio": "a.com"}])
        )

        row = client.insert("instalacoes", {"dominio": "a.com"})

        request = registro.requisicoes[0]
        assert row["id"] == 7
        assert request.method == "POST"
        assert request.headers["Prefer"] == "return=representation"
        assert json.loads(request.content) == {"dominio": "a.com"}

    def test_insert_sem_retorno(self):
        client, _ = _client(lambda r: httpx.Response(201, json=[]))

        with pytest.raises(RepositoryError):
            client.insert("instalacoes", {"dominio": "a.com"})

    def test_update_filtra_por_id(self):
        client, registro = _client(lambda r: httpx.Response(200, json=[{"id": 7}]))

        client.update("instalacoes", {"status": "finalizado"}, {"id": "7"})

        request = registro.requisicoes[0]
        assert request.method == "PATCH"
        assert request.url.params["id"] == "eq.7"
        assert json.loads(request.content) == {"status": "finalizado"}

    def test_update_e_delete_exigem_filtro(self):
        client, registro = _client(lambda r: httpx.Response(200, json=[]))

        with pytest.raises(RepositoryError):
            client.update("instalacoes", {"status": "x"}, {})
        with pytest.raises(RepositoryError):
            client.delete("instalacoes", {})
        assert registro.requisicoes == []

    def test_delete_resposta_vazia(self):
        client, registro = _client(lambda r: httpx.Response(204))

        client.delete("instalacoes", {"id": "7"})

        assert registro.requisicoes[0].method == "DELETE"

    def test_erro_http_vira_repository_error(self):
        client, _ = _client(
            lambda r: httpx.Response(409, json={"message": "duplicate key value"})
        )

        with pytest.raises(RepositoryError) as exc_info:
            client.insert("instalacoes", {"dominio": "a.com"})

        assert exc_info.value.status_code == 409
        assert exc_info.value.message == "duplicate key value"

    def test_erro_de_rede(self):
        def falhar(request):
            raise httpx.ConnectError("conexão recusada", request=request)

        client, _ = _client(falhar)

        with pytest.raises(RepositoryError) as exc_info:
            client.select("instalacoes")

        assert exc_info.value.status_code is None


class TestStorage:

    def test_upload(self):
        client, registro = _client(lambda r: httpx.Response(200, json={"Key": "x"}))

        caminho = client.storage_upload("instalacoes", "1-a.png", b"conteudo", "image/png")

        request = registro.requisicoes[0]
        assert caminho == "1-a.png"
        assert request.url.path == "/storage/v1/object/instalacoes/1-a.png"
        assert request.headers["Content-Type"] == "image/png"
        assert request.content == b"conteudo"

    def test_url_publica(self):
        client, _ = _client(lambda r: httpx.Response(200))

        assert client.storage_public_url("instalacoes", "1-a b.png") == (
            "https://proj.supabase.co/storage/v1/object/public/instalacoes/1-a%20b.png"
        )

    def test_remove_envia_prefixos(self):
        client, registro = _client(lambda r: httpx.Response(200, json=[]))

        client.storage_remove("instalacoes", ["1-a.png"])

        request = registro.requisicoes[0]
        assert request.method == "DELETE"
        assert request.url.path == "/storage/v1/object/instalacoes"
        assert json.loads(request.content) == {"prefixes": ["1-a.png"]}

    def test_erro_no_storage_vira_integration_error(self):
        client, _ = _client(lambda r: httpx.Response(413, text="Payload too large"))

        with pytest.raises(IntegrationError) as exc_info:
            client.storage_upload("instalacoes", "1-a.png", b"x")

        assert exc_info.value.service == "storage"
        assert exc_info.value.status_code == 413
        assert exc_info.value.message == "Payload too large"

    def test_configurado(self):
        assert SupabaseRestClient("https://x", "k").configurado
        assert not SupabaseRestClient("", "").configurado
