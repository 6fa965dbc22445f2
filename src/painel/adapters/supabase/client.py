"""
Cliente HTTP do backend hospedado (Supabase).

Fala diretamente com as APIs REST:
- PostgREST em /rest/v1/<tabela> (select/insert/update/delete)
- Storage em /storage/v1/object/... (upload/URL pública/remoção)

Uma tentativa por chamada, sem retry. Erros de rede ou respostas
não-2xx viram RepositoryError (tabelas) ou IntegrationError (storage).
"""

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import httpx

from painel.core.shared.exceptions import IntegrationError, RepositoryError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class SupabaseRestClient:
    """
    Cliente síncrono para o REST do Supabase.

    Attributes:
        base_url: URL do projeto (ex: https://xyz.supabase.co)
        api_key: Chave de serviço (service role) ou anon key

    Example:
        client = SupabaseRestClient(url, key)
        rows = client.select("instalacoes", ordem=("created_at", False))
        client.update("instalacoes", {"status": "finalizado"}, {"id": "42"})
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = (base_url or "").rstrip("/")
        self.api_key = api_key or ""
        self._http = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "apikey": self.api_key,
                "Authorization": f"Bearer {self.api_key}",
            },
        )

    @property
    def configurado(self) -> bool:
        return bool(self.base_url and self.api_key)

    def close(self) -> None:
        self._http.close()

    # -------------------------------------------------------------------------
    # Tabelas (PostgREST)
    # -------------------------------------------------------------------------

    def select(
        self,
        tabela: str,
        filtros: Optional[Dict[str, Any]] = None,
        ordem: Optional[Tuple[str, bool]] = None,
        limit: Optional[int] = None,
        single: bool = False,
        colunas: str = "*",
    ):
        """
        Consulta linhas.

        Args:
            tabela: Nome da tabela
            filtros: Igualdades coluna → valor
            ordem: (coluna, ascendente)
            limit: Máximo de linhas
            single: Retorna a primeira linha (ou None) em vez da lista
            colunas: Projeção do select

        Returns:
            Lista de linhas, ou dict/None quando single=True

        Raises:
            RepositoryError: Falha de rede ou resposta não-2xx
        """
        params = {"select": colunas, **self._filtros(filtros)}
        if ordem:
            coluna, ascendente = ordem
            params["order"] = f"{coluna}.{'asc' if ascendente else 'desc'}"
        if single:
            limit = 1
        if limit is not None:
            params["limit"] = str(limit)

        linhas = self._tabela("GET", tabela, params=params) or []
        if single:
            return linhas[0] if linhas else None
        return linhas

    def insert(self, tabela: str, dados: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insere uma linha e devolve a representação gravada
        (com id e created_at gerados pelo banco).
        """
        linhas = self._tabela(
            "POST",
            tabela,
            json=dados,
            headers={"Prefer": "return=representation"},
        )
        if not linhas:
            raise RepositoryError(f"Insert em {tabela} não retornou a linha criada")
        return linhas[0]

    def update(
        self,
        tabela: str,
        dados: Dict[str, Any],
        filtros: Dict[str, Any],
    ) -> List[Dict[str, Any]]:
        """Atualiza as linhas que casam com os filtros."""
        if not filtros:
            raise RepositoryError("Update sem filtro não é permitido")
        return self._tabela(
            "PATCH",
            tabela,
            params=self._filtros(filtros),
            json=dados,
            headers={"Prefer": "return=representation"},
        ) or []

    def delete(self, tabela: str, filtros: Dict[str, Any]) -> None:
        """Remove as linhas que casam com os filtros."""
        if not filtros:
            raise RepositoryError("Delete sem filtro não é permitido")
        self._tabela("DELETE", tabela, params=self._filtros(filtros))

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    def storage_upload(
        self,
        bucket: str,
        path: str,
        conteudo: bytes,
        content_type: Optional[str] = None,
    ) -> str:
        """Envia um objeto e devolve o caminho gravado."""
        self._storage(
            "POST",
            f"/storage/v1/object/{bucket}/{quote(path)}",
            content=conteudo,
            headers={
                "Content-Type": content_type or "application/octet-stream",
                "x-upsert": "false",
            },
        )
        return path

    def storage_public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{quote(path)}"

    def storage_remove(self, bucket: str, paths: List[str]) -> None:
        """Remove objetos de um bucket."""
        self._storage(
            "DELETE",
            f"/storage/v1/object/{bucket}",
            json={"prefixes": list(paths)},
        )

    # -------------------------------------------------------------------------
    # Internos
    # -------------------------------------------------------------------------

    @staticmethod
    def _filtros(filtros: Optional[Dict[str, Any]]) -> Dict[str, str]:
        return {coluna: f"eq.{valor}" for coluna, valor in (filtros or {}).items()}

    def _tabela(self, metodo: str, tabela: str, **kwargs):
        try:
            response = self._http.request(metodo, f"/rest/v1/{tabela}", **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Falha de rede em {metodo} {tabela}: {e}")
            raise RepositoryError(f"Falha de comunicação com o banco: {e}")

        if response.is_error:
            mensagem = _mensagem_erro(response)
            logger.warning(f"{metodo} {tabela} retornou {response.status_code}: {mensagem}")
            raise RepositoryError(mensagem, status_code=response.status_code)

        if not response.content:
            return None
        return response.json()

    def _storage(self, metodo: str, caminho: str, **kwargs) -> httpx.Response:
        try:
            response = self._http.request(metodo, caminho, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Falha de rede no storage ({metodo} {caminho}): {e}")
            raise IntegrationError(f"Falha de comunicação com o storage: {e}", service="storage")

        if response.is_error:
            mensagem = _mensagem_erro(response)
            logger.warning(f"Storage {metodo} {caminho} retornou {response.status_code}: {mensagem}")
            raise IntegrationError(mensagem, service="storage", status_code=response.status_code)

        return response


def _mensagem_erro(response: httpx.Response) -> str:
    """Extrai a mensagem de erro do corpo (PostgREST/Storage usam "message")."""
    try:
        corpo = response.json()
    except ValueError:
        return response.text[:200] or f"HTTP {response.status_code}"
    if isinstance(corpo, dict):
        return str(corpo.get("message") or corpo.get("error") or corpo)
    return str(corpo)
