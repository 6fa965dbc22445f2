"""
Repositório de Instalações sobre o REST do banco hospedado.

Implementa o port InstalacaoRepository definido no Core.
É um DRIVEN ADAPTER: acionado pelos use cases.

Princípios:
- Repository não contém lógica de negócio
- Usa Mapper para conversões
- Cada operação é uma única requisição (sem transação multi-linha)
"""

from typing import Any, Dict, List, Optional
import logging

from painel.core.instalacoes.entities import InstalacaoEntity
from painel.core.shared.exceptions import RepositoryError

from .client import SupabaseRestClient
from .mappers import InstalacaoMapper

logger = logging.getLogger(__name__)

TABELA_INSTALACOES = "instalacoes"


class SupabaseInstalacaoRepository:
    """
    Implementação REST do InstalacaoRepository.

    Example:
        repo = SupabaseInstalacaoRepository(SupabaseRestClient(url, key))
        instalacao = repo.create(InstalacaoEntity.criar(dominio="cliente.com"))
        repo.update(instalacao.id, {"status": "em_andamento"})
    """

    def __init__(self, client: SupabaseRestClient, tabela: str = TABELA_INSTALACOES):
        self.client = client
        self.tabela = tabela
        self._mapper = InstalacaoMapper()

    def create(self, instalacao: InstalacaoEntity) -> InstalacaoEntity:
        row = self.client.insert(self.tabela, self._mapper.to_row(instalacao))
        criada = self._mapper.to_entity(row)
        logger.debug(f"Instalação inserida: {criada.id}")
        return criada

    def get_by_id(self, instalacao_id: str) -> Optional[InstalacaoEntity]:
        row = self.client.select(self.tabela, filtros={"id": instalacao_id}, single=True)
        return self._mapper.to_entity(row) if row else None

    def update(self, instalacao_id: str, campos: Dict[str, Any]) -> None:
        linhas = self.client.update(self.tabela, campos, filtros={"id": instalacao_id})
        if not linhas:
            # PostgREST responde 200 com lista vazia quando nenhuma linha casa
            raise RepositoryError(
                f"Instalação {instalacao_id} não foi atualizada (linha inexistente)",
                status_code=404,
            )

    def delete(self, instalacao_id: str) -> None:
        self.client.delete(self.tabela, filtros={"id": instalacao_id})

    def list_all(self) -> List[InstalacaoEntity]:
        rows = self.client.select(self.tabela, ordem=("created_at", False))
        return self._mapper.to_entity_list(rows)
