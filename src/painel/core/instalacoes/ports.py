"""
Ports (Interfaces) do Domínio de Instalações.

Define os contratos que os Adapters de infraestrutura devem implementar.

Tipos de Ports:
- InstalacaoRepository: CRUD na tabela remota "instalacoes"
- BlobStorage: upload/URL pública/remoção no storage de arquivos
- NotificadorInstalacao: chamada ao endpoint de email do backend

Princípio:
    Core define interfaces → Adapters implementam
    Dependências sempre apontam para o Core

Example:
    class SupabaseInstalacaoRepository:
        def get_by_id(self, instalacao_id):
            row = self.client.select("instalacoes", filtros={"id": instalacao_id}, single=True)
            return InstalacaoMapper.to_entity(row) if row else None
"""

import itertools
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from painel.core.shared.context import ContextoOperador
from painel.core.shared.exceptions import EntityNotFoundError
from painel.core.notificacoes.entities import TipoNotificacao

from .entities import InstalacaoEntity


@runtime_checkable
class InstalacaoRepository(Protocol):
    """
    Interface para persistência de Instalações.

    Cada escrita é uma única operação de linha no banco remoto;
    não há transação multi-linha.

    Implementações:
    - SupabaseInstalacaoRepository (REST do banco hospedado)
    - InMemoryInstalacaoRepository (para testes)

    Methods:
        create: Insere e devolve a entidade com id/created_at do banco
        get_by_id: Busca por ID
        update: Atualiza campos de uma linha
        delete: Remove linha
        list_all: Lista todas
    """

    def create(self, instalacao: InstalacaoEntity) -> InstalacaoEntity:
        """
        Insere nova instalação.

        Args:
            instalacao: Entidade sem id

        Returns:
            Entidade persistida (id e created_at atribuídos pelo banco)

        Raises:
            RepositoryError: Se falha na persistência
        """
        ...

    def get_by_id(self, instalacao_id: str) -> Optional[InstalacaoEntity]:
        """
        Busca instalação por ID.

        Returns:
            Entidade encontrada ou None se não existir

        Raises:
            RepositoryError: Se falha na consulta
        """
        ...

    def update(self, instalacao_id: str, campos: Dict[str, Any]) -> None:
        """
        Atualiza campos de uma instalação.

        Args:
            instalacao_id: ID da linha
            campos: Payload no formato persistido (ex: {"status": "finalizado"})

        Raises:
            RepositoryError: Se falha na persistência
        """
        ...

    def delete(self, instalacao_id: str) -> None:
        """
        Remove instalação (hard delete).

        Raises:
            RepositoryError: Se falha na persistência
        """
        ...

    def list_all(self) -> List[InstalacaoEntity]:
        """Lista todas as instalações (mais recentes primeiro)."""
        ...


@runtime_checkable
class BlobStorage(Protocol):
    """
    Interface para o storage de arquivos.

    Implementações:
    - SupabaseStorage (REST do storage hospedado)
    - InMemoryBlobStorage (para testes)
    """

    def upload(
        self,
        bucket: str,
        path: str,
        conteudo: bytes,
        content_type: Optional[str] = None,
    ) -> str:
        """
        Envia arquivo.

        Returns:
            Caminho gravado dentro do bucket

        Raises:
            IntegrationError: Se o upload falhar
        """
        ...

    def get_public_url(self, bucket: str, path: str) -> str:
        """URL pública de um objeto."""
        ...

    def remove(self, bucket: str, paths: List[str]) -> None:
        """
        Remove objetos.

        Raises:
            IntegrationError: Se a remoção falhar
        """
        ...


@runtime_checkable
class NotificadorInstalacao(Protocol):
    """
    Interface do despachante de notificações.

    Uma única tentativa, sem fila e sem retry.

    Implementações:
    - HttpNotificador (POST no endpoint de email do backend)
    - InMemoryNotificador (para testes)
    """

    @property
    def habilitado(self) -> bool:
        """False quando não há backend configurado (notificação é pulada)."""
        ...

    def notificar(
        self,
        tipo: TipoNotificacao,
        dominio: str,
        telefone: Optional[str] = None,
        contexto: Optional[ContextoOperador] = None,
    ) -> None:
        """
        Envia notificação.

        Raises:
            IntegrationError: Resposta não-2xx ou falha de rede
        """
        ...


class InMemoryInstalacaoRepository:
    """
    Implementação em memória do InstalacaoRepository.

    Útil para:
    - Testes unitários
    - Desenvolvimento local sem banco configurado

    Registra cada chamada em `chamadas` para verificar, por exemplo,
    que um movimento para a mesma coluna não toca o banco.

    Não usar em produção!
    """

    def __init__(self):
        self._instalacoes: Dict[str, InstalacaoEntity] = {}
        self._sequencia = itertools.count(1)
        self.chamadas: List[str] = []

    def create(self, instalacao: InstalacaoEntity) -> InstalacaoEntity:
        self.chamadas.append("create")
        if instalacao.id is None:
            instalacao.id = str(next(self._sequencia))
        if instalacao.created_at is None:
            instalacao.created_at = datetime.now(timezone.utc)
        self._instalacoes[instalacao.id] = _copiar(instalacao)
        return instalacao

    def add(self, instalacao: InstalacaoEntity) -> InstalacaoEntity:
        """Insere sem registrar chamada (preparação de cenário em testes)."""
        if instalacao.id is None:
            instalacao.id = str(next(self._sequencia))
        self._instalacoes[instalacao.id] = _copiar(instalacao)
        return instalacao

    def get_by_id(self, instalacao_id: str) -> Optional[InstalacaoEntity]:
        self.chamadas.append("get_by_id")
        instalacao = self._instalacoes.get(str(instalacao_id))
        return _copiar(instalacao) if instalacao else None

    def update(self, instalacao_id: str, campos: Dict[str, Any]) -> None:
        self.chamadas.append("update")
        instalacao = self._instalacoes.get(str(instalacao_id))
        if instalacao is None:
            raise EntityNotFoundError(
                f"Instalação {instalacao_id} não encontrada",
                entity_type="Instalacao",
                entity_id=str(instalacao_id),
            )
        instalacao.aplicar(campos)

    def delete(self, instalacao_id: str) -> None:
        self.chamadas.append("delete")
        self._instalacoes.pop(str(instalacao_id), None)

    def list_all(self) -> List[InstalacaoEntity]:
        self.chamadas.append("list_all")
        return [_copiar(i) for i in self._instalacoes.values()]

    def clear(self) -> None:
        """Limpa todos os dados (útil para testes)."""
        self._instalacoes.clear()
        self.chamadas.clear()


class InMemoryBlobStorage:
    """
    Storage em memória.

    Guarda os objetos por (bucket, path) e registra cada remoção
    em `remocoes` (uma entrada por chamada).
    """

    def __init__(self, base_url: str = "https://storage.local"):
        self.base_url = base_url.rstrip("/")
        self.objetos: Dict[tuple, bytes] = {}
        self.remocoes: List[tuple] = []

    def upload(self, bucket, path, conteudo, content_type=None) -> str:
        self.objetos[(bucket, path)] = conteudo
        return path

    def get_public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{path}"

    def remove(self, bucket: str, paths: List[str]) -> None:
        self.remocoes.append((bucket, list(paths)))
        for path in paths:
            self.objetos.pop((bucket, path), None)


class InMemoryNotificador:
    """Notificador em memória: registra as notificações enviadas."""

    def __init__(self, habilitado: bool = True):
        self._habilitado = habilitado
        self.enviadas: List[dict] = []

    @property
    def habilitado(self) -> bool:
        return self._habilitado

    def notificar(self, tipo, dominio, telefone=None, contexto=None) -> None:
        self.enviadas.append({
            "tipo": tipo,
            "dominio": dominio,
            "telefone": telefone,
            "operador_id": contexto.operador_id if contexto else None,
        })


def _copiar(instalacao: InstalacaoEntity) -> InstalacaoEntity:
    # Evita que o chamador altere o estado "persistido" sem passar por update()
    return InstalacaoEntity(
        id=instalacao.id,
        dominio=instalacao.dominio,
        telefone=instalacao.telefone,
        acessos=instalacao.acessos,
        status=instalacao.status,
        prioridade=instalacao.prioridade,
        coletar_acessos=instalacao.coletar_acessos,
        arquivos=list(instalacao.arquivos),
        created_at=instalacao.created_at,
    )
