"""
Domain Events do Domínio de Instalações.

Eventos:
- InstalacaoCriadaEvent: Novo pedido registrado
- InstalacaoStatusAlteradoEvent: Cartão mudou de coluna
- InstalacaoFinalizadaEvent: Cartão entrou em "finalizado"
- InstalacaoAtualizadaEvent: Edição manual de campos
- InstalacaoExcluidaEvent: Pedido removido

Uso:
    Eventos são publicados pelo UnitOfWork somente depois que a
    escrita no banco foi bem-sucedida. Os handlers executam os
    efeitos best-effort (email, limpeza do storage).

    with uow.com_contexto(contexto):
        repo.update(instalacao.id, mudanca.campos)
        uow.publish_event(InstalacaoFinalizadaEvent(...))
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from painel.core.shared.events import DomainEvent


@dataclass
class InstalacaoCriadaEvent(DomainEvent):
    """
    Evento: Pedido de instalação criado.

    Handlers:
    - Enviar email "Nova instalação registrada"

    Attributes:
        dominio: Domínio do cliente
        telefone: Telefone de contato
        prioridade: normal | urgente
        coletar_acessos: Flag inicial
        operador_id: Quem criou
    """

    dominio: str = ""
    telefone: Optional[str] = None
    prioridade: str = "normal"
    coletar_acessos: bool = False
    operador_id: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Instalacao"


@dataclass
class InstalacaoStatusAlteradoEvent(DomainEvent):
    """
    Evento: Cartão mudou de coluna.

    Apenas registrado em log; os efeitos da finalização têm evento próprio.

    Attributes:
        de_status: Coluna anterior
        para_status: Nova coluna
        coletar_acessos_limpo: Se a transição limpou `coletar_acessos`
        operador_id: Quem moveu
    """

    de_status: str = ""
    para_status: str = ""
    coletar_acessos_limpo: bool = False
    operador_id: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Instalacao"


@dataclass
class InstalacaoFinalizadaEvent(DomainEvent):
    """
    Evento: Instalação finalizada.

    Handlers:
    - Remover do storage cada anexo referenciado no momento da transição
    - Enviar email "Instalação finalizada"

    Attributes:
        dominio: Domínio do cliente
        telefone: Telefone de contato
        urls_arquivos: URLs públicas dos anexos no momento da transição
        operador_id: Quem finalizou
    """

    dominio: str = ""
    telefone: Optional[str] = None
    urls_arquivos: List[str] = field(default_factory=list)
    operador_id: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Instalacao"

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "dominio": self.dominio,
            "telefone": self.telefone,
            "urls_arquivos": list(self.urls_arquivos),
            "operador_id": self.operador_id,
        }


@dataclass
class InstalacaoAtualizadaEvent(DomainEvent):
    """
    Evento: Campos editados manualmente.

    Attributes:
        campos_alterados: Nomes dos campos enviados no update
        operador_id: Quem editou
    """

    campos_alterados: List[str] = field(default_factory=list)
    operador_id: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Instalacao"

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "campos_alterados": list(self.campos_alterados),
            "operador_id": self.operador_id,
        }


@dataclass
class InstalacaoExcluidaEvent(DomainEvent):
    """
    Evento: Pedido removido (hard delete).

    Os anexos não são removidos do storage.

    Attributes:
        dominio: Domínio do pedido removido
        operador_id: Quem removeu
    """

    dominio: str = ""
    operador_id: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Instalacao"
