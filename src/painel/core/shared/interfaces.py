"""
Interfaces (Ports) - Contratos entre Core e Adapters.

Este módulo define as interfaces que os Adapters devem implementar.
São os "Ports" da Arquitetura Hexagonal.

Tipos de Ports:
- Driven Ports: UnitOfWork, EventPublisher
- Driving Ports: definidos nos Use Cases

Princípio: Core define interfaces; Adapters implementam.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from .context import ContextoOperador
from .events import DomainEvent


@dataclass(frozen=True)
class EfeitoResultado:
    """
    Resultado de um efeito colateral "best-effort".

    Cada handler executado (ou enfileirado) após uma escrita gera um
    resultado. Falhas nunca desfazem a escrita principal; quando devem
    ser mostradas ao operador, trazem `aviso_operador`.

    Attributes:
        nome: Nome do efeito (ex: "notificar_criacao")
        sucesso: Se o efeito foi concluído (ou enfileirado)
        mensagem: Detalhe para log
        aviso_operador: Mensagem de aviso para a interface (opcional)
    """

    nome: str
    sucesso: bool
    mensagem: str = ""
    aviso_operador: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "nome": self.nome,
            "sucesso": self.sucesso,
            "mensagem": self.mensagem,
            "aviso_operador": self.aviso_operador,
        }


class EventPublisher(ABC):
    """
    Interface para publicação de eventos.

    Adapters implementam para executar handlers localmente
    ou enfileirar em Celery.

    Example:
        class CeleryEventPublisher(EventPublisher):
            def publish(self, event, contexto=None):
                dispatch_domain_event.delay(event.event_type, event.to_dict())
                return [EfeitoResultado(event.event_type, True, "enfileirado")]
    """

    @abstractmethod
    def publish(
        self,
        event: DomainEvent,
        contexto: Optional[ContextoOperador] = None,
    ) -> List[EfeitoResultado]:
        """
        Publica evento para consumidores.

        Args:
            event: Evento de domínio a ser publicado
            contexto: Contexto do operador que originou o evento

        Returns:
            Resultados dos efeitos executados ou enfileirados
        """
        raise NotImplementedError


class UnitOfWork(ABC):
    """
    Unit of Work - Coordena uma operação e seus eventos.

    O banco remoto executa cada escrita como uma única atualização de
    linha; não há transação multi-tabela a coordenar. O papel do UoW
    aqui é garantir que eventos só sejam publicados se o bloco terminar
    sem exceção, e coletar o relatório dos efeitos colaterais.

    Pattern: Context Manager
        with uow.com_contexto(contexto):
            repo.update(instalacao_id, campos)
            uow.publish_event(evento)
        # Eventos publicados aqui
        resultados = uow.efeitos
    """

    def __init__(self):
        self._events: List[DomainEvent] = []
        self._efeitos: List[EfeitoResultado] = []
        self._contexto: Optional[ContextoOperador] = None

    def com_contexto(self, contexto: Optional[ContextoOperador]) -> "UnitOfWork":
        """Define o contexto do operador repassado aos handlers."""
        self._contexto = contexto
        return self

    def __enter__(self) -> "UnitOfWork":
        self._efeitos = []
        self._begin()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()
        return False  # Não suprime exceções

    @abstractmethod
    def _begin(self) -> None:
        """Inicia a unidade de trabalho."""
        raise NotImplementedError

    @abstractmethod
    def commit(self) -> None:
        """
        Finaliza com sucesso e publica eventos enfileirados.

        Os resultados dos handlers ficam disponíveis em `efeitos`.
        """
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        """Descarta eventos enfileirados (a escrita não aconteceu)."""
        raise NotImplementedError

    def publish_event(self, event: DomainEvent) -> None:
        """
        Enfileira evento para publicação após o commit.

        Args:
            event: Evento de domínio a ser publicado
        """
        self._events.append(event)

    def collect_events(self) -> List[DomainEvent]:
        """Retorna eventos enfileirados (para testing/debugging)."""
        return list(self._events)

    def clear_events(self) -> None:
        """Limpa fila de eventos."""
        self._events.clear()

    @property
    def efeitos(self) -> List[EfeitoResultado]:
        """Resultados dos efeitos colaterais da última unidade finalizada."""
        return list(self._efeitos)

    @property
    def contexto(self) -> Optional[ContextoOperador]:
        return self._contexto
