"""
Unit of Work - Implementações.

O banco hospedado executa cada escrita como uma atualização de
linha única, então não existe transação local a abrir. O Unit of
Work garante a ordem "escrita primeiro, efeitos depois":

- Eventos ficam enfileirados durante o bloco `with`
- Saída sem exceção: eventos são publicados e os resultados dos
  efeitos ficam em `uow.efeitos`
- Saída com exceção: eventos são descartados (nenhum efeito roda)
"""

from typing import List, Optional
import logging

from painel.core.shared.events import DomainEvent
from painel.core.shared.interfaces import EfeitoResultado, EventPublisher, UnitOfWork

logger = logging.getLogger(__name__)


class RemoteUnitOfWork(UnitOfWork):
    """
    Unit of Work para o banco remoto.

    Example:
        uow = RemoteUnitOfWork(event_publisher=publisher)
        with uow.com_contexto(contexto):
            repo.update(instalacao_id, campos)
            uow.publish_event(evento)
        # Eventos publicados aqui
        uow.efeitos

    Example com falha:
        with uow:
            repo.update(...)  # RepositoryError
        # Eventos descartados, exceção propagada
    """

    def __init__(self, event_publisher: Optional[EventPublisher] = None):
        """
        Args:
            event_publisher: Publicador de eventos (local ou Celery)
        """
        super().__init__()
        self._event_publisher = event_publisher

    def _begin(self) -> None:
        # Eventos de uma unidade anterior abortada não vazam
        self.clear_events()

    def commit(self) -> None:
        """
        Publica eventos enfileirados.

        Falhas do publisher são registradas e viram EfeitoResultado
        com sucesso=False; a escrita já aconteceu e não é desfeita.
        """
        eventos = self.collect_events()
        self.clear_events()

        efeitos: List[EfeitoResultado] = []
        for event in eventos:
            logger.info(
                f"Publishing event: {event.event_type} "
                f"for aggregate {event.aggregate_id}"
            )
            if not self._event_publisher:
                continue
            try:
                efeitos.extend(self._event_publisher.publish(event, self.contexto))
            except Exception as e:
                logger.error(f"Failed to publish event {event.event_type}: {e}", exc_info=True)
                efeitos.append(EfeitoResultado(event.event_type, False, str(e)))

        self._efeitos = efeitos

    def rollback(self) -> None:
        """Descarta eventos enfileirados."""
        if self._events:
            logger.debug(f"Discarding {len(self._events)} event(s) after failure")
        self.clear_events()


class InMemoryUnitOfWork(UnitOfWork):
    """
    Unit of Work em memória para testes.

    Guarda os eventos publicados e, se houver publisher,
    repassa para ele (útil para exercitar handlers reais).

    Example:
        uow = InMemoryUnitOfWork()
        with uow:
            uow.publish_event(event)

        assert uow.committed
        assert len(uow.published_events) == 1
    """

    def __init__(self, event_publisher: Optional[EventPublisher] = None):
        super().__init__()
        self._event_publisher = event_publisher
        self._committed = False
        self._rolled_back = False
        self._published_events: List[DomainEvent] = []

    def _begin(self) -> None:
        self.clear_events()

    def commit(self) -> None:
        self._committed = True
        eventos = self.collect_events()
        self.clear_events()
        self._published_events.extend(eventos)

        efeitos: List[EfeitoResultado] = []
        if self._event_publisher:
            for event in eventos:
                efeitos.extend(self._event_publisher.publish(event, self.contexto))
        self._efeitos = efeitos

    def rollback(self) -> None:
        self._rolled_back = True
        self.clear_events()

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def rolled_back(self) -> bool:
        return self._rolled_back

    @property
    def published_events(self) -> List[DomainEvent]:
        """Eventos que foram 'publicados'."""
        return self._published_events

    def events_of_type(self, event_type: str) -> List[DomainEvent]:
        return [e for e in self._published_events if e.event_type == event_type]

    def reset(self) -> None:
        """Reset para próximo teste."""
        self._committed = False
        self._rolled_back = False
        self._published_events.clear()
        self._efeitos = []
        self.clear_events()
