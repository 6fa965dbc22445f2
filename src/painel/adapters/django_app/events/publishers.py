"""
Event Publishers - Publicadores de Eventos de Domínio.

Implementações:
- LocalEventPublisher: Executa os handlers inline (modo "sync")
- CeleryEventPublisher: Enfileira em Celery (modo "celery")
- InMemoryEventPublisher: Para testes

Todos devolvem um EfeitoResultado por efeito executado ou enfileirado.
"""

from typing import Callable, Dict, List, Optional
import json
import logging

from kombu.exceptions import KombuError

from painel.core.instalacoes.handlers import ManipuladoresInstalacao
from painel.core.notificacoes.entities import TipoNotificacao
from painel.core.shared.context import ContextoOperador
from painel.core.shared.events import DomainEvent
from painel.core.shared.interfaces import EfeitoResultado, EventPublisher

logger = logging.getLogger(__name__)


# Aviso exibido quando não foi possível nem enfileirar o email
AVISOS_ENFILEIRAMENTO: Dict[str, str] = {
    "InstalacaoCriadaEvent": TipoNotificacao.NOVA_INSTALACAO.aviso_falha,
    "InstalacaoFinalizadaEvent": TipoNotificacao.INSTALACAO_FINALIZADA.aviso_falha,
}


class LocalEventPublisher(EventPublisher):
    """
    Publisher síncrono.

    Loga o evento e executa os handlers na própria requisição,
    devolvendo os resultados para o use case.
    """

    def __init__(self, manipuladores: ManipuladoresInstalacao, log_level: int = logging.INFO):
        self._manipuladores = manipuladores
        self._log_level = log_level

    def publish(
        self,
        event: DomainEvent,
        contexto: Optional[ContextoOperador] = None,
    ) -> List[EfeitoResultado]:
        logger.log(
            self._log_level,
            f"[EVENT] {event.event_type} | "
            f"aggregate={event.aggregate_id} | "
            f"data={json.dumps(event.to_dict()['data'], default=str)}"
        )

        try:
            return self._manipuladores.manipular(event, contexto)
        except Exception as e:
            logger.error(f"Erro em handler para {event.event_type}: {e}", exc_info=True)
            return [
                EfeitoResultado(
                    event.event_type,
                    False,
                    str(e),
                    aviso_operador=AVISOS_ENFILEIRAMENTO.get(event.event_type),
                )
            ]


class CeleryEventPublisher(EventPublisher):
    """
    Publisher que envia eventos para Celery.

    O resultado informa apenas o enfileiramento; falhas no worker
    ficam no log do worker.
    """

    def __init__(self, also_log: bool = True):
        self._also_log = also_log

    def publish(
        self,
        event: DomainEvent,
        contexto: Optional[ContextoOperador] = None,
    ) -> List[EfeitoResultado]:
        if self._also_log:
            logger.info(
                f"[EVENT->CELERY] {event.event_type} | "
                f"aggregate={event.aggregate_id}"
            )

        from painel.adapters.django_app.events.handlers import dispatch_domain_event

        try:
            dispatch_domain_event.delay(
                event.event_type,
                event.to_dict(),
                contexto.access_token if contexto else None,
                contexto.operador_id if contexto else None,
            )
        except KombuError as e:
            logger.error(f"Falha ao publicar evento no Celery: {e}", exc_info=True)
            return [
                EfeitoResultado(
                    event.event_type,
                    False,
                    f"falha ao enfileirar: {e}",
                    aviso_operador=AVISOS_ENFILEIRAMENTO.get(event.event_type),
                )
            ]

        return [EfeitoResultado(event.event_type, True, "enfileirado")]


class InMemoryEventPublisher(EventPublisher):
    """
    Publisher em memória para testes.

    Armazena eventos publicados e executa handlers registrados.
    """

    def __init__(self, manipuladores: Optional[ManipuladoresInstalacao] = None):
        self._published_events: List[DomainEvent] = []
        self._manipuladores = manipuladores
        self._handlers: Dict[str, List[Callable]] = {}

    def publish(
        self,
        event: DomainEvent,
        contexto: Optional[ContextoOperador] = None,
    ) -> List[EfeitoResultado]:
        self._published_events.append(event)

        resultados: List[EfeitoResultado] = []
        if self._manipuladores is not None:
            resultados.extend(self._manipuladores.manipular(event, contexto))
        for handler in self._handlers.get(event.event_type, []):
            resultados.extend(handler(event, contexto) or [])
        return resultados

    def register_handler(
        self,
        event_type: str,
        handler: Callable[[DomainEvent, Optional[ContextoOperador]], List[EfeitoResultado]],
    ) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    @property
    def published_events(self) -> List[DomainEvent]:
        return self._published_events.copy()

    def get_events_by_type(self, event_type: str) -> List[DomainEvent]:
        return [e for e in self._published_events if e.event_type == event_type]

    def clear(self) -> None:
        self._published_events.clear()
