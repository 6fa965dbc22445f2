"""
Event Handlers - Tarefas Celery dos Domain Events.

Quando EVENT_PUBLISHER_MODE=celery, o Unit of Work enfileira cada
evento em `dispatch_domain_event`. O worker reidrata o evento e executa
os mesmos ManipuladoresInstalacao do modo síncrono.

Política: uma única tentativa (sem retry). Uma notificação que falha
no worker é registrada em log e perdida.

Padrão:
    dispatch_domain_event.delay(event_type, event.to_dict(), access_token, operador_id)
"""

import logging
from typing import Any, Dict, List, Optional, Type

from celery import shared_task

from painel.core.shared.context import ContextoOperador
from painel.core.shared.events import DomainEvent
from painel.core.instalacoes.events import (
    InstalacaoAtualizadaEvent,
    InstalacaoCriadaEvent,
    InstalacaoExcluidaEvent,
    InstalacaoFinalizadaEvent,
    InstalacaoStatusAlteradoEvent,
)

logger = logging.getLogger(__name__)


EVENT_CLASSES: Dict[str, Type[DomainEvent]] = {
    "InstalacaoCriadaEvent": InstalacaoCriadaEvent,
    "InstalacaoStatusAlteradoEvent": InstalacaoStatusAlteradoEvent,
    "InstalacaoFinalizadaEvent": InstalacaoFinalizadaEvent,
    "InstalacaoAtualizadaEvent": InstalacaoAtualizadaEvent,
    "InstalacaoExcluidaEvent": InstalacaoExcluidaEvent,
}


def reidratar_evento(event_type: str, event_data: Dict[str, Any]) -> Optional[DomainEvent]:
    """Reconstrói o evento serializado por DomainEvent.to_dict()."""
    event_class = EVENT_CLASSES.get(event_type)
    if event_class is None:
        return None
    return event_class.from_dict(event_data)


# =============================================================================
# Event Dispatcher (Router)
# =============================================================================

@shared_task(bind=True, max_retries=0, ignore_result=False)
def dispatch_domain_event(
    self,
    event_type: str,
    event_data: Dict[str, Any],
    access_token: Optional[str] = None,
    operador_id: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Dispatcher central para Domain Events.

    Args:
        event_type: Tipo do evento (ex: 'InstalacaoFinalizadaEvent')
        event_data: Evento serializado
        access_token: Token do operador que originou o evento
        operador_id: ID do operador

    Returns:
        Resultados dos efeitos serializados
    """
    event = reidratar_evento(event_type, event_data)
    if event is None:
        logger.warning(f"[DISPATCHER] Handler não encontrado para {event_type}")
        return []

    # Importação tardia para evitar circular import
    from painel.config.container import get_container

    contexto = ContextoOperador(
        operador_id=operador_id or "anonymous",
        access_token=access_token,
    )
    manipuladores = get_container().manipuladores_instalacao()

    logger.info(f"[DISPATCHER] Processando {event_type} ({event.aggregate_id})")
    resultados = manipuladores.manipular(event, contexto)

    for resultado in resultados:
        if resultado.sucesso:
            logger.info(f"[HANDLER] {resultado.nome}: {resultado.mensagem}")
        else:
            logger.error(
                f"[HANDLER] {resultado.nome} falhou para {event.aggregate_id}: "
                f"{resultado.mensagem}"
            )

    return [r.to_dict() for r in resultados]
