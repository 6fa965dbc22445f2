"""
Handlers dos eventos de instalação (efeitos best-effort).

Executados depois que a escrita no banco foi bem-sucedida, seja
inline (publisher síncrono) ou num worker Celery. Nunca propagam
falhas: cada efeito vira um EfeitoResultado.

Efeitos:
- InstalacaoCriadaEvent → email "Nova instalação registrada"
- InstalacaoFinalizadaEvent → remover anexos do storage + email "Instalação finalizada"
- Demais eventos → apenas log
"""

import logging
from typing import Callable, Dict, List, Optional

from painel.core.shared.context import ContextoOperador
from painel.core.shared.events import DomainEvent
from painel.core.shared.exceptions import DomainException
from painel.core.shared.interfaces import EfeitoResultado
from painel.core.notificacoes.entities import TipoNotificacao

from .arquivos import GerenciadorArquivos
from .events import (
    InstalacaoCriadaEvent,
    InstalacaoFinalizadaEvent,
    InstalacaoStatusAlteradoEvent,
    InstalacaoAtualizadaEvent,
    InstalacaoExcluidaEvent,
)
from .ports import NotificadorInstalacao


logger = logging.getLogger(__name__)

EFEITO_NOTIFICAR_CRIACAO = "notificar_criacao"
EFEITO_NOTIFICAR_FINALIZACAO = "notificar_finalizacao"
EFEITO_REMOVER_ARQUIVOS = "remover_arquivos"


class ManipuladoresInstalacao:
    """
    Roteia eventos de instalação para seus efeitos.

    Attributes:
        notificador: Despachante de emails
        arquivos: Gerenciador de anexos

    Example:
        manipuladores = ManipuladoresInstalacao(notificador, gerenciador)
        resultados = manipuladores.manipular(evento, contexto)
    """

    def __init__(self, notificador: NotificadorInstalacao, arquivos: GerenciadorArquivos):
        self.notificador = notificador
        self.arquivos = arquivos
        self._rotas: Dict[str, Callable[..., List[EfeitoResultado]]] = {
            "InstalacaoCriadaEvent": self.ao_criar,
            "InstalacaoFinalizadaEvent": self.ao_finalizar,
            "InstalacaoStatusAlteradoEvent": self.ao_alterar_status,
            "InstalacaoAtualizadaEvent": self.ao_atualizar,
            "InstalacaoExcluidaEvent": self.ao_excluir,
        }

    def trata(self, event_type: str) -> bool:
        return event_type in self._rotas

    def manipular(
        self,
        event: DomainEvent,
        contexto: Optional[ContextoOperador] = None,
    ) -> List[EfeitoResultado]:
        """Executa os handlers registrados para o tipo do evento."""
        handler = self._rotas.get(event.event_type)
        if handler is None:
            logger.debug(f"Sem handler para {event.event_type}")
            return []
        return handler(event, contexto)

    def ao_criar(
        self,
        event: InstalacaoCriadaEvent,
        contexto: Optional[ContextoOperador] = None,
    ) -> List[EfeitoResultado]:
        logger.info(f"Instalação {event.aggregate_id} criada (dominio={event.dominio})")
        return [
            self._notificar(
                EFEITO_NOTIFICAR_CRIACAO,
                TipoNotificacao.NOVA_INSTALACAO,
                event.dominio,
                event.telefone,
                contexto,
            )
        ]

    def ao_finalizar(
        self,
        event: InstalacaoFinalizadaEvent,
        contexto: Optional[ContextoOperador] = None,
    ) -> List[EfeitoResultado]:
        logger.info(f"Instalação {event.aggregate_id} finalizada (dominio={event.dominio})")
        return [
            self._remover_arquivos(event),
            self._notificar(
                EFEITO_NOTIFICAR_FINALIZACAO,
                TipoNotificacao.INSTALACAO_FINALIZADA,
                event.dominio,
                event.telefone,
                contexto,
            ),
        ]

    def ao_alterar_status(
        self,
        event: InstalacaoStatusAlteradoEvent,
        contexto: Optional[ContextoOperador] = None,
    ) -> List[EfeitoResultado]:
        logger.info(
            f"Instalação {event.aggregate_id}: {event.de_status} → {event.para_status}"
            f"{' (coletar_acessos limpo)' if event.coletar_acessos_limpo else ''}"
        )
        return []

    def ao_atualizar(
        self,
        event: InstalacaoAtualizadaEvent,
        contexto: Optional[ContextoOperador] = None,
    ) -> List[EfeitoResultado]:
        logger.info(
            f"Instalação {event.aggregate_id} editada: {', '.join(event.campos_alterados)}"
        )
        return []

    def ao_excluir(
        self,
        event: InstalacaoExcluidaEvent,
        contexto: Optional[ContextoOperador] = None,
    ) -> List[EfeitoResultado]:
        logger.info(f"Instalação {event.aggregate_id} excluída (dominio={event.dominio})")
        return []

    def _remover_arquivos(self, event: InstalacaoFinalizadaEvent) -> EfeitoResultado:
        if not event.urls_arquivos:
            return EfeitoResultado(EFEITO_REMOVER_ARQUIVOS, True, "sem anexos")

        relatorio = self.arquivos.delete_all(event.urls_arquivos)
        if not relatorio.sucesso:
            logger.warning(
                f"Limpeza parcial dos anexos da instalação {event.aggregate_id}: "
                f"{relatorio.resumo()}"
            )
        # Falha de limpeza não gera aviso ao operador
        return EfeitoResultado(EFEITO_REMOVER_ARQUIVOS, relatorio.sucesso, relatorio.resumo())

    def _notificar(
        self,
        nome: str,
        tipo: TipoNotificacao,
        dominio: str,
        telefone: Optional[str],
        contexto: Optional[ContextoOperador],
    ) -> EfeitoResultado:
        if not self.notificador.habilitado:
            return EfeitoResultado(nome, True, "ignorado: backend de email não configurado")

        try:
            self.notificador.notificar(tipo, dominio, telefone, contexto)
        except DomainException as e:
            logger.warning(f"Falha ao enviar email '{tipo.value}' ({dominio}): {e}")
            return EfeitoResultado(nome, False, str(e), aviso_operador=tipo.aviso_falha)

        return EfeitoResultado(nome, True, "enviado")
