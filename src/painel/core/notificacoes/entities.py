"""
Entidades do domínio de notificações por email.

- TipoNotificacao: os dois emails automáticos do kanban
- MensagemEmail: mensagem pronta para o transporte
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple

from painel.core.shared.exceptions import ValidationError


_TAGS_HTML = re.compile(r"<[^>]*>")


class TipoNotificacao(Enum):
    """
    Emails automáticos do kanban.

    NOVA_INSTALACAO: disparado após criar um pedido
    INSTALACAO_FINALIZADA: disparado após mover para "finalizado"
    """

    NOVA_INSTALACAO = "nova_instalacao"
    INSTALACAO_FINALIZADA = "instalacao_finalizada"

    @property
    def rota(self) -> str:
        """Caminho do endpoint no backend de email."""
        rotas = {
            TipoNotificacao.NOVA_INSTALACAO: "/api/email-nova-instalacao",
            TipoNotificacao.INSTALACAO_FINALIZADA: "/api/email-instalacao-finalizada",
        }
        return rotas[self]

    @property
    def assunto(self) -> str:
        assuntos = {
            TipoNotificacao.NOVA_INSTALACAO: "HubLabel – Nova instalação registrada",
            TipoNotificacao.INSTALACAO_FINALIZADA: "HubLabel – Instalação finalizada",
        }
        return assuntos[self]

    @property
    def titulo(self) -> str:
        titulos = {
            TipoNotificacao.NOVA_INSTALACAO: "Nova instalação registrada",
            TipoNotificacao.INSTALACAO_FINALIZADA: "Instalação finalizada",
        }
        return titulos[self]

    @property
    def descricao(self) -> str:
        descricoes = {
            TipoNotificacao.NOVA_INSTALACAO: "Uma nova instalação foi cadastrada no painel HubLabel.",
            TipoNotificacao.INSTALACAO_FINALIZADA: (
                "Uma instalação foi concluída e movida para Finalizado no painel."
            ),
        }
        return descricoes[self]

    @property
    def cor_destaque(self) -> str:
        """Cor da borda do bloco de dados no HTML."""
        if self is TipoNotificacao.INSTALACAO_FINALIZADA:
            return "#22c55e"
        return "#ffd323"

    @property
    def aviso_falha(self) -> str:
        """Aviso exibido ao operador quando o envio falha."""
        avisos = {
            TipoNotificacao.NOVA_INSTALACAO: (
                "Instalação criada, mas falha ao enviar email de notificação."
            ),
            TipoNotificacao.INSTALACAO_FINALIZADA: (
                "Status atualizado, mas falha ao enviar email de finalização."
            ),
        }
        return avisos[self]

    @property
    def prefixo_texto(self) -> str:
        if self is TipoNotificacao.INSTALACAO_FINALIZADA:
            return "Instalação finalizada"
        return "Nova instalação"


def remover_tags(corpo: str) -> str:
    """Versão texto de um corpo HTML (tags removidas)."""
    return _TAGS_HTML.sub("", corpo or "")


@dataclass(frozen=True)
class MensagemEmail:
    """
    Mensagem pronta para envio.

    Attributes:
        destinatarios: Endereços de destino
        assunto: Assunto
        corpo_texto: Parte texto
        corpo_html: Parte HTML (None para email só texto)
    """

    destinatarios: Tuple[str, ...]
    assunto: str
    corpo_texto: str
    corpo_html: Optional[str] = None

    @classmethod
    def de_corpo(
        cls,
        destinatarios: Iterable[str],
        assunto: str,
        corpo: str,
    ) -> "MensagemEmail":
        """
        Monta mensagem a partir de um corpo livre.

        A parte texto é o corpo sem tags; a parte HTML só é enviada
        quando o corpo contém "<".

        Raises:
            ValidationError: Se destinatários, assunto ou corpo ausentes
        """
        if isinstance(destinatarios, str) or destinatarios is None:
            raise ValidationError(
                "destinatarios é obrigatório e deve ser um array não vazio.",
                field="destinatarios",
            )
        lista = tuple(str(d).strip() for d in destinatarios if str(d).strip())
        if not lista:
            raise ValidationError(
                "destinatarios é obrigatório e deve ser um array não vazio.",
                field="destinatarios",
            )
        if not assunto or not isinstance(assunto, str):
            raise ValidationError("assunto é obrigatório.", field="assunto")
        if not corpo or not isinstance(corpo, str):
            raise ValidationError("corpo é obrigatório.", field="corpo")

        return cls(
            destinatarios=lista,
            assunto=assunto,
            corpo_texto=remover_tags(corpo),
            corpo_html=corpo if "<" in corpo else None,
        )
