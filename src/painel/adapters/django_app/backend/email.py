"""
Adapters de email sobre django.core.mail e o sistema de templates.

- DjangoTransporteEmail: implementa TransporteEmail via EmailMultiAlternatives
- DjangoRenderizadorEmail: implementa RenderizadorEmail com
  templates/emails/instalacao.html (autoescape do Django)
"""

import logging
from smtplib import SMTPException
from typing import Any, Dict, Optional

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.core.mail.message import make_msgid
from django.template.loader import render_to_string

from painel.core.notificacoes.entities import MensagemEmail, TipoNotificacao
from painel.core.shared.exceptions import IntegrationError

logger = logging.getLogger(__name__)


TEMPLATE_INSTALACAO = "emails/instalacao.html"
COR_PRIMARIA = "#ffd323"


class DjangoTransporteEmail:
    """
    Transporte SMTP configurado pelos settings EMAIL_*.

    Attributes:
        remetente: Endereço "From" (padrão: DEFAULT_FROM_EMAIL)
    """

    def __init__(self, remetente: Optional[str] = None):
        self.remetente = remetente

    def enviar(self, mensagem: MensagemEmail) -> str:
        message_id = make_msgid(domain=_dominio_remetente())
        email = EmailMultiAlternatives(
            subject=mensagem.assunto,
            body=mensagem.corpo_texto,
            from_email=self.remetente or settings.DEFAULT_FROM_EMAIL,
            to=list(mensagem.destinatarios),
            headers={"Message-ID": message_id},
        )
        if mensagem.corpo_html:
            email.attach_alternative(mensagem.corpo_html, "text/html")

        try:
            email.send(fail_silently=False)
        except (SMTPException, OSError) as e:
            logger.error(f"Falha no envio SMTP: {e}")
            raise IntegrationError("Falha ao enviar email.", service="smtp") from e

        return message_id


class DjangoRenderizadorEmail:
    """HTML dos emails automáticos (layout HubLabel)."""

    def __init__(self, logo_url: Optional[str] = "", template_name: str = TEMPLATE_INSTALACAO):
        self.logo_url = logo_url or ""
        self.template_name = template_name

    def renderizar(self, tipo: TipoNotificacao, contexto: Dict[str, Any]) -> str:
        return render_to_string(self.template_name, {
            **contexto,
            "tipo": tipo.value,
            "logo_url": self.logo_url,
            "cor_primaria": COR_PRIMARIA,
        })


def _dominio_remetente() -> Optional[str]:
    endereco = getattr(settings, "SMTP_FROM_EMAIL", "") or ""
    if "@" in endereco:
        return endereco.rsplit("@", 1)[1]
    return None
