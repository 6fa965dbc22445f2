"""
DTOs do domínio de notificações.
"""

from dataclasses import dataclass
from typing import Any, Optional

from .entities import TipoNotificacao


@dataclass(frozen=True)
class EnviarEmailInputDTO:
    """
    Envio livre de email.

    Os campos chegam crus do corpo JSON e são validados
    ao montar a MensagemEmail.
    """

    destinatarios: Any
    assunto: Any
    corpo: Any


@dataclass(frozen=True)
class EmailInstalacaoInputDTO:
    """
    Email automático do kanban.

    Attributes:
        tipo: Nova instalação ou finalizada
        dominio: Domínio do cliente
        telefone: Telefone de contato (opcional)
    """

    tipo: TipoNotificacao
    dominio: Optional[str] = None
    telefone: Optional[str] = None


@dataclass
class EnvioEmailOutputDTO:
    """Resultado de um envio."""

    message_id: str
    mensagem: str
    destinatarios: int = 0

    def to_dict(self) -> dict:
        return {
            "success": True,
            "message": self.mensagem,
            "messageId": self.message_id,
        }
