"""
Domínio de Notificações por email.

Emails automáticos do kanban (nova instalação, instalação finalizada)
e envio livre usado pelo painel.
"""

from .entities import TipoNotificacao, MensagemEmail
from .dtos import EnviarEmailInputDTO, EmailInstalacaoInputDTO, EnvioEmailOutputDTO
from .ports import TransporteEmail, RenderizadorEmail
from .use_cases import EnviarEmailService, EnviarEmailInstalacaoService

__all__ = [
    "TipoNotificacao",
    "MensagemEmail",
    "EnviarEmailInputDTO",
    "EmailInstalacaoInputDTO",
    "EnvioEmailOutputDTO",
    "TransporteEmail",
    "RenderizadorEmail",
    "EnviarEmailService",
    "EnviarEmailInstalacaoService",
]
