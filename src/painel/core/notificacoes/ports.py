"""
Ports do domínio de notificações.

- TransporteEmail: envia uma MensagemEmail (SMTP no adapter Django)
- RenderizadorEmail: gera o HTML dos emails automáticos
"""

from typing import Any, Dict, List, Protocol, runtime_checkable

from .entities import MensagemEmail, TipoNotificacao


@runtime_checkable
class TransporteEmail(Protocol):
    """Interface do transporte de email."""

    def enviar(self, mensagem: MensagemEmail) -> str:
        """
        Envia mensagem.

        Returns:
            Message-ID atribuído à mensagem

        Raises:
            IntegrationError: Se o envio falhar
        """
        ...


@runtime_checkable
class RenderizadorEmail(Protocol):
    """Interface de renderização do HTML dos emails automáticos."""

    def renderizar(self, tipo: TipoNotificacao, contexto: Dict[str, Any]) -> str:
        """Renderiza o HTML do email de `tipo` com o contexto fornecido."""
        ...


class InMemoryTransporteEmail:
    """Transporte em memória: guarda as mensagens em `enviadas`."""

    def __init__(self):
        self.enviadas: List[MensagemEmail] = []

    def enviar(self, mensagem: MensagemEmail) -> str:
        self.enviadas.append(mensagem)
        return f"<{len(self.enviadas)}@painel.local>"
