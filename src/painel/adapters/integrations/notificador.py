"""
Despachante de notificações via backend de email.

POST em <BACKEND_URL>/api/email-nova-instalacao ou
/api/email-instalacao-finalizada com {telefone?, dominio}.
Uma tentativa, sem retry; qualquer falha vira IntegrationError.
"""

import logging
from typing import Optional

import httpx

from painel.core.notificacoes.entities import TipoNotificacao
from painel.core.shared.context import ContextoOperador
from painel.core.shared.exceptions import IntegrationError

logger = logging.getLogger(__name__)


class HttpNotificador:
    """
    Implementação HTTP do NotificadorInstalacao.

    Attributes:
        backend_url: URL base do backend de email ("" desabilita)
        timeout: Timeout da requisição em segundos

    Example:
        notificador = HttpNotificador("https://painel.exemplo.com")
        notificador.notificar(TipoNotificacao.NOVA_INSTALACAO, "cliente.com", None, contexto)
    """

    def __init__(
        self,
        backend_url: Optional[str] = "",
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.backend_url = (backend_url or "").strip().rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def habilitado(self) -> bool:
        return bool(self.backend_url)

    def notificar(
        self,
        tipo: TipoNotificacao,
        dominio: str,
        telefone: Optional[str] = None,
        contexto: Optional[ContextoOperador] = None,
    ) -> None:
        """
        Raises:
            IntegrationError: Resposta não-2xx ou falha de rede
        """
        payload = {"dominio": (dominio or "").strip()}
        if telefone:
            payload["telefone"] = telefone

        headers = {"Content-Type": "application/json"}
        if contexto is not None:
            headers.update(contexto.authorization_header())

        url = f"{self.backend_url}{tipo.rota}"
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise IntegrationError(
                f"Falha de rede ao enviar email '{tipo.value}': {e}",
                service="email",
            )

        if response.is_error:
            logger.warning(f"Backend de email retornou {response.status_code} para {tipo.value}")
            raise IntegrationError(
                f"Backend de email retornou {response.status_code}",
                service="email",
                status_code=response.status_code,
            )

        logger.info(f"Notificação '{tipo.value}' enviada (dominio={payload['dominio']})")
