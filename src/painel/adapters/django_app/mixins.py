"""
Mixins e helpers compartilhados pelas views Django.

- ContainerMixin: acesso aos services do container DI
- FlashMessageMixin: feedback via django.contrib.messages
- OperadorMixin: monta o ContextoOperador da requisição
"""

import json
from typing import Dict

from django.contrib import messages
from django.http import HttpRequest

from painel.config.container import get_container
from painel.core.shared.context import ContextoOperador


HEADER_OPERADOR = 'HTTP_X_OPERADOR_ID'


def parse_json_body(request: HttpRequest) -> Dict:
    """
    Parseia body JSON do request.

    Raises:
        ValueError: Se JSON inválido ou não for um objeto
    """
    if not request.body:
        return {}

    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValueError(f"JSON inválido: {e}")

    if not isinstance(data, dict):
        raise ValueError("JSON inválido: esperado um objeto")
    return data


def contexto_operador(request: HttpRequest) -> ContextoOperador:
    """
    Contexto do operador da requisição.

    Token: header "Authorization: Bearer ..." ou sessão (access_token).
    Operador: header X-Operador-Id ou sessão (operador_id).
    """
    sessao = getattr(request, 'session', None) or {}

    token = None
    authorization = request.META.get('HTTP_AUTHORIZATION', '')
    if authorization.lower().startswith('bearer '):
        token = authorization[7:].strip() or None
    if token is None:
        token = sessao.get('access_token') or None

    operador_id = (
        request.META.get(HEADER_OPERADOR, '').strip()
        or sessao.get('operador_id')
        or 'anonymous'
    )
    return ContextoOperador(operador_id=str(operador_id), access_token=token)


class ContainerMixin:
    """Mixin que fornece acesso ao DI Container."""

    def get_container(self):
        return get_container()

    def get_service(self, service_name: str):
        """
        Obtém service do container.

        Args:
            service_name: Nome do provider no container
        """
        return getattr(self.get_container(), service_name)()


class FlashMessageMixin:
    """Mixin para adicionar flash messages de forma consistente."""

    def success_message(self, request: HttpRequest, message: str) -> None:
        messages.success(request, message)

    def error_message(self, request: HttpRequest, message: str) -> None:
        messages.error(request, message)

    def warning_message(self, request: HttpRequest, message: str) -> None:
        messages.warning(request, message)

    def info_message(self, request: HttpRequest, message: str) -> None:
        messages.info(request, message)


class OperadorMixin:
    """Mixin que extrai o operador do request."""

    def get_contexto(self, request: HttpRequest) -> ContextoOperador:
        return contexto_operador(request)
