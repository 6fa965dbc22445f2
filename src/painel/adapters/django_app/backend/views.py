"""
Views JSON do backend.

Endpoints:
- POST /api/enviar-email - Envio livre {destinatarios[], assunto, corpo}
- POST /api/email-nova-instalacao - Email automático de nova instalação
- POST /api/email-instalacao-finalizada - Email automático de finalização
- GET /api/n8n/workflow-link - Primeiro link publicado no workflow
- GET /api/inserir-anon-key-info?token= - Nome do software e domínio pelo token
- POST /api/salvar-anon-key - Grava a anon key da linha com o token

Formato (compatível com os clientes do painel):
- Sucesso: {success, message, messageId} ou {link}
- Erro: {error}
"""

import logging
from typing import Any, Dict

from django.http import HttpRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from painel.core.notificacoes.dtos import EmailInstalacaoInputDTO, EnviarEmailInputDTO
from painel.core.notificacoes.entities import TipoNotificacao
from painel.core.shared.exceptions import (
    BusinessRuleViolationError,
    DomainException,
    EntityNotFoundError,
    IntegrationError,
    ValidationError,
)

from ..mixins import ContainerMixin, parse_json_body

logger = logging.getLogger(__name__)


ERRO_METODO = "Método não permitido."
ERRO_ENVIO = "Falha ao enviar email."
ERRO_N8N = "Falha ao buscar link do n8n."
ERRO_CARREGAR = "Erro ao carregar."
ERRO_SALVAR = "Erro ao salvar."


def erro(mensagem: str, status: int) -> JsonResponse:
    return JsonResponse({'error': mensagem}, status=status)


@method_decorator(csrf_exempt, name='dispatch')
class BackendView(ContainerMixin, View):
    """
    Base dos endpoints de backend.

    Qualquer método fora dos definidos na view (inclusive OPTIONS)
    responde 405 {"error": "Método não permitido."}.
    """

    def dispatch(self, request: HttpRequest, *args, **kwargs):
        response = super().dispatch(request, *args, **kwargs)
        response['Access-Control-Allow-Origin'] = '*'
        return response

    def http_method_not_allowed(self, request: HttpRequest, *args, **kwargs):
        logger.warning(f"Método não permitido: {request.method} {request.path}")
        return erro(ERRO_METODO, 405)

    def options(self, request: HttpRequest, *args, **kwargs):
        return self.http_method_not_allowed(request, *args, **kwargs)

    def corpo(self, request: HttpRequest) -> Dict[str, Any]:
        """Corpo JSON; corpo inválido é tratado como vazio."""
        try:
            return parse_json_body(request)
        except ValueError:
            return {}


class EnviarEmailView(BackendView):
    """POST /api/enviar-email"""

    def post(self, request: HttpRequest) -> JsonResponse:
        data = self.corpo(request)
        try:
            output = self.get_service('enviar_email_service').execute(
                EnviarEmailInputDTO(
                    destinatarios=data.get('destinatarios'),
                    assunto=data.get('assunto'),
                    corpo=data.get('corpo'),
                )
            )
        except ValidationError as e:
            return erro(e.message, 400)
        except Exception as e:
            logger.error(f"Erro ao enviar email: {e}")
            return erro(ERRO_ENVIO, 500)

        return JsonResponse(output.to_dict())


class EmailInstalacaoView(BackendView):
    """
    POST /api/email-nova-instalacao e /api/email-instalacao-finalizada

    Body JSON: {"dominio": "...", "telefone": "..."}
    """

    tipo: TipoNotificacao = TipoNotificacao.NOVA_INSTALACAO

    def post(self, request: HttpRequest) -> JsonResponse:
        data = self.corpo(request)
        try:
            output = self.get_service('enviar_email_instalacao_service').execute(
                EmailInstalacaoInputDTO(
                    tipo=self.tipo,
                    dominio=data.get('dominio'),
                    telefone=data.get('telefone'),
                )
            )
        except Exception as e:
            logger.error(f"Erro ao enviar email {self.tipo.value}: {e}")
            return erro(ERRO_ENVIO, 500)

        return JsonResponse({'success': True, 'message': output.mensagem})


class WorkflowLinkView(BackendView):
    """GET /api/n8n/workflow-link"""

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            output = self.get_service('obter_link_workflow_service').execute()
        except BusinessRuleViolationError as e:
            return erro(e.message, 500)
        except IntegrationError as e:
            return erro(e.message, e.status_code or 500)
        except DomainException as e:
            logger.error(f"Erro ao buscar workflow n8n: {e}")
            return erro(ERRO_N8N, 500)

        return JsonResponse(output.to_dict())


class InserirAnonKeyInfoView(BackendView):
    """GET /api/inserir-anon-key-info?token=..."""

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            output = self.get_service('obter_info_anon_key_service').execute(
                request.GET.get('token', '')
            )
        except ValidationError as e:
            return erro(e.message, 400)
        except EntityNotFoundError as e:
            return erro(e.message, 404)
        except Exception as e:
            logger.error(f"Erro ao carregar info da anon key: {e}")
            return erro(ERRO_CARREGAR, 500)

        return JsonResponse(output.to_dict())


class SalvarAnonKeyView(BackendView):
    """
    POST /api/salvar-anon-key

    Body JSON: {"token": "...", "anon_key": "..."}
    """

    def post(self, request: HttpRequest) -> JsonResponse:
        data = self.corpo(request)
        try:
            self.get_service('salvar_anon_key_service').execute(
                data.get('token'), data.get('anon_key')
            )
        except ValidationError as e:
            return erro(e.message, 400)
        except EntityNotFoundError as e:
            return erro(e.message, 404)
        except Exception as e:
            logger.error(f"Erro ao salvar anon key: {e}")
            return erro(ERRO_SALVAR, 500)

        return JsonResponse({'success': True, 'message': "Anon Key salva com sucesso."})
