"""
API Views JSON do kanban de instalações.

Endpoints:
- GET /instalacoes/api/ - Quadro (três colunas)
- POST /instalacoes/api/ - Criar instalação (JSON ou multipart)
- GET /instalacoes/api/<id>/ - Obter instalação
- PATCH /instalacoes/api/<id>/ - Editar instalação
- DELETE /instalacoes/api/<id>/ - Excluir instalação
- POST /instalacoes/api/<id>/mover/ - Mover entre colunas
- GET /instalacoes/api/<id>/acessos/ - Texto de acessos

Formato:
- Entrada: JSON (multipart aceito na criação, para anexos)
- Saída: JSON com estrutura {success, data/error, meta}

Operador: Authorization Bearer / X-Operador-Id ou sessão.
"""

import logging
from typing import Any, Dict

from django.http import HttpRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from painel.core.instalacoes.dtos import (
    AtualizarInstalacaoInputDTO,
    CriarInstalacaoInputDTO,
    MoverInstalacaoInputDTO,
    ResultadoOperacaoDTO,
)
from painel.core.shared.exceptions import (
    BusinessRuleViolationError,
    DomainException,
    EntityNotFoundError,
    IntegrationError,
    RepositoryError,
    ValidationError,
)

from ..mixins import ContainerMixin, OperadorMixin, parse_json_body
from .forms import arquivos_para_dto

logger = logging.getLogger(__name__)


# =============================================================================
# Helpers
# =============================================================================

def json_response(success: bool, data: Any = None, error: str = None,
                  status: int = 200, meta: Dict = None) -> JsonResponse:
    """
    Cria resposta JSON padronizada.

    Args:
        success: Se operação foi bem sucedida
        data: Dados da resposta
        error: Mensagem de erro (se aplicável)
        status: HTTP status code
        meta: Metadados adicionais
    """
    response = {'success': success}

    if data is not None:
        response['data'] = data

    if error is not None:
        response['error'] = error

    if meta is not None:
        response['meta'] = meta

    return JsonResponse(response, status=status)


def resultado_response(resultado: ResultadoOperacaoDTO, status: int = 200) -> JsonResponse:
    """Resposta de escrita: instalação em data, efeitos e avisos em meta."""
    return json_response(
        success=True,
        data=resultado.instalacao.to_dict() if resultado.instalacao else None,
        status=status,
        meta={
            'persistido': resultado.persistido,
            'efeitos': [e.to_dict() for e in resultado.efeitos],
            'avisos': list(resultado.avisos),
        },
    )


def _bool(valor: Any) -> bool:
    if isinstance(valor, str):
        return valor.strip().lower() in ('1', 'true', 'on', 'sim', 'yes')
    return bool(valor)


# =============================================================================
# Base API View
# =============================================================================

@method_decorator(csrf_exempt, name='dispatch')
class BaseAPIView(ContainerMixin, OperadorMixin, View):
    """
    View base para APIs JSON.

    Fornece parsing de JSON, acesso ao container DI e
    tratamento de erros padronizado.
    """

    def parse_body(self, request: HttpRequest) -> Dict:
        return parse_json_body(request)

    def handle_exception(self, e: Exception) -> JsonResponse:
        """
        Trata exceções e retorna resposta apropriada.

        ValidationError 400, EntityNotFoundError 404,
        BusinessRuleViolationError 422, RepositoryError/IntegrationError 502.
        """
        if isinstance(e, ValidationError):
            return json_response(
                success=False,
                error=e.message,
                status=400,
                meta={'field': e.field, 'code': e.code}
            )

        if isinstance(e, EntityNotFoundError):
            return json_response(
                success=False,
                error=e.message,
                status=404
            )

        if isinstance(e, BusinessRuleViolationError):
            return json_response(
                success=False,
                error=e.message,
                status=422,
                meta={'rule': e.rule}
            )

        if isinstance(e, (RepositoryError, IntegrationError)):
            logger.error(f"Falha no backend: {e}")
            return json_response(
                success=False,
                error=e.message,
                status=502,
                meta={'code': e.code}
            )

        if isinstance(e, DomainException):
            return json_response(
                success=False,
                error=e.message,
                status=400
            )

        if isinstance(e, ValueError):
            return json_response(
                success=False,
                error=str(e),
                status=400
            )

        # Erro inesperado
        logger.exception(f"Erro inesperado na API: {e}")
        return json_response(
            success=False,
            error="Erro interno do servidor",
            status=500
        )


# =============================================================================
# Instalação API Views
# =============================================================================

class QuadroAPIView(BaseAPIView):
    """
    GET /instalacoes/api/ - Quadro
    POST /instalacoes/api/ - Criar
    """

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            quadro = self.get_service('listar_quadro_service').execute()
            return json_response(
                success=True,
                data=quadro.to_dict(),
                meta={'total': quadro.total},
            )
        except Exception as e:
            return self.handle_exception(e)

    def post(self, request: HttpRequest) -> JsonResponse:
        """
        Cria nova instalação.

        Body JSON:
        {
            "dominio": "string (obrigatório)",
            "telefone": "string (opcional)",
            "acessos": "string (opcional)",
            "prioridade": "normal|urgente (opcional)",
            "coletar_acessos": bool (opcional)
        }

        Em multipart, os mesmos campos + "arquivos" (vários).
        """
        try:
            if request.content_type == 'multipart/form-data':
                data = request.POST
                arquivos = arquivos_para_dto(request.FILES.getlist('arquivos'))
            else:
                data = self.parse_body(request)
                arquivos = ()

            input_dto = CriarInstalacaoInputDTO(
                dominio=data.get('dominio') or '',
                telefone=data.get('telefone') or None,
                acessos=data.get('acessos') or None,
                prioridade=data.get('prioridade') or 'normal',
                coletar_acessos=_bool(data.get('coletar_acessos', False)),
                arquivos=arquivos,
            )
            resultado = self.get_service('criar_instalacao_service').execute(
                input_dto, self.get_contexto(request)
            )

            logger.info(f"API: Instalação criada: {resultado.instalacao.id}")
            return resultado_response(resultado, status=201)

        except Exception as e:
            return self.handle_exception(e)


class InstalacaoAPIDetailView(BaseAPIView):
    """
    GET /instalacoes/api/<id>/ - Obter
    PATCH /instalacoes/api/<id>/ - Editar
    DELETE /instalacoes/api/<id>/ - Excluir
    """

    def get(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            instalacao = self.get_service('obter_instalacao_service').execute(pk)
            return json_response(success=True, data=instalacao.to_dict())
        except Exception as e:
            return self.handle_exception(e)

    def patch(self, request: HttpRequest, pk: str) -> JsonResponse:
        """
        Edita campos da instalação. Campos ausentes não são alterados.

        Body JSON:
        {
            "dominio", "telefone", "acessos", "prioridade",
            "coletar_acessos", "status",
            "manter_arquivos": ["url", ...] (opcional)
        }
        """
        try:
            data = self.parse_body(request)

            manter = data.get('manter_arquivos')
            if manter is not None and not isinstance(manter, list):
                raise ValidationError(
                    "manter_arquivos deve ser uma lista.", field='manter_arquivos'
                )
            input_dto = AtualizarInstalacaoInputDTO(
                instalacao_id=pk,
                dominio=data.get('dominio'),
                telefone=data.get('telefone'),
                acessos=data.get('acessos'),
                prioridade=data.get('prioridade'),
                coletar_acessos=(
                    _bool(data['coletar_acessos']) if 'coletar_acessos' in data else None
                ),
                status=data.get('status'),
                manter_arquivos=tuple(manter) if manter is not None else None,
            )
            resultado = self.get_service('atualizar_instalacao_service').execute(
                input_dto, self.get_contexto(request)
            )
            return resultado_response(resultado)

        except Exception as e:
            return self.handle_exception(e)

    def delete(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            resultado = self.get_service('excluir_instalacao_service').execute(
                pk, self.get_contexto(request)
            )
            logger.info(f"API: Instalação {pk} excluída")
            return resultado_response(resultado)
        except Exception as e:
            return self.handle_exception(e)


class InstalacaoAPIMoverView(BaseAPIView):
    """POST /instalacoes/api/<id>/mover/"""

    def post(self, request: HttpRequest, pk: str) -> JsonResponse:
        """
        Move cartão entre colunas.

        Body JSON:
        {
            "para_status": "aguardando|em_andamento|finalizado (obrigatório)",
            "de_status": "coluna de origem (opcional)"
        }
        """
        try:
            data = self.parse_body(request)

            if not data.get('para_status'):
                return json_response(
                    success=False,
                    error="para_status é obrigatório",
                    status=400
                )

            resultado = self.get_service('mover_instalacao_service').execute(
                MoverInstalacaoInputDTO(
                    instalacao_id=pk,
                    para_status=data['para_status'],
                    de_status=data.get('de_status') or None,
                ),
                self.get_contexto(request),
            )
            return resultado_response(resultado)

        except Exception as e:
            return self.handle_exception(e)


class InstalacaoAPIAcessosView(BaseAPIView):
    """GET /instalacoes/api/<id>/acessos/"""

    def get(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            acessos = self.get_service('gerar_acessos_service').execute(pk)
            return json_response(success=True, data=acessos.to_dict())
        except Exception as e:
            return self.handle_exception(e)
