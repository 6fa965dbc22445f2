"""
Views Django do kanban de instalações.

DRIVING ADAPTERS - direcionam requisições HTTP para o Core.

Views são finas: validam o form, montam o DTO com o contexto do
operador, chamam o use case do container e traduzem o resultado em
flash messages (sucesso, avisos de notificação, erros).
"""

import logging

from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect, render
from django.views import View

from painel.core.instalacoes.dtos import (
    AtualizarInstalacaoInputDTO,
    CriarInstalacaoInputDTO,
    MoverInstalacaoInputDTO,
    ResultadoOperacaoDTO,
)
from painel.core.instalacoes.entities import StatusInstalacao
from painel.core.shared.exceptions import (
    DomainException,
    EntityNotFoundError,
    ValidationError,
)

from ..mixins import ContainerMixin, FlashMessageMixin, OperadorMixin
from .forms import (
    InstalacaoEditForm,
    InstalacaoForm,
    MoverInstalacaoForm,
    arquivos_para_dto,
)

logger = logging.getLogger(__name__)


class InstalacaoViewMixin(ContainerMixin, FlashMessageMixin, OperadorMixin):
    """Base das views HTML do kanban."""

    def avisar_efeitos(self, request: HttpRequest, resultado: ResultadoOperacaoDTO) -> None:
        """Exibe os avisos de efeitos que falharam (ex: email não enviado)."""
        for aviso in resultado.avisos:
            self.warning_message(request, aviso)

    def render_quadro(self, request: HttpRequest, form=None, status: int = 200) -> HttpResponse:
        try:
            quadro = self.get_service('listar_quadro_service').execute()
        except DomainException as e:
            logger.error(f"Erro ao carregar instalações: {e}")
            self.error_message(request, "Erro ao carregar instalações")
            quadro = None

        context = {
            'quadro': quadro,
            'form': form or InstalacaoForm(),
            'colunas': StatusInstalacao.colunas(),
        }
        return render(request, 'instalacoes/kanban.html', context, status=status)


# =============================================================================
# Quadro
# =============================================================================

class QuadroView(InstalacaoViewMixin, View):
    """
    Kanban com as três colunas.

    GET /instalacoes/
    """

    def get(self, request: HttpRequest) -> HttpResponse:
        return self.render_quadro(request)


class InstalacaoCreateView(InstalacaoViewMixin, View):
    """
    Cria nova instalação.

    POST /instalacoes/criar/
    """

    def post(self, request: HttpRequest) -> HttpResponse:
        form = InstalacaoForm(request.POST, request.FILES)

        if not form.is_valid():
            return self.render_quadro(request, form=form, status=400)

        try:
            input_dto = CriarInstalacaoInputDTO(
                dominio=form.cleaned_data['dominio'],
                telefone=form.cleaned_data.get('telefone'),
                acessos=form.cleaned_data.get('acessos'),
                prioridade=form.cleaned_data.get('prioridade') or 'normal',
                coletar_acessos=form.cleaned_data.get('coletar_acessos', False),
                arquivos=arquivos_para_dto(form.cleaned_data.get('arquivos', [])),
            )
            resultado = self.get_service('criar_instalacao_service').execute(
                input_dto, self.get_contexto(request)
            )

        except ValidationError as e:
            form.add_error(e.field if e.field in form.fields else None, e.message)
            return self.render_quadro(request, form=form, status=400)

        except DomainException as e:
            logger.error(f"Erro ao criar instalação: {e}")
            self.error_message(request, e.message)
            return self.render_quadro(request, form=form, status=400)

        self.success_message(request, "Instalação criada.")
        self.avisar_efeitos(request, resultado)
        return redirect('instalacoes:quadro')


class InstalacaoMoverView(InstalacaoViewMixin, View):
    """
    Move cartão para outra coluna.

    POST /instalacoes/<id>/mover/ (de_status, para_status)
    """

    def post(self, request: HttpRequest, pk: str) -> HttpResponse:
        form = MoverInstalacaoForm(request.POST)

        if not form.is_valid():
            self.error_message(request, "Status inválido.")
            return redirect('instalacoes:quadro')

        try:
            resultado = self.get_service('mover_instalacao_service').execute(
                MoverInstalacaoInputDTO(
                    instalacao_id=pk,
                    para_status=form.cleaned_data['para_status'],
                    de_status=form.cleaned_data['de_status'],
                ),
                self.get_contexto(request),
            )

        except EntityNotFoundError:
            self.error_message(request, "Instalação não encontrada.")
            return redirect('instalacoes:quadro')

        except DomainException as e:
            logger.error(f"Erro ao mover instalação {pk}: {e}")
            self.error_message(request, e.message)
            return redirect('instalacoes:quadro')

        if resultado.persistido:
            destino = StatusInstalacao.from_string(form.cleaned_data['para_status'])
            self.success_message(request, f"Movido para {destino.label}")
            self.avisar_efeitos(request, resultado)

        return redirect('instalacoes:quadro')


class InstalacaoEditView(InstalacaoViewMixin, View):
    """
    Edição manual de uma instalação.

    GET /instalacoes/<id>/editar/
    POST /instalacoes/<id>/editar/
    """

    template_name = 'instalacoes/editar.html'

    def get(self, request: HttpRequest, pk: str) -> HttpResponse:
        try:
            instalacao = self.get_service('obter_instalacao_service').execute(pk)
        except EntityNotFoundError:
            self.error_message(request, "Instalação não encontrada.")
            return redirect('instalacoes:quadro')

        form = InstalacaoEditForm(
            arquivos_atuais=instalacao.arquivos,
            initial={
                'dominio': instalacao.dominio,
                'telefone': instalacao.telefone or '',
                'acessos': instalacao.acessos or '',
                'prioridade': instalacao.prioridade,
                'coletar_acessos': instalacao.coletar_acessos,
                'status': instalacao.status,
                'manter_arquivos': [a['url'] for a in instalacao.arquivos],
            },
        )
        return render(request, self.template_name, {'instalacao': instalacao, 'form': form})

    def post(self, request: HttpRequest, pk: str) -> HttpResponse:
        try:
            instalacao = self.get_service('obter_instalacao_service').execute(pk)
        except EntityNotFoundError:
            self.error_message(request, "Instalação não encontrada.")
            return redirect('instalacoes:quadro')

        form = InstalacaoEditForm(
            request.POST, request.FILES, arquivos_atuais=instalacao.arquivos
        )
        context = {'instalacao': instalacao, 'form': form}

        if not form.is_valid():
            return render(request, self.template_name, context, status=400)

        try:
            input_dto = AtualizarInstalacaoInputDTO(
                instalacao_id=pk,
                dominio=form.cleaned_data['dominio'],
                telefone=form.cleaned_data.get('telefone', ''),
                acessos=form.cleaned_data.get('acessos', ''),
                prioridade=form.cleaned_data['prioridade'],
                coletar_acessos=form.cleaned_data.get('coletar_acessos', False),
                status=form.cleaned_data['status'],
                manter_arquivos=tuple(form.cleaned_data.get('manter_arquivos', [])),
                novos_arquivos=arquivos_para_dto(form.cleaned_data.get('arquivos', [])),
            )
            resultado = self.get_service('atualizar_instalacao_service').execute(
                input_dto, self.get_contexto(request)
            )

        except ValidationError as e:
            form.add_error(e.field if e.field in form.fields else None, e.message)
            return render(request, self.template_name, context, status=400)

        except DomainException as e:
            logger.error(f"Erro ao atualizar instalação {pk}: {e}")
            self.error_message(request, e.message)
            return render(request, self.template_name, context, status=400)

        if resultado.persistido:
            self.success_message(request, "Instalação atualizada.")
            self.avisar_efeitos(request, resultado)
        else:
            self.info_message(request, "Nenhuma alteração.")
        return redirect('instalacoes:quadro')


class InstalacaoExcluirView(InstalacaoViewMixin, View):
    """
    Exclui instalação.

    POST /instalacoes/<id>/excluir/
    """

    def post(self, request: HttpRequest, pk: str) -> HttpResponse:
        try:
            self.get_service('excluir_instalacao_service').execute(
                pk, self.get_contexto(request)
            )
            self.success_message(request, "Instalação excluída.")

        except EntityNotFoundError:
            self.error_message(request, "Instalação não encontrada.")

        except DomainException as e:
            logger.error(f"Erro ao excluir instalação {pk}: {e}")
            self.error_message(request, e.message)

        return redirect('instalacoes:quadro')


class InstalacaoAcessosView(InstalacaoViewMixin, View):
    """
    Texto de acessos pronto para copiar (cartões finalizados).

    GET /instalacoes/<id>/acessos/
    """

    template_name = 'instalacoes/acessos.html'

    def get(self, request: HttpRequest, pk: str) -> HttpResponse:
        try:
            acessos = self.get_service('gerar_acessos_service').execute(pk)
        except EntityNotFoundError:
            self.error_message(request, "Instalação não encontrada.")
            return redirect('instalacoes:quadro')

        return render(request, self.template_name, {'acessos': acessos})
