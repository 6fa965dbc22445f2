"""
Dependency Injection Container.

Configura e gerencia todas as dependências da aplicação.
Usa dependency-injector para lazy-loading e injeção automática.

Padrões:
- Singleton: Uma instância para toda app (clients, repositories)
- Factory: Nova instância por chamada (services, UoW)
- Selector: Implementação escolhida por configuração
  (repository_backend: supabase/memory, event_publisher_mode: sync/celery)

A configuração vem de settings.PAINEL (ver painel.config.settings).
"""

from typing import Any, Dict, Optional

from dependency_injector import containers, providers

from painel.adapters.django_app.backend.email import (
    DjangoRenderizadorEmail,
    DjangoTransporteEmail,
)
from painel.adapters.django_app.events.publishers import (
    CeleryEventPublisher,
    LocalEventPublisher,
)
from painel.adapters.integrations import HttpNotificador, N8nWorkflowClient
from painel.adapters.shared import RemoteUnitOfWork
from painel.adapters.supabase import (
    SupabaseClienteAnonKeyRepository,
    SupabaseInstalacaoRepository,
    SupabaseRestClient,
    SupabaseStorage,
)
from painel.core.instalacoes.arquivos import GerenciadorArquivos
from painel.core.instalacoes.handlers import ManipuladoresInstalacao
from painel.core.instalacoes.ports import InMemoryBlobStorage, InMemoryInstalacaoRepository
from painel.core.instalacoes.use_cases import (
    AtualizarInstalacaoService,
    CriarInstalacaoService,
    ExcluirInstalacaoService,
    GerarAcessosService,
    ListarQuadroService,
    MoverInstalacaoService,
    ObterInstalacaoService,
)
from painel.core.integracoes.anon_key import (
    InMemoryClienteAnonKeyRepository,
    ObterInfoAnonKeyService,
    SalvarAnonKeyService,
)
from painel.core.integracoes.workflow import ObterLinkWorkflowService
from painel.core.notificacoes.use_cases import EnviarEmailInstalacaoService, EnviarEmailService


class Container(containers.DeclarativeContainer):
    """
    Container principal de Dependency Injection.

    Organização:
    - Configuration: settings.PAINEL
    - Infrastructure: clients HTTP, storage, email
    - Repositories: Persistência
    - Unit of Work: Transações + publicação de eventos
    - Services: Use Cases

    Example:
        container = Container()
        container.config.from_dict({'repository_backend': 'memory', ...})

        service = container.mover_instalacao_service()
        resultado = service.execute(input_dto, contexto)
    """

    # =========================================================================
    # Configuration
    # =========================================================================

    config = providers.Configuration()

    # =========================================================================
    # Infrastructure
    # =========================================================================

    supabase_client = providers.Singleton(
        SupabaseRestClient,
        base_url=config.supabase.url,
        api_key=config.supabase.key,
        timeout=config.http_timeout,
    )

    blob_storage = providers.Selector(
        config.repository_backend,
        supabase=providers.Singleton(SupabaseStorage, client=supabase_client),
        memory=providers.Singleton(InMemoryBlobStorage),
    )

    gerenciador_arquivos = providers.Singleton(
        GerenciadorArquivos,
        storage=blob_storage,
        bucket=config.supabase.bucket,
    )

    notificador = providers.Singleton(
        HttpNotificador,
        backend_url=config.backend_url,
        timeout=config.http_timeout,
    )

    workflow_gateway = providers.Singleton(
        N8nWorkflowClient,
        base_url=config.n8n.url,
        api_key=config.n8n.api_key,
        workflow_id=config.n8n.workflow_id,
    )

    transporte_email = providers.Singleton(DjangoTransporteEmail)

    renderizador_email = providers.Singleton(
        DjangoRenderizadorEmail,
        logo_url=config.email.logo_url,
    )

    # =========================================================================
    # Repositories
    # =========================================================================

    instalacao_repository = providers.Selector(
        config.repository_backend,
        supabase=providers.Singleton(SupabaseInstalacaoRepository, client=supabase_client),
        memory=providers.Singleton(InMemoryInstalacaoRepository),
    )

    cliente_anon_key_repository = providers.Selector(
        config.repository_backend,
        supabase=providers.Singleton(SupabaseClienteAnonKeyRepository, client=supabase_client),
        memory=providers.Singleton(InMemoryClienteAnonKeyRepository),
    )

    # =========================================================================
    # Domain Events
    # =========================================================================

    manipuladores_instalacao = providers.Singleton(
        ManipuladoresInstalacao,
        notificador=notificador,
        arquivos=gerenciador_arquivos,
    )

    event_publisher = providers.Selector(
        config.event_publisher_mode,
        sync=providers.Singleton(LocalEventPublisher, manipuladores=manipuladores_instalacao),
        celery=providers.Singleton(CeleryEventPublisher),
    )

    # =========================================================================
    # Unit of Work (Factory - nova instância por operação)
    # =========================================================================

    unit_of_work = providers.Factory(
        RemoteUnitOfWork,
        event_publisher=event_publisher,
    )

    # =========================================================================
    # Services / Use Cases - Instalações
    # =========================================================================

    criar_instalacao_service = providers.Factory(
        CriarInstalacaoService,
        instalacao_repo=instalacao_repository,
        uow=unit_of_work,
        arquivos=gerenciador_arquivos,
    )

    mover_instalacao_service = providers.Factory(
        MoverInstalacaoService,
        instalacao_repo=instalacao_repository,
        uow=unit_of_work,
    )

    atualizar_instalacao_service = providers.Factory(
        AtualizarInstalacaoService,
        instalacao_repo=instalacao_repository,
        uow=unit_of_work,
        arquivos=gerenciador_arquivos,
    )

    excluir_instalacao_service = providers.Factory(
        ExcluirInstalacaoService,
        instalacao_repo=instalacao_repository,
        uow=unit_of_work,
    )

    # Leitura (sem UoW)
    obter_instalacao_service = providers.Factory(
        ObterInstalacaoService,
        instalacao_repo=instalacao_repository,
    )

    listar_quadro_service = providers.Factory(
        ListarQuadroService,
        instalacao_repo=instalacao_repository,
    )

    gerar_acessos_service = providers.Factory(
        GerarAcessosService,
        instalacao_repo=instalacao_repository,
        senha_padrao=config.acessos.senha_padrao,
    )

    # =========================================================================
    # Services / Use Cases - Email e integrações
    # =========================================================================

    enviar_email_service = providers.Factory(
        EnviarEmailService,
        transporte=transporte_email,
    )

    enviar_email_instalacao_service = providers.Factory(
        EnviarEmailInstalacaoService,
        transporte=transporte_email,
        renderizador=renderizador_email,
        destinatarios=config.email.destinatarios_instalacoes,
        link_instalacoes=config.email.link_instalacoes,
    )

    obter_link_workflow_service = providers.Factory(
        ObterLinkWorkflowService,
        gateway=workflow_gateway,
    )

    obter_info_anon_key_service = providers.Factory(
        ObterInfoAnonKeyService,
        repo=cliente_anon_key_repository,
    )

    salvar_anon_key_service = providers.Factory(
        SalvarAnonKeyService,
        repo=cliente_anon_key_repository,
    )


# =============================================================================
# Container Global (Singleton)
# =============================================================================

_container: Optional[Container] = None


def criar_container(painel_config: Dict[str, Any]) -> Container:
    """Cria um container configurado com o dicionário informado."""
    container = Container()
    container.config.from_dict(painel_config)
    return container


def get_container() -> Container:
    """
    Retorna instância global do container.

    Cria se não existir, configurado com settings.PAINEL.
    """
    global _container

    if _container is None:
        from django.conf import settings
        _container = criar_container(settings.PAINEL)

    return _container


def reset_container() -> None:
    """Reset do container (para testes)."""
    global _container
    _container = None
