"""
Testes do container de DI.

Coverage:
- Seleção do backend (memory/supabase)
- Seleção do publisher (sync/celery)
- Services resolvem suas dependências
- get_container usa settings.PAINEL
"""

import copy

from django.conf import settings

from painel.adapters.django_app.events.publishers import CeleryEventPublisher, LocalEventPublisher
from painel.adapters.supabase import (
    SupabaseClienteAnonKeyRepository,
    SupabaseInstalacaoRepository,
    SupabaseStorage,
)
from painel.config.container import criar_container
from painel.core.instalacoes.ports import InMemoryBlobStorage, InMemoryInstalacaoRepository
from painel.core.instalacoes.use_cases import CriarInstalacaoService, GerarAcessosService


def _config(**kwargs):
    config = copy.deepcopy(settings.PAINEL)
    config.update(kwargs)
    return config


class TestContainer:

    def test_backend_memory(self):
        container = criar_container(_config())

        assert isinstance(container.instalacao_repository(), InMemoryInstalacaoRepository)
        assert isinstance(container.blob_storage(), InMemoryBlobStorage)
        assert container.instalacao_repository() is container.instalacao_repository()

    def test_backend_supabase(self):
        container = criar_container(_config(
            repository_backend='supabase',
            supabase={'url': 'https://x.supabase.co', 'key': 'anon', 'bucket': 'instalacoes'},
        ))

        assert isinstance(container.instalacao_repository(), SupabaseInstalacaoRepository)
        assert isinstance(container.blob_storage(), SupabaseStorage)
        assert isinstance(
            container.cliente_anon_key_repository(), SupabaseClienteAnonKeyRepository
        )

    def test_publisher_sync(self):
        container = criar_container(_config(event_publisher_mode='sync'))

        assert isinstance(container.event_publisher(), LocalEventPublisher)

    def test_publisher_celery(self):
        container = criar_container(_config(event_publisher_mode='celery'))

        assert isinstance(container.event_publisher(), CeleryEventPublisher)

    def test_services_resolvem(self):
        container = criar_container(_config())

        assert isinstance(container.criar_instalacao_service(), CriarInstalacaoService)
        assert container.criar_instalacao_service() is not container.criar_instalacao_service()

        acessos = container.gerar_acessos_service()
        assert isinstance(acessos, GerarAcessosService)
        assert acessos.senha_padrao == 'Senha@123'

        container.mover_instalacao_service()
        container.atualizar_instalacao_service()
        container.excluir_instalacao_service()
        container.listar_quadro_service()
        container.enviar_email_service()
        container.enviar_email_instalacao_service()
        container.obter_link_workflow_service()
        container.obter_info_anon_key_service()
        container.salvar_anon_key_service()

    def test_unit_of_work_novo_por_operacao(self):
        container = criar_container(_config())

        assert container.unit_of_work() is not container.unit_of_work()

    def test_get_container_usa_settings(self, container):
        assert container.config.repository_backend() == 'memory'
        assert container.config.email.destinatarios_instalacoes() == ['ops@hublabel.test']
