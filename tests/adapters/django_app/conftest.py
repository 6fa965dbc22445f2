"""
Configuração pytest para testes com Django.

Este arquivo configura:
- Django settings para testes (sem banco: sessão e mensagens em cookie)
- settings.PAINEL com backend em memória e publisher síncrono
- Container DI limpo a cada teste
"""

import pytest


PAINEL_TESTE = {
    'repository_backend': 'memory',
    'http_timeout': 5.0,
    'supabase': {'url': '', 'key': '', 'bucket': 'instalacoes'},
    'backend_url': '',
    'email': {
        'destinatarios_instalacoes': ['ops@hublabel.test'],
        'link_instalacoes': 'https://painel.hublabel.test/admin/instalacoes',
        'logo_url': '',
    },
    'acessos': {'senha_padrao': 'Senha@123'},
    'n8n': {'url': '', 'api_key': '', 'workflow_id': ''},
    'event_publisher_mode': 'sync',
}


def pytest_configure(config):
    """Configura Django antes dos testes."""
    import django
    from django.conf import settings

    if not settings.configured:
        settings.configure(
            DEBUG=True,
            SECRET_KEY='testes-painel',
            ALLOWED_HOSTS=['testserver'],
            ROOT_URLCONF='painel.config.urls',
            INSTALLED_APPS=[
                'django.contrib.sessions',
                'django.contrib.messages',
                'painel.adapters.django_app.instalacoes',
                'painel.adapters.django_app.backend',
            ],
            MIDDLEWARE=[
                'django.contrib.sessions.middleware.SessionMiddleware',
                'django.middleware.common.CommonMiddleware',
                'django.middleware.csrf.CsrfViewMiddleware',
                'django.contrib.messages.middleware.MessageMiddleware',
            ],
            TEMPLATES=[{
                'BACKEND': 'django.template.backends.django.DjangoTemplates',
                'DIRS': [],
                'APP_DIRS': True,
                'OPTIONS': {
                    'context_processors': [
                        'django.template.context_processors.request',
                        'django.contrib.messages.context_processors.messages',
                    ],
                },
            }],
            SESSION_ENGINE='django.contrib.sessions.backends.signed_cookies',
            MESSAGE_STORAGE='django.contrib.messages.storage.cookie.CookieStorage',
            EMAIL_BACKEND='django.core.mail.backends.locmem.EmailBackend',
            DEFAULT_FROM_EMAIL='"HubLabel" <naoresponda@hublabel.test>',
            SMTP_FROM_EMAIL='naoresponda@hublabel.test',
            USE_TZ=True,
            TIME_ZONE='America/Sao_Paulo',
            PAINEL=PAINEL_TESTE,
        )
        django.setup()


@pytest.fixture(autouse=True)
def container():
    """Container novo por teste (repositório em memória vazio)."""
    from painel.config.container import get_container, reset_container

    reset_container()
    yield get_container()
    reset_container()


@pytest.fixture
def repo(container):
    """Repositório em memória usado pelas views."""
    return container.instalacao_repository()


@pytest.fixture
def notificador(container):
    """Substitui o notificador HTTP por um em memória."""
    from dependency_injector import providers
    from painel.core.instalacoes.ports import InMemoryNotificador

    notificador = InMemoryNotificador()
    container.notificador.override(providers.Object(notificador))
    yield notificador
    container.notificador.reset_override()


@pytest.fixture
def outbox():
    """Caixa de saída do backend de email em memória."""
    from django.core import mail

    mail.outbox = []
    return mail.outbox


@pytest.fixture
def client():
    from django.test import Client
    return Client()


@pytest.fixture
def sample_instalacao(repo):
    """Instalação aguardando, com um anexo, criada há 2 horas."""
    from datetime import datetime, timedelta, timezone
    from painel.core.instalacoes.entities import ArquivoInstalacao, InstalacaoEntity

    storage_url = "https://storage.local/storage/v1/object/public/instalacoes/1000-a.png"
    return repo.add(InstalacaoEntity(
        dominio="cliente.com",
        telefone="11 99999-0000",
        coletar_acessos=True,
        arquivos=[ArquivoInstalacao("a.png", storage_url)],
        created_at=datetime.now(timezone.utc) - timedelta(hours=2),
    ))
