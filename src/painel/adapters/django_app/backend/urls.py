"""
URL patterns do backend (montadas em /api/).

- POST /api/enviar-email
- POST /api/email-nova-instalacao
- POST /api/email-instalacao-finalizada
- GET /api/n8n/workflow-link
- GET /api/inserir-anon-key-info
- POST /api/salvar-anon-key
"""

from django.urls import path

from painel.core.notificacoes.entities import TipoNotificacao

from . import views

app_name = 'backend'

urlpatterns = [
    path('enviar-email', views.EnviarEmailView.as_view(), name='enviar_email'),
    path(
        'email-nova-instalacao',
        views.EmailInstalacaoView.as_view(tipo=TipoNotificacao.NOVA_INSTALACAO),
        name='email_nova_instalacao',
    ),
    path(
        'email-instalacao-finalizada',
        views.EmailInstalacaoView.as_view(tipo=TipoNotificacao.INSTALACAO_FINALIZADA),
        name='email_instalacao_finalizada',
    ),
    path('n8n/workflow-link', views.WorkflowLinkView.as_view(), name='workflow_link'),
    path('inserir-anon-key-info', views.InserirAnonKeyInfoView.as_view(), name='inserir_anon_key_info'),
    path('salvar-anon-key', views.SalvarAnonKeyView.as_view(), name='salvar_anon_key'),
]
