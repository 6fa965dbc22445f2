"""
Configuração do Django App de backend (email e integrações).
"""

from django.apps import AppConfig


class BackendConfig(AppConfig):
    """Configuração do app Backend."""

    name = 'painel.adapters.django_app.backend'
    label = 'backend'
    verbose_name = 'Backend (email e integrações)'
