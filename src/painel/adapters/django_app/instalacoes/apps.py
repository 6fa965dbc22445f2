"""
Configuração do Django App para Instalações.
"""

from django.apps import AppConfig


class InstalacoesConfig(AppConfig):
    """Configuração do app Instalações (kanban)."""

    name = 'painel.adapters.django_app.instalacoes'
    label = 'instalacoes'
    verbose_name = 'Instalações'
