"""
Painel HubLabel - Administração de Instalações.

Pacotes:
- core: domínio puro (instalações, notificações, integrações)
- adapters: Supabase, HTTP, Django e Celery
- config: settings, container de DI e aplicação Celery
"""

__version__ = "1.0.0"
