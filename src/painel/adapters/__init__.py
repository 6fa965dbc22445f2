"""
Adapters - Implementações de infraestrutura dos ports do core.

- supabase: banco e storage hospedados (REST via httpx)
- integrations: backend de email e API de automação (httpx)
- shared: Unit of Work
- django_app: views, API, eventos e tarefas Celery
"""
