"""
Adapter Django - Driving adapters (views, API) e eventos.

Apps:
- instalacoes: kanban HTML e API JSON
- backend: endpoints de email e integração (/api/...)
"""
