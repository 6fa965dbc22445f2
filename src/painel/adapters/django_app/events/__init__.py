"""Publicação de Domain Events e tarefas Celery."""
