"""
Configuração do Celery para processamento assíncrono.

Com EVENT_PUBLISHER_MODE=celery, os efeitos dos Domain Events
(emails de nova instalação/finalização e remoção de anexos) rodam
fora da requisição, no worker.

Uso:
    celery -A painel.config.celery worker -l INFO -Q events
"""

import os
from celery import Celery
from kombu import Queue, Exchange

# Definir módulo de settings do Django
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'painel.config.settings')

# Criar aplicação Celery
app = Celery('painel')

# Carregar configurações do Django (prefixo CELERY_)
app.config_from_object('django.conf:settings', namespace='CELERY')

app.conf.update(
    # Uma tarefa por vez
    worker_prefetch_multiplier=1,

    # Sem retry: o efeito é registrado no log e descartado
    task_default_retry_delay=0,

    # Monitoramento
    worker_send_task_events=True,
    task_send_sent_event=True,
)

# Definir filas
app.conf.task_queues = (
    Queue('default', Exchange('default'), routing_key='default'),
    Queue('events', Exchange('events'), routing_key='events.#'),
)

app.conf.task_default_queue = 'default'

# Roteamento de tarefas para filas
app.conf.task_routes = {
    'painel.adapters.django_app.events.handlers.*': {'queue': 'events'},
}

# Auto-descoberta de tarefas
app.autodiscover_tasks([
    'painel.adapters.django_app.events',
], related_name='handlers')
