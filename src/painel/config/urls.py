"""
URL Configuration do Painel de Instalações.

Estrutura:
- /instalacoes/ - Kanban (HTML) e API JSON de instalações
- /api/ - Endpoints de email e integração n8n
- /health/ - Health check
"""

from django.http import JsonResponse
from django.urls import path, include


def health(request):
    return JsonResponse({'status': 'ok'})


urlpatterns = [
    # Kanban de Instalações
    path('instalacoes/', include('painel.adapters.django_app.instalacoes.urls')),

    # Backend (email, n8n)
    path('api/', include('painel.adapters.django_app.backend.urls')),

    # Health check
    path('health/', health, name='health'),
]
