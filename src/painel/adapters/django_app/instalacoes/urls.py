"""
URL patterns do kanban de instalações.

Endpoints HTML:
- GET /instalacoes/ - Quadro
- POST /instalacoes/criar/ - Criar instalação
- GET|POST /instalacoes/<id>/editar/ - Editar
- POST /instalacoes/<id>/mover/ - Mover de coluna
- POST /instalacoes/<id>/excluir/ - Excluir
- GET /instalacoes/<id>/acessos/ - Texto de acessos

Endpoints API JSON:
- GET|POST /instalacoes/api/
- GET|PATCH|DELETE /instalacoes/api/<id>/
- POST /instalacoes/api/<id>/mover/
- GET /instalacoes/api/<id>/acessos/
"""

from django.urls import path

from . import api_views, views

app_name = 'instalacoes'

urlpatterns = [
    # =========================================================================
    # Views HTML (Templates)
    # =========================================================================

    path('', views.QuadroView.as_view(), name='quadro'),
    path('criar/', views.InstalacaoCreateView.as_view(), name='criar'),
    path('<str:pk>/editar/', views.InstalacaoEditView.as_view(), name='editar'),
    path('<str:pk>/mover/', views.InstalacaoMoverView.as_view(), name='mover'),
    path('<str:pk>/excluir/', views.InstalacaoExcluirView.as_view(), name='excluir'),
    path('<str:pk>/acessos/', views.InstalacaoAcessosView.as_view(), name='acessos'),

    # =========================================================================
    # API JSON
    # =========================================================================

    path('api/', api_views.QuadroAPIView.as_view(), name='api_quadro'),
    path('api/<str:pk>/', api_views.InstalacaoAPIDetailView.as_view(), name='api_detail'),
    path('api/<str:pk>/mover/', api_views.InstalacaoAPIMoverView.as_view(), name='api_mover'),
    path('api/<str:pk>/acessos/', api_views.InstalacaoAPIAcessosView.as_view(), name='api_acessos'),
]
