"""WSGI application do Painel de Instalações."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'painel.config.settings')

application = get_wsgi_application()
