"""
Django Settings do Painel de Instalações.

Configurações lidas do ambiente (arquivo .env em desenvolvimento).
O painel não tem banco local: os dados vivem no backend hospedado
(Supabase), acessado pelos adapters em painel.adapters.supabase.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Carregar variáveis de ambiente
load_dotenv()


def _lista(valor: str) -> list:
    return [item.strip() for item in (valor or '').split(',') if item.strip()]


# =============================================================================
# Caminhos Base
# =============================================================================

# Raiz do repositório (src/painel/config/settings.py → ../../..)
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent

# Pacote painel
PACKAGE_DIR = BASE_DIR / 'src' / 'painel'

# =============================================================================
# Segurança
# =============================================================================

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.getenv(
    'SECRET_KEY',
    'django-insecure-dev-key-change-in-production-please'
)

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = os.getenv('DEBUG', 'True').lower() in ('true', '1', 'yes')

ALLOWED_HOSTS = _lista(os.getenv('ALLOWED_HOSTS', 'localhost,127.0.0.1'))

# =============================================================================
# Aplicações
# =============================================================================

DJANGO_APPS = [
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
]

LOCAL_APPS = [
    'painel.adapters.django_app.instalacoes',
    'painel.adapters.django_app.backend',
]

INSTALLED_APPS = DJANGO_APPS + LOCAL_APPS

# =============================================================================
# Middleware
# =============================================================================

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'painel.config.urls'

# =============================================================================
# Templates
# =============================================================================

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'painel.config.wsgi.application'

# =============================================================================
# Banco de Dados
# =============================================================================

# Sem banco local: instalações ficam na tabela remota "instalacoes"
DATABASES = {}

# Sessão e mensagens em cookies assinados (não exigem banco)
SESSION_ENGINE = 'django.contrib.sessions.backends.signed_cookies'
MESSAGE_STORAGE = 'django.contrib.messages.storage.cookie.CookieStorage'

# =============================================================================
# Internacionalização
# =============================================================================

LANGUAGE_CODE = 'pt-br'
TIME_ZONE = 'America/Sao_Paulo'
USE_I18N = True
USE_TZ = True

# =============================================================================
# Arquivos Estáticos
# =============================================================================

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

# Upload de anexos no formulário do kanban
DATA_UPLOAD_MAX_MEMORY_SIZE = int(os.getenv('DATA_UPLOAD_MAX_MEMORY_SIZE', 10 * 1024 * 1024))

# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {asctime} {module} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'painel.core': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'painel.adapters': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}

# =============================================================================
# Email (SMTP)
# =============================================================================

EMAIL_BACKEND = os.getenv('EMAIL_BACKEND', 'django.core.mail.backends.smtp.EmailBackend')
EMAIL_HOST = os.getenv('SMTP_HOST', 'localhost')
EMAIL_PORT = int(os.getenv('SMTP_PORT', 587))
EMAIL_HOST_USER = os.getenv('SMTP_USER', '')
EMAIL_HOST_PASSWORD = os.getenv('SMTP_KEY', '')
EMAIL_USE_TLS = os.getenv('SMTP_USE_TLS', 'True').lower() in ('true', '1', 'yes')
EMAIL_TIMEOUT = int(os.getenv('SMTP_TIMEOUT', 15))

SMTP_FROM_EMAIL = os.getenv('SMTP_FROM_EMAIL', 'naoresponda@hublabel.com.br')
SMTP_FROM_NAME = os.getenv('SMTP_FROM_NAME', 'HubLabel')
DEFAULT_FROM_EMAIL = f'"{SMTP_FROM_NAME}" <{SMTP_FROM_EMAIL}>'

# =============================================================================
# Painel de Instalações (Domain)
# =============================================================================

SUPABASE_URL = os.getenv('SUPABASE_URL', '')
FRONTEND_URL = os.getenv('FRONTEND_URL', '').strip().rstrip('/')

PAINEL = {
    # 'supabase' = tabela remota; 'memory' = desenvolvimento sem backend
    'repository_backend': os.getenv(
        'REPOSITORY_BACKEND',
        'supabase' if SUPABASE_URL else 'memory',
    ),
    'http_timeout': float(os.getenv('HTTP_TIMEOUT', 10)),
    'supabase': {
        'url': SUPABASE_URL,
        'key': os.getenv('SUPABASE_SERVICE_ROLE_KEY', ''),
        'bucket': os.getenv('SUPABASE_STORAGE_BUCKET', 'instalacoes'),
    },
    # Backend que recebe as notificações (vazio = notificação desligada)
    'backend_url': os.getenv('BACKEND_URL', ''),
    'email': {
        'destinatarios_instalacoes': _lista(os.getenv('INSTALACOES_EMAIL_DESTINATARIOS', '')),
        'link_instalacoes': f'{FRONTEND_URL}/admin/instalacoes' if FRONTEND_URL else '',
        'logo_url': os.getenv('EMAIL_LOGO_URL', ''),
    },
    'acessos': {
        'senha_padrao': os.getenv('ACESSOS_SENHA_PADRAO', ''),
    },
    'n8n': {
        'url': os.getenv('N8N_URL', ''),
        'api_key': os.getenv('N8N_API_KEY', ''),
        'workflow_id': os.getenv('N8N_WORKFLOW_ID', ''),
    },
    # 'sync' = handlers na própria requisição; 'celery' = fila
    'event_publisher_mode': os.getenv('EVENT_PUBLISHER_MODE', 'sync'),
}

# =============================================================================
# Celery / Event Bus
# =============================================================================

REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379')

CELERY_BROKER_URL = os.getenv('CELERY_BROKER_URL', f'{REDIS_URL}/0')
CELERY_RESULT_BACKEND = os.getenv('CELERY_RESULT_BACKEND', f'{REDIS_URL}/1')

# Serialização
CELERY_ACCEPT_CONTENT = ['json']
CELERY_TASK_SERIALIZER = 'json'
CELERY_RESULT_SERIALIZER = 'json'

# Timezone
CELERY_TIMEZONE = TIME_ZONE
CELERY_ENABLE_UTC = True

# Uma tentativa por efeito
CELERY_TASK_ACKS_LATE = False
CELERY_TASK_MAX_RETRIES = 0

# Resultados
CELERY_RESULT_EXPIRES = 3600  # 1 hora
