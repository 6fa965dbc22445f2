"""Adapters do backend hospedado: tabelas (PostgREST) e storage."""

from .client import SupabaseRestClient
from .clientes import SupabaseClienteAnonKeyRepository
from .repositories import SupabaseInstalacaoRepository
from .storage import SupabaseStorage

__all__ = [
    "SupabaseRestClient",
    "SupabaseClienteAnonKeyRepository",
    "SupabaseInstalacaoRepository",
    "SupabaseStorage",
]
