"""
Linhas de clientes (tabela usuarios_SAAS_Agentes) acessadas pelo
token do link de envio da anon key.

Implementa o port ClienteAnonKeyRepository do Core.
"""

from typing import Any, Dict, Optional
import logging

from .client import SupabaseRestClient

logger = logging.getLogger(__name__)

TABELA_CLIENTES = "usuarios_SAAS_Agentes"


class SupabaseClienteAnonKeyRepository:
    """
    Implementação REST do ClienteAnonKeyRepository.

    Example:
        repo = SupabaseClienteAnonKeyRepository(SupabaseRestClient(url, key))
        repo.salvar_anon_key("tok-123", "eyJ...")
    """

    def __init__(self, client: SupabaseRestClient, tabela: str = TABELA_CLIENTES):
        self.client = client
        self.tabela = tabela

    def buscar_por_token(self, token: str) -> Optional[Dict[str, Any]]:
        return self.client.select(
            self.tabela, filtros={"anon_key_token": token}, single=True
        )

    def salvar_anon_key(self, token: str, anon_key: str) -> bool:
        linhas = self.client.update(
            self.tabela,
            {"supabase_anon_key": anon_key},
            filtros={"anon_key_token": token},
        )
        logger.debug(f"Anon key: {len(linhas)} linha(s) atualizada(s)")
        return bool(linhas)
