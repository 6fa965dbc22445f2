"""
Contexto explícito do operador.

Substitui o estado global de sessão/autenticação: cada use case
recebe o contexto de quem está operando o painel, e os efeitos
colaterais (ex: envio de email) usam o token dele quando existir.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ContextoOperador:
    """
    Identifica o operador de uma requisição.

    Attributes:
        operador_id: ID do operador (ou "anonymous")
        access_token: Bearer token da sessão, quando disponível
    """

    operador_id: str = "anonymous"
    access_token: Optional[str] = None

    @property
    def autenticado(self) -> bool:
        return bool(self.access_token)

    def authorization_header(self) -> dict:
        """Header Authorization para chamadas autenticadas (vazio sem token)."""
        if not self.access_token:
            return {}
        return {"Authorization": f"Bearer {self.access_token}"}

    @classmethod
    def anonimo(cls) -> "ContextoOperador":
        return cls()
