"""
Coleta da anon key de um cliente por link com token.

O cliente recebe um link com `anon_key_token`; a página pública
consulta o nome do software e o domínio pelo token e depois grava a
anon key do projeto dele na linha correspondente.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from painel.core.shared.exceptions import EntityNotFoundError, ValidationError


logger = logging.getLogger(__name__)

LINK_INVALIDO = "Link inválido ou expirado."


@runtime_checkable
class ClienteAnonKeyRepository(Protocol):
    """Acesso às linhas de clientes pelo token do link."""

    def buscar_por_token(self, token: str) -> Optional[Dict[str, Any]]:
        """Linha do cliente, ou None se o token não existir."""
        ...

    def salvar_anon_key(self, token: str, anon_key: str) -> bool:
        """Grava a anon key; False se nenhuma linha tiver o token."""
        ...


class InMemoryClienteAnonKeyRepository:
    """Repositório em memória indexado pelo token."""

    def __init__(self, clientes: Optional[Dict[str, Dict[str, Any]]] = None):
        self.clientes: Dict[str, Dict[str, Any]] = dict(clientes or {})

    def buscar_por_token(self, token: str) -> Optional[Dict[str, Any]]:
        linha = self.clientes.get(token)
        return dict(linha) if linha is not None else None

    def salvar_anon_key(self, token: str, anon_key: str) -> bool:
        if token not in self.clientes:
            return False
        self.clientes[token]["supabase_anon_key"] = anon_key
        return True


@dataclass
class InfoAnonKeyOutputDTO:
    nome_software: str
    dominio: str

    def to_dict(self) -> dict:
        return {"nomeSoftware": self.nome_software, "dominio": self.dominio}


def _texto(valor: Any) -> str:
    return valor.strip() if isinstance(valor, str) else ""


class ObterInfoAnonKeyService:
    """
    Use Case: Dados exibidos na página de envio da anon key.

    Example:
        service = ObterInfoAnonKeyService(repo)
        service.execute("tok-123").dominio
    """

    def __init__(self, repo: ClienteAnonKeyRepository):
        self.repo = repo

    def execute(self, token: Any) -> InfoAnonKeyOutputDTO:
        """
        Raises:
            ValidationError: Token ausente
            EntityNotFoundError: Nenhum cliente com o token
            RepositoryError: Falha na consulta
        """
        token = _texto(token)
        if not token:
            raise ValidationError("token é obrigatório.", field="token")

        linha = self.repo.buscar_por_token(token)
        if linha is None:
            raise EntityNotFoundError(LINK_INVALIDO, entity_type="Cliente")

        # A coluna do nome já existiu com grafias diferentes
        nome = next(
            (linha[c] for c in ("nomeSoftware", "nome_software", "nomesoftware")
             if linha.get(c) is not None),
            "",
        )
        return InfoAnonKeyOutputDTO(nome_software=nome, dominio=linha.get("dominio") or "")


class SalvarAnonKeyService:
    """Use Case: Gravar a anon key enviada pelo cliente."""

    def __init__(self, repo: ClienteAnonKeyRepository):
        self.repo = repo

    def execute(self, token: Any, anon_key: Any) -> None:
        """
        Raises:
            ValidationError: Token/anon_key ausentes ou anon_key vazia
            EntityNotFoundError: Nenhum cliente com o token
            RepositoryError: Falha no update
        """
        if not isinstance(token, str) or not token or not isinstance(anon_key, str) or not anon_key:
            raise ValidationError("token e anon_key são obrigatórios.")

        anon_key = anon_key.strip()
        if not anon_key:
            raise ValidationError("anon_key não pode ser vazio.", field="anon_key")

        if not self.repo.salvar_anon_key(token, anon_key):
            raise EntityNotFoundError(LINK_INVALIDO, entity_type="Cliente")

        logger.info("Anon key gravada para o link informado")
