"""
Texto de acessos de uma instalação concluída.

Monta o bloco de credenciais copiado pelo operador nos cartões
finalizados, a partir do domínio base do cliente.
"""

import re
from dataclasses import dataclass
from typing import List, Tuple
from urllib.parse import urlsplit


DOMINIO_NAO_INFORMADO = "(domínio não informado)"

_PREFIXO_APP = re.compile(r"^app\.", re.IGNORECASE)


@dataclass(frozen=True)
class BlocoAcesso:
    """Um serviço e seus pares (rótulo, valor)."""

    titulo: str
    itens: Tuple[Tuple[str, str], ...]


def extrair_dominio_base(dominio: str) -> str:
    """
    Remove esquema, caminho e o prefixo "app." do domínio.

    Example:
        extrair_dominio_base("https://app.cliente.com/login")  # "cliente.com"
    """
    texto = (dominio or "").strip()
    if not texto:
        return ""

    url = texto if texto.startswith("http") else "https://" + texto
    try:
        host = urlsplit(url).hostname or texto
    except ValueError:
        # Texto livre que não é URL válida (ex: colchete sem par)
        host = texto

    return _PREFIXO_APP.sub("", host)


def montar_blocos_acesso(dominio: str, senha_padrao: str) -> List[BlocoAcesso]:
    """
    Blocos de acesso na ordem em que aparecem no texto.

    Args:
        dominio: Domínio do cliente (com ou sem "app."/esquema)
        senha_padrao: Senha inicial configurada para as instalações
    """
    base = extrair_dominio_base(dominio) or DOMINIO_NAO_INFORMADO

    return [
        BlocoAcesso("n8n", (
            ("URL n8n", f"https://back.{base}/home/workflows"),
            ("Email", f"suporte@{base}"),
            ("Senha", senha_padrao),
        )),
        BlocoAcesso("Portainer", (
            ("URL", f"painel.{base}"),
            ("Login", "admin"),
            ("Senha", senha_padrao),
        )),
        BlocoAcesso("Aplicativo", (
            ("URL", f"app.{base}/login"),
        )),
        BlocoAcesso("Painel de Administração", (
            ("URL", f"app.{base}/acesso-admin"),
            ("Login", "admin"),
            ("Senha", senha_padrao),
        )),
    ]


def gerar_texto_acessos(dominio: str, senha_padrao: str) -> str:
    """
    Gera o texto plano de acessos para copiar/colar.

    Formato:
        *INSTALAÇÃO COMPLETA*

        * *n8n*
        * URL n8n: https://back.cliente.com/home/workflows
        ...
    """
    linhas = ["*INSTALAÇÃO COMPLETA*", ""]
    for bloco in montar_blocos_acesso(dominio, senha_padrao):
        linhas.append(f"* *{bloco.titulo}*")
        linhas.extend(f"* {rotulo}: {valor}" for rotulo, valor in bloco.itens)
        linhas.append("")
    return "\n".join(linhas).strip()
