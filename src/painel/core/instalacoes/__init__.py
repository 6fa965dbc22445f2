"""
Domínio de Instalações (kanban).

Contém:
- Entidades e motor de ciclo de vida de status
- Políticas de exibição (ordenação, badge de prazo, quadro)
- DTOs, eventos, ports e use cases
"""

from .entities import (
    InstalacaoEntity,
    StatusInstalacao,
    PrioridadeInstalacao,
    ArquivoInstalacao,
    MudancaStatus,
    EfeitoMudanca,
)
from .policies import (
    BadgeEntrega,
    SeveridadeBadge,
    ordenar_cartoes,
    calcular_badge_entrega,
    montar_quadro,
)
from .acessos import gerar_texto_acessos
from .arquivos import GerenciadorArquivos
from .handlers import ManipuladoresInstalacao
from .use_cases import (
    CriarInstalacaoService,
    MoverInstalacaoService,
    AtualizarInstalacaoService,
    ExcluirInstalacaoService,
    ObterInstalacaoService,
    ListarQuadroService,
    GerarAcessosService,
)

__all__ = [
    "InstalacaoEntity",
    "StatusInstalacao",
    "PrioridadeInstalacao",
    "ArquivoInstalacao",
    "MudancaStatus",
    "EfeitoMudanca",
    "BadgeEntrega",
    "SeveridadeBadge",
    "ordenar_cartoes",
    "calcular_badge_entrega",
    "montar_quadro",
    "gerar_texto_acessos",
    "GerenciadorArquivos",
    "ManipuladoresInstalacao",
    "CriarInstalacaoService",
    "MoverInstalacaoService",
    "AtualizarInstalacaoService",
    "ExcluirInstalacaoService",
    "ObterInstalacaoService",
    "ListarQuadroService",
    "GerarAcessosService",
]
