"""
Políticas de exibição do kanban.

Funções puras, recalculadas a cada renderização e nunca persistidas:
- ordenar_cartoes: urgentes primeiro, depois os mais antigos
- calcular_badge_entrega: contagem regressiva do prazo de 24h
- montar_quadro: agrupa por coluna aplicando a ordenação
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Iterable, List, Optional

from .entities import InstalacaoEntity, StatusInstalacao


PRAZO_ENTREGA_HORAS = 24

# Limites (em horas restantes) das faixas do badge
LIMITE_NORMAL_HORAS = 12
LIMITE_ALERTA_HORAS = 6

# Datas sem fuso vindas do banco são tratadas como UTC
_FUSO_PADRAO = timezone.utc


class SeveridadeBadge(Enum):
    """Faixa visual do badge de entrega."""

    SUCESSO = "sucesso"
    CRITICA = "critica"
    ALERTA = "alerta"
    NORMAL = "normal"


@dataclass(frozen=True)
class BadgeEntrega:
    """
    Badge de SLA exibido no cartão.

    Attributes:
        texto: "Entregue", "Atrasado" ou "Faltam {h}h para entregar"
        severidade: Faixa visual
        horas_restantes: Horas inteiras restantes (None se finalizado/sem data)
    """

    texto: str
    severidade: SeveridadeBadge
    horas_restantes: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "texto": self.texto,
            "severidade": self.severidade.value,
            "horas_restantes": self.horas_restantes,
        }


@dataclass(frozen=True)
class CartaoQuadro:
    """Instalação pronta para exibição, com o badge já calculado."""

    instalacao: InstalacaoEntity
    badge: BadgeEntrega


@dataclass
class ColunaQuadro:
    """Coluna do kanban com os cartões já ordenados."""

    status: StatusInstalacao
    cartoes: List[CartaoQuadro] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.cartoes)

    @property
    def label(self) -> str:
        return self.status.label


def _normalizar(momento: datetime) -> datetime:
    if momento.tzinfo is None:
        return momento.replace(tzinfo=_FUSO_PADRAO)
    return momento


def _chave_ordenacao(instalacao: InstalacaoEntity):
    # Sem created_at vai para o fim da faixa de prioridade
    tier = 0 if instalacao.eh_urgente else 1
    if instalacao.created_at is None:
        return (tier, 1, 0.0)
    return (tier, 0, _normalizar(instalacao.created_at).timestamp())


def ordenar_cartoes(instalacoes: Iterable[InstalacaoEntity]) -> List[InstalacaoEntity]:
    """
    Ordena cartões de uma coluna.

    Chave primária: urgente antes de normal.
    Chave secundária: created_at crescente (mais antigo primeiro).
    Ordenação estável: empates mantêm a ordem de entrada.

    Args:
        instalacoes: Cartões em qualquer ordem

    Returns:
        Nova lista ordenada (a entrada não é alterada)
    """
    return sorted(instalacoes, key=_chave_ordenacao)


def calcular_badge_entrega(
    instalacao: InstalacaoEntity,
    agora: Optional[datetime] = None,
) -> BadgeEntrega:
    """
    Calcula o badge de prazo de entrega.

    Regras:
    - FINALIZADO: "Entregue" (sucesso), independente do tempo
    - prazo = created_at + 24h; horas restantes arredondadas para baixo
    - restante <= 0: "Atrasado" (crítica)
    - 0 < restante <= 6: crítica
    - 6 < restante <= 12: alerta
    - restante > 12: normal

    Args:
        instalacao: Cartão a avaliar
        agora: Relógio de referência (default: agora em UTC)

    Returns:
        BadgeEntrega com texto e severidade
    """
    if instalacao.esta_finalizada:
        return BadgeEntrega("Entregue", SeveridadeBadge.SUCESSO)

    if instalacao.created_at is None:
        return BadgeEntrega("—", SeveridadeBadge.CRITICA)

    agora = _normalizar(agora or datetime.now(_FUSO_PADRAO))
    prazo = _normalizar(instalacao.created_at) + timedelta(hours=PRAZO_ENTREGA_HORAS)
    restante = math.floor((prazo - agora).total_seconds() / 3600)

    if restante <= 0:
        return BadgeEntrega("Atrasado", SeveridadeBadge.CRITICA, restante)

    texto = f"Faltam {restante}h para entregar"
    if restante > LIMITE_NORMAL_HORAS:
        severidade = SeveridadeBadge.NORMAL
    elif restante > LIMITE_ALERTA_HORAS:
        severidade = SeveridadeBadge.ALERTA
    else:
        severidade = SeveridadeBadge.CRITICA

    return BadgeEntrega(texto, severidade, restante)


def montar_quadro(
    instalacoes: Iterable[InstalacaoEntity],
    agora: Optional[datetime] = None,
) -> List[ColunaQuadro]:
    """
    Agrupa instalações nas três colunas, na ordem fixa.

    Cada coluna é ordenada de forma independente e cada cartão
    recebe seu badge calculado com o mesmo relógio.

    Returns:
        Lista com uma ColunaQuadro por status (colunas vazias incluídas)
    """
    agora = agora or datetime.now(_FUSO_PADRAO)
    todas = list(instalacoes)

    quadro = []
    for status in StatusInstalacao.colunas():
        da_coluna = [i for i in todas if i.status == status]
        cartoes = [
            CartaoQuadro(instalacao=i, badge=calcular_badge_entrega(i, agora))
            for i in ordenar_cartoes(da_coluna)
        ]
        quadro.append(ColunaQuadro(status=status, cartoes=cartoes))

    return quadro


def formatar_data_criacao(created_at: Optional[datetime], fuso=None) -> str:
    """
    Formata a data de criação do cartão ("dd/mm/aaaa às HH:MM").

    Args:
        created_at: Momento da criação
        fuso: Fuso de exibição (default: o da própria data)
    """
    if created_at is None:
        return "—"
    momento = _normalizar(created_at)
    if fuso is not None:
        momento = momento.astimezone(fuso)
    return momento.strftime("%d/%m/%Y às %H:%M")
