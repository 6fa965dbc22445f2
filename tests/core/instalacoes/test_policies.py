"""
Testes das políticas de exibição do kanban.

Coverage:
- ordenar_cartoes: urgente primeiro, depois mais antigo, estável
- calcular_badge_entrega: faixas do SLA de 24h
- montar_quadro: três colunas na ordem fixa
- formatar_data_criacao
"""

import itertools
from datetime import datetime, timedelta, timezone

import pytest

from painel.core.instalacoes.entities import (
    InstalacaoEntity,
    PrioridadeInstalacao,
    StatusInstalacao,
)
from painel.core.instalacoes.policies import (
    SeveridadeBadge,
    calcular_badge_entrega,
    formatar_data_criacao,
    montar_quadro,
    ordenar_cartoes,
)


def _instalacao(id, horas_atras=None, urgente=False, status=StatusInstalacao.AGUARDANDO, agora=None):
    created_at = None
    if horas_atras is not None:
        created_at = agora - timedelta(hours=horas_atras)
    return InstalacaoEntity(
        id=id,
        dominio=f"{id}.com",
        status=status,
        prioridade=PrioridadeInstalacao.URGENTE if urgente else PrioridadeInstalacao.NORMAL,
        created_at=created_at,
    )


class TestOrdenacao:

    @pytest.mark.parametrize("ordem", list(itertools.permutations(range(4))))
    def test_urgentes_primeiro_depois_mais_antigos(self, agora, ordem):
        cartoes = [
            _instalacao("a", horas_atras=1, agora=agora),
            _instalacao("b", horas_atras=5, urgente=True, agora=agora),
            _instalacao("c", horas_atras=10, agora=agora),
            _instalacao("d", horas_atras=2, urgente=True, agora=agora),
        ]

        ordenados = ordenar_cartoes([cartoes[i] for i in ordem])

        assert [c.id for c in ordenados] == ["b", "d", "c", "a"]

    def test_sem_created_at_vai_para_o_fim_da_faixa(self, agora):
        cartoes = [
            _instalacao("sem-data", urgente=True, agora=agora),
            _instalacao("normal", horas_atras=3, agora=agora),
            _instalacao("urgente", horas_atras=1, urgente=True, agora=agora),
        ]

        assert [c.id for c in ordenar_cartoes(cartoes)] == ["urgente", "sem-data", "normal"]

    def test_ordenacao_estavel_em_empate(self, agora):
        cartoes = [_instalacao(str(i), horas_atras=4, agora=agora) for i in range(5)]

        assert [c.id for c in ordenar_cartoes(cartoes)] == ["0", "1", "2", "3", "4"]

    def test_datas_sem_fuso_tratadas_como_utc(self, agora):
        sem_fuso = InstalacaoEntity(id="x", created_at=datetime(2024, 5, 10, 8, 0))
        com_fuso = InstalacaoEntity(id="y", created_at=datetime(2024, 5, 10, 9, 0, tzinfo=timezone.utc))

        assert [c.id for c in ordenar_cartoes([com_fuso, sem_fuso])] == ["x", "y"]


class TestBadgeEntrega:

    def test_finalizado_sempre_entregue(self, agora):
        instalacao = _instalacao("a", horas_atras=100, status=StatusInstalacao.FINALIZADO, agora=agora)

        badge = calcular_badge_entrega(instalacao, agora)

        assert badge.texto == "Entregue"
        assert badge.severidade == SeveridadeBadge.SUCESSO

    @pytest.mark.parametrize("horas_atras,texto,severidade", [
        (1, "Faltam 23h para entregar", SeveridadeBadge.NORMAL),
        (11, "Faltam 13h para entregar", SeveridadeBadge.NORMAL),
        (12, "Faltam 12h para entregar", SeveridadeBadge.ALERTA),
        (17, "Faltam 7h para entregar", SeveridadeBadge.ALERTA),
        (18, "Faltam 6h para entregar", SeveridadeBadge.CRITICA),
        (23, "Faltam 1h para entregar", SeveridadeBadge.CRITICA),
        (24, "Atrasado", SeveridadeBadge.CRITICA),
        (30, "Atrasado", SeveridadeBadge.CRITICA),
    ])
    def test_faixas_do_prazo(self, agora, horas_atras, texto, severidade):
        instalacao = _instalacao("a", horas_atras=horas_atras, agora=agora)

        badge = calcular_badge_entrega(instalacao, agora)

        assert badge.texto == texto
        assert badge.severidade == severidade

    def test_horas_arredondadas_para_baixo(self, agora):
        instalacao = InstalacaoEntity(id="a", created_at=agora - timedelta(hours=10, minutes=30))

        badge = calcular_badge_entrega(instalacao, agora)

        assert badge.horas_restantes == 13
        assert badge.texto == "Faltam 13h para entregar"

    def test_menos_de_uma_hora_e_atrasado(self, agora):
        instalacao = InstalacaoEntity(id="a", created_at=agora - timedelta(hours=23, minutes=30))

        assert calcular_badge_entrega(instalacao, agora).texto == "Atrasado"

    def test_sem_created_at(self, agora):
        badge = calcular_badge_entrega(InstalacaoEntity(id="a"), agora)

        assert badge.texto == "—"
        assert badge.severidade == SeveridadeBadge.CRITICA


class TestMontarQuadro:

    def test_tres_colunas_mesmo_vazias(self, agora):
        quadro = montar_quadro([], agora)

        assert [c.status for c in quadro] == StatusInstalacao.colunas()
        assert all(c.total == 0 for c in quadro)

    def test_agrupa_e_ordena_por_coluna(self, agora):
        instalacoes = [
            _instalacao("a", horas_atras=1, agora=agora),
            _instalacao("b", horas_atras=2, status=StatusInstalacao.EM_ANDAMENTO, agora=agora),
            _instalacao("c", horas_atras=5, agora=agora),
            _instalacao("d", horas_atras=3, urgente=True, status=StatusInstalacao.FINALIZADO, agora=agora),
        ]

        aguardando, em_andamento, finalizado = montar_quadro(instalacoes, agora)

        assert [c.instalacao.id for c in aguardando.cartoes] == ["c", "a"]
        assert [c.instalacao.id for c in em_andamento.cartoes] == ["b"]
        assert finalizado.cartoes[0].badge.texto == "Entregue"
        assert aguardando.label == "Aguardando"


class TestFormatarData:

    def test_formato_dia_mes_ano_hora(self):
        momento = datetime(2024, 3, 5, 14, 7, tzinfo=timezone.utc)
        assert formatar_data_criacao(momento) == "05/03/2024 às 14:07"

    def test_converte_para_fuso_informado(self):
        momento = datetime(2024, 3, 5, 14, 7, tzinfo=timezone.utc)
        fuso = timezone(timedelta(hours=-3))
        assert formatar_data_criacao(momento, fuso) == "05/03/2024 às 11:07"

    def test_sem_data(self):
        assert formatar_data_criacao(None) == "—"
