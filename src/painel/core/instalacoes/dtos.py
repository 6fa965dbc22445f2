"""
Data Transfer Objects (DTOs) do Domínio de Instalações.

Tipos de DTOs:
- Input DTOs: Dados vindos de Forms/API, já convertidos para tipos Python
- Output DTOs: Cartões, colunas e quadro formatados para Views/API
- Resultado: Relatório de uma operação de escrita e seus efeitos
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from painel.core.shared.interfaces import EfeitoResultado

from .entities import InstalacaoEntity
from .policies import (
    BadgeEntrega,
    ColunaQuadro,
    calcular_badge_entrega,
    formatar_data_criacao,
)


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class ArquivoUploadDTO:
    """
    Arquivo recebido do operador, ainda não enviado ao storage.

    Attributes:
        nome: Nome original do arquivo
        conteudo: Bytes do arquivo
        content_type: MIME type informado pelo navegador
    """

    nome: str
    conteudo: bytes
    content_type: Optional[str] = None


@dataclass(frozen=True)
class CriarInstalacaoInputDTO:
    """
    DTO de entrada para criar instalação.

    Attributes:
        dominio: Domínio do cliente (obrigatório)
        telefone: Telefone de contato
        acessos: Credenciais em texto livre
        prioridade: "normal" | "urgente"
        coletar_acessos: Se o operador precisa coletar acessos
        arquivos: Arquivos a enviar para o storage antes do insert
    """

    dominio: str
    telefone: Optional[str] = None
    acessos: Optional[str] = None
    prioridade: str = "normal"
    coletar_acessos: bool = False
    arquivos: Tuple[ArquivoUploadDTO, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "dominio": self.dominio,
            "telefone": self.telefone,
            "acessos": self.acessos,
            "prioridade": self.prioridade,
            "coletar_acessos": self.coletar_acessos,
            "arquivos": [a.nome for a in self.arquivos],
        }


@dataclass(frozen=True)
class MoverInstalacaoInputDTO:
    """
    Intenção explícita de mover um cartão de coluna.

    Attributes:
        instalacao_id: ID do cartão
        para_status: Coluna de destino
        de_status: Coluna de origem vista pelo operador. Quando igual ao
            destino, o movimento é cancelado sem nenhuma chamada ao banco.
    """

    instalacao_id: str
    para_status: str
    de_status: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "instalacao_id": self.instalacao_id,
            "de_status": self.de_status,
            "para_status": self.para_status,
        }


@dataclass(frozen=True)
class AtualizarInstalacaoInputDTO:
    """
    DTO de entrada para edição manual.

    Campos None não são alterados. Para limpar telefone/acessos,
    envie string vazia.

    Attributes:
        instalacao_id: ID da instalação
        dominio: Novo domínio
        telefone: Novo telefone ("" limpa)
        acessos: Novos acessos ("" limpa)
        prioridade: "normal" | "urgente"
        coletar_acessos: Nova flag
        status: Nova coluna (passa pelo motor de ciclo de vida)
        manter_arquivos: URLs dos anexos que continuam no registro
            (None mantém todos). Remover aqui não apaga o arquivo do storage.
        novos_arquivos: Arquivos a anexar ao final da lista
    """

    instalacao_id: str
    dominio: Optional[str] = None
    telefone: Optional[str] = None
    acessos: Optional[str] = None
    prioridade: Optional[str] = None
    coletar_acessos: Optional[bool] = None
    status: Optional[str] = None
    manter_arquivos: Optional[Tuple[str, ...]] = None
    novos_arquivos: Tuple[ArquivoUploadDTO, ...] = field(default_factory=tuple)


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class InstalacaoOutputDTO:
    """
    Cartão do kanban com dados derivados para exibição.

    Attributes:
        id: Identificador
        dominio: Domínio do cliente
        telefone: Telefone de contato
        acessos: Credenciais em texto livre
        status: Valor persistido ("em_andamento")
        status_label: Rótulo da coluna ("Em andamento")
        prioridade: "normal" | "urgente"
        coletar_acessos: Flag de coleta pendente
        arquivos: Lista de {name, url}
        created_at: Criação
        data_criacao: created_at formatado ("dd/mm/aaaa às HH:MM")
        badge: Badge de prazo de entrega
    """

    id: Optional[str]
    dominio: str
    telefone: Optional[str]
    acessos: Optional[str]
    status: str
    status_label: str
    prioridade: str
    coletar_acessos: bool
    arquivos: List[dict]
    created_at: Optional[datetime]
    data_criacao: str
    badge: BadgeEntrega

    @property
    def eh_urgente(self) -> bool:
        return self.prioridade == "urgente"

    @property
    def esta_finalizada(self) -> bool:
        return self.status == "finalizado"

    @classmethod
    def from_entity(
        cls,
        entity: InstalacaoEntity,
        agora: Optional[datetime] = None,
        badge: Optional[BadgeEntrega] = None,
    ) -> "InstalacaoOutputDTO":
        """
        Converte entidade em DTO, calculando badge e data formatada.

        Args:
            entity: Instalação
            agora: Relógio de referência para o badge
            badge: Badge já calculado (evita recalcular no quadro)
        """
        return cls(
            id=entity.id,
            dominio=entity.dominio,
            telefone=entity.telefone,
            acessos=entity.acessos,
            status=entity.status.value,
            status_label=entity.status.label,
            prioridade=entity.prioridade.value,
            coletar_acessos=entity.coletar_acessos,
            arquivos=[a.to_dict() for a in entity.arquivos],
            created_at=entity.created_at,
            data_criacao=formatar_data_criacao(entity.created_at),
            badge=badge or calcular_badge_entrega(entity, agora),
        )

    def to_dict(self) -> dict:
        """Serializa para JSON."""
        return {
            "id": self.id,
            "dominio": self.dominio,
            "telefone": self.telefone,
            "acessos": self.acessos,
            "status": self.status,
            "status_label": self.status_label,
            "prioridade": self.prioridade,
            "coletar_acessos": self.coletar_acessos,
            "arquivos": list(self.arquivos),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "data_criacao": self.data_criacao,
            "badge": self.badge.to_dict(),
        }


@dataclass
class ColunaQuadroDTO:
    """Coluna do kanban pronta para renderização."""

    status: str
    label: str
    total: int
    cartoes: List[InstalacaoOutputDTO] = field(default_factory=list)

    @classmethod
    def from_coluna(cls, coluna: ColunaQuadro) -> "ColunaQuadroDTO":
        return cls(
            status=coluna.status.value,
            label=coluna.label,
            total=coluna.total,
            cartoes=[
                InstalacaoOutputDTO.from_entity(c.instalacao, badge=c.badge)
                for c in coluna.cartoes
            ],
        )

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "label": self.label,
            "total": self.total,
            "cartoes": [c.to_dict() for c in self.cartoes],
        }


@dataclass
class QuadroOutputDTO:
    """
    Quadro completo: três colunas na ordem fixa.

    Attributes:
        colunas: Colunas com cartões ordenados
        gerado_em: Relógio usado para os badges
    """

    colunas: List[ColunaQuadroDTO]
    gerado_em: datetime

    @property
    def total(self) -> int:
        return sum(c.total for c in self.colunas)

    def coluna(self, status: str) -> Optional[ColunaQuadroDTO]:
        for coluna in self.colunas:
            if coluna.status == status:
                return coluna
        return None

    def to_dict(self) -> dict:
        return {
            "colunas": [c.to_dict() for c in self.colunas],
            "total": self.total,
            "gerado_em": self.gerado_em.isoformat(),
        }


@dataclass
class AcessosOutputDTO:
    """Texto de acessos de uma instalação."""

    instalacao_id: str
    dominio: str
    texto: str

    def to_dict(self) -> dict:
        return {
            "instalacao_id": self.instalacao_id,
            "dominio": self.dominio,
            "texto": self.texto,
        }


@dataclass
class ResultadoOperacaoDTO:
    """
    Relatório de uma operação de escrita.

    Attributes:
        instalacao: Estado após a operação (na exclusão, o registro removido;
            None no no-op de mesma coluna)
        persistido: Se houve escrita no banco (False no no-op de mesma coluna)
        efeitos: Resultado de cada efeito colateral executado/enfileirado
        avisos: Mensagens de aviso para o operador (falhas de notificação)
    """

    instalacao: Optional[InstalacaoOutputDTO]
    persistido: bool = True
    efeitos: List[EfeitoResultado] = field(default_factory=list)
    avisos: List[str] = field(default_factory=list)

    @classmethod
    def com_efeitos(
        cls,
        instalacao: Optional[InstalacaoOutputDTO],
        efeitos: List[EfeitoResultado],
    ) -> "ResultadoOperacaoDTO":
        """Monta o resultado extraindo os avisos dos efeitos."""
        avisos = [e.aviso_operador for e in efeitos if e.aviso_operador]
        return cls(
            instalacao=instalacao,
            persistido=True,
            efeitos=list(efeitos),
            avisos=avisos,
        )

    def to_dict(self) -> dict:
        return {
            "instalacao": self.instalacao.to_dict() if self.instalacao else None,
            "persistido": self.persistido,
            "efeitos": [e.to_dict() for e in self.efeitos],
            "avisos": list(self.avisos),
        }
