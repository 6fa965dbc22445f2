"""
Entidades do Domínio de Instalações.

Este módulo define as entidades de domínio do kanban de instalações
e o motor de ciclo de vida de status.

Entidades:
- InstalacaoEntity: Agregado principal (um pedido de instalação)
- StatusInstalacao: Colunas do kanban (aguardando → em_andamento → finalizado)
- PrioridadeInstalacao: normal | urgente
- ArquivoInstalacao: Referência a um anexo no storage
- MudancaStatus: Resultado do motor de ciclo de vida

Regras de Negócio Encapsuladas:
- Validação do domínio na criação
- Entrar em "em_andamento" limpa `coletar_acessos`
- Entrar em "finalizado" agenda remoção dos anexos e notificação
- Nenhuma transição é bloqueada (o operador pode arrastar para qualquer coluna)
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from painel.core.shared.exceptions import ValidationError


class StatusInstalacao(Enum):
    """
    Colunas do kanban, na ordem de exibição.

    Fluxo:
        AGUARDANDO → EM_ANDAMENTO → FINALIZADO

    O sistema não impede pular etapas nem voltar colunas.
    """

    AGUARDANDO = "aguardando"
    EM_ANDAMENTO = "em_andamento"
    FINALIZADO = "finalizado"

    @property
    def label(self) -> str:
        """Rótulo exibido no cabeçalho da coluna."""
        labels = {
            StatusInstalacao.AGUARDANDO: "Aguardando",
            StatusInstalacao.EM_ANDAMENTO: "Em andamento",
            StatusInstalacao.FINALIZADO: "Finalizado",
        }
        return labels[self]

    @classmethod
    def colunas(cls) -> List["StatusInstalacao"]:
        """Status na ordem fixa das colunas."""
        return list(cls)

    @classmethod
    def from_string(cls, value: str) -> "StatusInstalacao":
        """
        Converte string para enum.

        Aceita o valor persistido ("em_andamento"), o nome do enum
        ("EM_ANDAMENTO") ou o rótulo ("Em andamento").

        Raises:
            ValidationError: Se valor inválido
        """
        if isinstance(value, cls):
            return value

        texto = value.strip() if isinstance(value, str) else ""
        for status in cls:
            if texto.lower() in (status.value, status.label.lower()):
                return status

        try:
            return cls[texto.upper().replace(" ", "_")]
        except KeyError:
            raise ValidationError(f"Status inválido: {value}", field="status")


class PrioridadeInstalacao(Enum):
    """Prioridade do pedido. Afeta apenas a ordem de exibição."""

    NORMAL = "normal"
    URGENTE = "urgente"

    @property
    def label(self) -> str:
        return "Urgente" if self is PrioridadeInstalacao.URGENTE else "Normal"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "PrioridadeInstalacao":
        """
        Converte string para enum (vazio vira NORMAL).

        Raises:
            ValidationError: Se valor inválido
        """
        if isinstance(value, cls):
            return value
        if not value:
            return cls.NORMAL

        texto = value.strip().lower() if isinstance(value, str) else ""
        for prioridade in cls:
            if prioridade.value == texto:
                return prioridade

        raise ValidationError(f"Prioridade inválida: {value}", field="prioridade")


class EfeitoMudanca(Enum):
    """Efeitos colaterais agendados por uma mudança de status."""

    REMOVER_ARQUIVOS = "remover_arquivos"
    NOTIFICAR_FINALIZACAO = "notificar_finalizacao"


@dataclass(frozen=True)
class ArquivoInstalacao:
    """
    Referência a um anexo salvo no storage.

    Attributes:
        name: Nome original do arquivo
        url: URL pública no storage
    """

    name: str
    url: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "url": self.url}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ArquivoInstalacao":
        return cls(name=str(data.get("name") or ""), url=str(data.get("url") or ""))


@dataclass(frozen=True)
class MudancaStatus:
    """
    Resultado do motor de ciclo de vida.

    Attributes:
        campos: Payload de update a ser persistido (linha única)
        efeitos: Efeitos a executar depois que a escrita for bem-sucedida
    """

    campos: Dict[str, Any]
    efeitos: Tuple[EfeitoMudanca, ...] = ()

    def tem_efeito(self, efeito: EfeitoMudanca) -> bool:
        return efeito in self.efeitos

    @property
    def status(self) -> StatusInstalacao:
        return StatusInstalacao(self.campos["status"])


@dataclass
class InstalacaoEntity:
    """
    Entidade de Domínio: Instalação.

    Representa um pedido de instalação acompanhado pelo kanban.

    Invariantes:
    - `id` e `created_at` são atribuídos pelo banco e nunca mudam
    - Entrar em EM_ANDAMENTO com `coletar_acessos=True` grava `coletar_acessos=False`
    - Entrar em FINALIZADO remove os anexos do storage (best-effort); a lista
      `arquivos` do registro não é limpa
    - `dominio` pode ser vazio em registros existentes, mas é obrigatório na criação

    Attributes:
        id: Identificador gerado pelo banco (None antes do insert)
        dominio: Domínio do cliente
        telefone: Telefone de contato (opcional)
        acessos: Credenciais/anotações em texto livre (opcional)
        status: Coluna atual
        prioridade: normal | urgente
        coletar_acessos: Operador ainda precisa coletar credenciais
        arquivos: Anexos no storage, em ordem
        created_at: Criação (timezone-aware), usado no SLA e na ordenação

    Example:
        instalacao = InstalacaoEntity.criar(
            dominio="cliente.com",
            prioridade=PrioridadeInstalacao.URGENTE,
            coletar_acessos=True,
        )
        mudanca = instalacao.planejar_mudanca_status(StatusInstalacao.EM_ANDAMENTO)
        mudanca.campos  # {"status": "em_andamento", "coletar_acessos": False}
    """

    id: Optional[str] = None
    dominio: str = ""
    telefone: Optional[str] = None
    acessos: Optional[str] = None
    status: StatusInstalacao = field(default=StatusInstalacao.AGUARDANDO)
    prioridade: PrioridadeInstalacao = field(default=PrioridadeInstalacao.NORMAL)
    coletar_acessos: bool = False
    arquivos: List[ArquivoInstalacao] = field(default_factory=list)
    created_at: Optional[datetime] = None

    @classmethod
    def criar(
        cls,
        dominio: str,
        telefone: Optional[str] = None,
        acessos: Optional[str] = None,
        prioridade: PrioridadeInstalacao = PrioridadeInstalacao.NORMAL,
        coletar_acessos: bool = False,
        arquivos: Optional[List[ArquivoInstalacao]] = None,
    ) -> "InstalacaoEntity":
        """
        Factory method para um novo pedido (ainda não persistido).

        Args:
            dominio: Domínio do cliente (obrigatório)
            telefone: Telefone de contato
            acessos: Credenciais em texto livre
            prioridade: Prioridade inicial
            coletar_acessos: Se o operador precisa coletar acessos
            arquivos: Anexos já enviados ao storage

        Returns:
            Entidade em AGUARDANDO, sem id e sem created_at

        Raises:
            ValidationError: Se domínio vazio ou campo que não é texto
        """
        dominio_limpo = validar_texto(dominio or "", "dominio").strip()
        if not dominio_limpo:
            raise ValidationError("Informe o domínio.", field="dominio")

        return cls(
            dominio=dominio_limpo,
            telefone=_texto_opcional(telefone, "telefone"),
            acessos=_texto_opcional(acessos, "acessos"),
            status=StatusInstalacao.AGUARDANDO,
            prioridade=prioridade,
            coletar_acessos=bool(coletar_acessos),
            arquivos=list(arquivos or []),
        )

    def planejar_mudanca_status(self, novo_status: StatusInstalacao) -> MudancaStatus:
        """
        Motor de ciclo de vida: calcula o update e os efeitos de uma mudança.

        Função pura, não altera a entidade. O chamador persiste
        `campos` e só então chama `aplicar`.

        Regras:
        - EM_ANDAMENTO com `coletar_acessos=True` adiciona `coletar_acessos=False`
        - FINALIZADO agenda remoção dos anexos e notificação de finalização

        Args:
            novo_status: Coluna de destino

        Returns:
            MudancaStatus com payload e efeitos
        """
        campos: Dict[str, Any] = {"status": novo_status.value}
        efeitos: List[EfeitoMudanca] = []

        if novo_status == StatusInstalacao.EM_ANDAMENTO and self.coletar_acessos:
            campos["coletar_acessos"] = False

        if novo_status == StatusInstalacao.FINALIZADO:
            efeitos.append(EfeitoMudanca.REMOVER_ARQUIVOS)
            efeitos.append(EfeitoMudanca.NOTIFICAR_FINALIZACAO)

        return MudancaStatus(campos=campos, efeitos=tuple(efeitos))

    def aplicar(self, campos: Dict[str, Any]) -> None:
        """
        Aplica um payload já persistido ao snapshot em memória.

        Args:
            campos: Mesmo dicionário enviado ao repositório
        """
        for chave, valor in campos.items():
            if chave == "status":
                self.status = StatusInstalacao.from_string(valor)
            elif chave == "prioridade":
                self.prioridade = PrioridadeInstalacao.from_string(valor)
            elif chave == "arquivos":
                self.arquivos = [
                    a if isinstance(a, ArquivoInstalacao) else ArquivoInstalacao.from_dict(a)
                    for a in valor or []
                ]
            elif chave in ("dominio", "telefone", "acessos", "coletar_acessos"):
                setattr(self, chave, valor)

    @property
    def esta_finalizada(self) -> bool:
        return self.status == StatusInstalacao.FINALIZADO

    @property
    def eh_urgente(self) -> bool:
        return self.prioridade == PrioridadeInstalacao.URGENTE

    @property
    def urls_arquivos(self) -> List[str]:
        """URLs públicas dos anexos, na ordem do registro."""
        return [arquivo.url for arquivo in self.arquivos if arquivo.url]

    def __repr__(self) -> str:
        return (
            f"InstalacaoEntity("
            f"id={self.id}, "
            f"dominio='{self.dominio}', "
            f"status={self.status.value}, "
            f"prioridade={self.prioridade.value}"
            f")"
        )

    def __eq__(self, other: object) -> bool:
        """Comparação por ID (identidade de entidade)."""
        if not isinstance(other, InstalacaoEntity):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id) if self.id is not None else id(self)


def validar_texto(valor: Any, campo: str) -> str:
    """Garante que um campo vindo de fora é texto."""
    if not isinstance(valor, str):
        raise ValidationError(f"Campo {campo} deve ser texto.", field=campo)
    return valor


def _texto_opcional(valor: Optional[str], campo: str) -> Optional[str]:
    """Texto vazio (ou só espaços) vira None."""
    if valor is None:
        return None
    limpo = validar_texto(valor, campo).strip()
    return limpo or None
