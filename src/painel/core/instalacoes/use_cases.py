"""
Use Cases (Application Services) do Domínio de Instalações.

Use Cases implementados:
- CriarInstalacaoService: Envia anexos, insere o pedido, notifica
- MoverInstalacaoService: Intenção explícita de mover cartão de coluna
- AtualizarInstalacaoService: Edição manual de qualquer campo
- ExcluirInstalacaoService: Remoção definitiva
- ObterInstalacaoService: Obtém uma instalação
- ListarQuadroService: Monta o kanban (três colunas ordenadas)
- GerarAcessosService: Texto de acessos para copiar

Responsabilidades dos Use Cases:
- Converter DTOs de entrada em tipos do domínio
- Consultar o motor de ciclo de vida antes de persistir
- Persistir com uma única escrita por operação
- Publicar eventos (efeitos rodam só depois da escrita)
- Retornar DTOs de saída com o relatório dos efeitos

Toda operação de escrita recebe o ContextoOperador explicitamente.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from painel.core.shared.context import ContextoOperador
from painel.core.shared.exceptions import EntityNotFoundError, ValidationError
from painel.core.shared.interfaces import UnitOfWork

from .acessos import extrair_dominio_base, gerar_texto_acessos
from .arquivos import GerenciadorArquivos
from .dtos import (
    AcessosOutputDTO,
    AtualizarInstalacaoInputDTO,
    ColunaQuadroDTO,
    CriarInstalacaoInputDTO,
    InstalacaoOutputDTO,
    MoverInstalacaoInputDTO,
    QuadroOutputDTO,
    ResultadoOperacaoDTO,
)
from .entities import (
    EfeitoMudanca,
    InstalacaoEntity,
    MudancaStatus,
    PrioridadeInstalacao,
    StatusInstalacao,
    validar_texto,
)
from .events import (
    InstalacaoAtualizadaEvent,
    InstalacaoCriadaEvent,
    InstalacaoExcluidaEvent,
    InstalacaoFinalizadaEvent,
    InstalacaoStatusAlteradoEvent,
)
from .policies import montar_quadro
from .ports import InstalacaoRepository


logger = logging.getLogger(__name__)


def _buscar_ou_falhar(repo: InstalacaoRepository, instalacao_id: str) -> InstalacaoEntity:
    instalacao = repo.get_by_id(instalacao_id)
    if not instalacao:
        raise EntityNotFoundError(
            f"Instalação {instalacao_id} não encontrada",
            entity_type="Instalacao",
            entity_id=str(instalacao_id),
        )
    return instalacao


def _publicar_mudanca_status(
    uow: UnitOfWork,
    instalacao: InstalacaoEntity,
    anterior: StatusInstalacao,
    mudanca: MudancaStatus,
    urls_arquivos: List[str],
    contexto: ContextoOperador,
) -> None:
    """Enfileira os eventos de uma mudança de status já persistida."""
    uow.publish_event(
        InstalacaoStatusAlteradoEvent(
            aggregate_id=instalacao.id,
            de_status=anterior.value,
            para_status=mudanca.status.value,
            coletar_acessos_limpo="coletar_acessos" in mudanca.campos,
            operador_id=contexto.operador_id,
        )
    )

    if mudanca.tem_efeito(EfeitoMudanca.REMOVER_ARQUIVOS) or mudanca.tem_efeito(
        EfeitoMudanca.NOTIFICAR_FINALIZACAO
    ):
        uow.publish_event(
            InstalacaoFinalizadaEvent(
                aggregate_id=instalacao.id,
                dominio=instalacao.dominio,
                telefone=instalacao.telefone,
                # Anexos referenciados no momento da transição
                urls_arquivos=(
                    list(urls_arquivos)
                    if mudanca.tem_efeito(EfeitoMudanca.REMOVER_ARQUIVOS)
                    else []
                ),
                operador_id=contexto.operador_id,
            )
        )


class CriarInstalacaoService:
    """
    Use Case: Criar um pedido de instalação.

    Fluxo:
    1. Validar domínio e prioridade
    2. Enviar anexos ao storage (falha aborta antes do insert)
    3. Inserir a linha (status "aguardando")
    4. Disparar InstalacaoCriada → email de nova instalação

    Example:
        service = CriarInstalacaoService(repo, uow, gerenciador)
        resultado = service.execute(
            CriarInstalacaoInputDTO(dominio="cliente.com", prioridade="urgente"),
            ContextoOperador("op-1", "token"),
        )
        resultado.avisos  # falhas de notificação, se houver
    """

    def __init__(
        self,
        instalacao_repo: InstalacaoRepository,
        uow: UnitOfWork,
        arquivos: GerenciadorArquivos,
    ):
        self.instalacao_repo = instalacao_repo
        self.uow = uow
        self.arquivos = arquivos

    def execute(
        self,
        input_dto: CriarInstalacaoInputDTO,
        contexto: Optional[ContextoOperador] = None,
    ) -> ResultadoOperacaoDTO:
        """
        Raises:
            ValidationError: Domínio vazio ou prioridade inválida
            IntegrationError: Falha no upload de um anexo
            RepositoryError: Falha no insert
        """
        contexto = contexto or ContextoOperador.anonimo()
        prioridade = PrioridadeInstalacao.from_string(input_dto.prioridade)

        # Valida antes de qualquer upload
        instalacao = InstalacaoEntity.criar(
            dominio=input_dto.dominio,
            telefone=input_dto.telefone,
            acessos=input_dto.acessos,
            prioridade=prioridade,
            coletar_acessos=input_dto.coletar_acessos,
        )
        instalacao.arquivos = self.arquivos.upload_all(input_dto.arquivos)

        with self.uow.com_contexto(contexto):
            instalacao = self.instalacao_repo.create(instalacao)

            self.uow.publish_event(
                InstalacaoCriadaEvent(
                    aggregate_id=instalacao.id,
                    dominio=instalacao.dominio,
                    telefone=instalacao.telefone,
                    prioridade=instalacao.prioridade.value,
                    coletar_acessos=instalacao.coletar_acessos,
                    operador_id=contexto.operador_id,
                )
            )

        logger.info(f"Instalação {instalacao.id} criada por {contexto.operador_id}")
        return ResultadoOperacaoDTO.com_efeitos(
            InstalacaoOutputDTO.from_entity(instalacao), self.uow.efeitos
        )


class MoverInstalacaoService:
    """
    Use Case: Mover cartão de coluna (requestMove).

    Fluxo:
    1. Origem igual ao destino → no-op, nenhuma chamada ao banco
    2. Buscar instalação
    3. Motor de ciclo de vida calcula payload e efeitos
    4. Uma única escrita (status e, se for o caso, coletar_acessos)
    5. Disparar StatusAlterado (+ Finalizada ao entrar em "finalizado")

    Sem `de_status`, a mudança é explícita e as regras valem mesmo
    que o destino seja a coluna atual.
    """

    def __init__(self, instalacao_repo: InstalacaoRepository, uow: UnitOfWork):
        self.instalacao_repo = instalacao_repo
        self.uow = uow

    def execute(
        self,
        input_dto: MoverInstalacaoInputDTO,
        contexto: Optional[ContextoOperador] = None,
    ) -> ResultadoOperacaoDTO:
        """
        Raises:
            ValidationError: Status inválido
            EntityNotFoundError: Instalação não existe
            RepositoryError: Falha no update (estado anterior preservado)
        """
        contexto = contexto or ContextoOperador.anonimo()
        para_status = StatusInstalacao.from_string(input_dto.para_status)
        de_status = (
            StatusInstalacao.from_string(input_dto.de_status)
            if input_dto.de_status
            else None
        )

        if de_status is not None and de_status == para_status:
            logger.debug(
                f"Movimento de {input_dto.instalacao_id} para a mesma coluna ignorado"
            )
            return ResultadoOperacaoDTO(instalacao=None, persistido=False)

        instalacao = _buscar_ou_falhar(self.instalacao_repo, input_dto.instalacao_id)
        anterior = instalacao.status
        urls_arquivos = instalacao.urls_arquivos
        mudanca = instalacao.planejar_mudanca_status(para_status)

        with self.uow.com_contexto(contexto):
            self.instalacao_repo.update(instalacao.id, mudanca.campos)
            instalacao.aplicar(mudanca.campos)

            _publicar_mudanca_status(
                self.uow, instalacao, anterior, mudanca, urls_arquivos, contexto
            )

        logger.info(
            f"Instalação {instalacao.id} movida de {anterior.value} para "
            f"{para_status.value} por {contexto.operador_id}"
        )
        return ResultadoOperacaoDTO.com_efeitos(
            InstalacaoOutputDTO.from_entity(instalacao), self.uow.efeitos
        )


class AtualizarInstalacaoService:
    """
    Use Case: Edição manual.

    Regras:
    - Campos None não mudam; telefone/acessos vazios viram None
    - Anexos removidos da lista não são apagados do storage
    - Novos anexos são enviados antes da escrita e entram no fim da lista
    - Mudança de status passa pelo motor de ciclo de vida (mesmos efeitos
      de um movimento)
    - Sem alterações, nada é persistido
    """

    def __init__(
        self,
        instalacao_repo: InstalacaoRepository,
        uow: UnitOfWork,
        arquivos: GerenciadorArquivos,
    ):
        self.instalacao_repo = instalacao_repo
        self.uow = uow
        self.arquivos = arquivos

    def execute(
        self,
        input_dto: AtualizarInstalacaoInputDTO,
        contexto: Optional[ContextoOperador] = None,
    ) -> ResultadoOperacaoDTO:
        """
        Raises:
            ValidationError: Domínio vazio, status ou prioridade inválidos
            EntityNotFoundError: Instalação não existe
            IntegrationError: Falha no upload de um anexo
            RepositoryError: Falha no update
        """
        contexto = contexto or ContextoOperador.anonimo()
        instalacao = _buscar_ou_falhar(self.instalacao_repo, input_dto.instalacao_id)

        campos = self._campos_editados(instalacao, input_dto)

        novo_status = (
            StatusInstalacao.from_string(input_dto.status) if input_dto.status else None
        )
        mudanca: Optional[MudancaStatus] = None
        if novo_status is not None and novo_status != instalacao.status:
            # Motor de ciclo de vida avalia o estado já editado
            candidata = InstalacaoEntity(
                id=instalacao.id,
                coletar_acessos=campos.get("coletar_acessos", instalacao.coletar_acessos),
                status=instalacao.status,
            )
            mudanca = candidata.planejar_mudanca_status(novo_status)
            campos.update(mudanca.campos)

        if input_dto.novos_arquivos or input_dto.manter_arquivos is not None:
            arquivos = self._arquivos_editados(instalacao, input_dto)
            if arquivos != instalacao.arquivos:
                campos["arquivos"] = [a.to_dict() for a in arquivos]

        if not campos:
            return ResultadoOperacaoDTO(
                instalacao=InstalacaoOutputDTO.from_entity(instalacao),
                persistido=False,
            )

        anterior = instalacao.status
        urls_arquivos = instalacao.urls_arquivos

        with self.uow.com_contexto(contexto):
            self.instalacao_repo.update(instalacao.id, campos)
            instalacao.aplicar(campos)

            self.uow.publish_event(
                InstalacaoAtualizadaEvent(
                    aggregate_id=instalacao.id,
                    campos_alterados=sorted(campos.keys()),
                    operador_id=contexto.operador_id,
                )
            )
            if mudanca is not None:
                _publicar_mudanca_status(
                    self.uow, instalacao, anterior, mudanca, urls_arquivos, contexto
                )

        return ResultadoOperacaoDTO.com_efeitos(
            InstalacaoOutputDTO.from_entity(instalacao), self.uow.efeitos
        )

    def _campos_editados(
        self,
        instalacao: InstalacaoEntity,
        input_dto: AtualizarInstalacaoInputDTO,
    ) -> Dict[str, Any]:
        campos: Dict[str, Any] = {}

        if input_dto.dominio is not None:
            dominio = validar_texto(input_dto.dominio, "dominio").strip()
            if not dominio:
                raise ValidationError("Informe o domínio.", field="dominio")
            if dominio != instalacao.dominio:
                campos["dominio"] = dominio

        for nome in ("telefone", "acessos"):
            valor = getattr(input_dto, nome)
            if valor is None:
                continue
            valor = validar_texto(valor, nome).strip() or None
            if valor != getattr(instalacao, nome):
                campos[nome] = valor

        if input_dto.prioridade is not None:
            prioridade = PrioridadeInstalacao.from_string(input_dto.prioridade)
            if prioridade != instalacao.prioridade:
                campos["prioridade"] = prioridade.value

        if (
            input_dto.coletar_acessos is not None
            and bool(input_dto.coletar_acessos) != instalacao.coletar_acessos
        ):
            campos["coletar_acessos"] = bool(input_dto.coletar_acessos)

        return campos

    def _arquivos_editados(self, instalacao, input_dto):
        if input_dto.manter_arquivos is None:
            mantidos = list(instalacao.arquivos)
        else:
            manter = set(input_dto.manter_arquivos)
            mantidos = [a for a in instalacao.arquivos if a.url in manter]
            removidos = len(instalacao.arquivos) - len(mantidos)
            if removidos:
                logger.info(
                    f"{removidos} anexo(s) desvinculado(s) da instalação {instalacao.id} "
                    f"(arquivos mantidos no storage)"
                )

        return mantidos + self.arquivos.upload_all(input_dto.novos_arquivos)


class ExcluirInstalacaoService:
    """
    Use Case: Excluir instalação (hard delete).

    Os anexos não são removidos do storage.
    """

    def __init__(self, instalacao_repo: InstalacaoRepository, uow: UnitOfWork):
        self.instalacao_repo = instalacao_repo
        self.uow = uow

    def execute(
        self,
        instalacao_id: str,
        contexto: Optional[ContextoOperador] = None,
    ) -> ResultadoOperacaoDTO:
        """
        Raises:
            EntityNotFoundError: Instalação não existe
            RepositoryError: Falha no delete
        """
        contexto = contexto or ContextoOperador.anonimo()
        instalacao = _buscar_ou_falhar(self.instalacao_repo, instalacao_id)

        with self.uow.com_contexto(contexto):
            self.instalacao_repo.delete(instalacao.id)

            self.uow.publish_event(
                InstalacaoExcluidaEvent(
                    aggregate_id=instalacao.id,
                    dominio=instalacao.dominio,
                    operador_id=contexto.operador_id,
                )
            )

        logger.info(f"Instalação {instalacao.id} excluída por {contexto.operador_id}")
        return ResultadoOperacaoDTO.com_efeitos(
            InstalacaoOutputDTO.from_entity(instalacao), self.uow.efeitos
        )


class ObterInstalacaoService:
    """Use Case: Obter uma instalação."""

    def __init__(self, instalacao_repo: InstalacaoRepository):
        self.instalacao_repo = instalacao_repo

    def execute(self, instalacao_id: str) -> InstalacaoOutputDTO:
        """
        Raises:
            EntityNotFoundError: Instalação não existe
        """
        instalacao = _buscar_ou_falhar(self.instalacao_repo, instalacao_id)
        return InstalacaoOutputDTO.from_entity(instalacao)


class ListarQuadroService:
    """
    Use Case: Montar o kanban.

    Três colunas na ordem fixa, cada uma ordenada (urgentes primeiro,
    depois mais antigas) e com badges calculados com o mesmo relógio.
    """

    def __init__(self, instalacao_repo: InstalacaoRepository):
        self.instalacao_repo = instalacao_repo

    def execute(self, agora: Optional[datetime] = None) -> QuadroOutputDTO:
        agora = agora or datetime.now(timezone.utc)
        colunas = montar_quadro(self.instalacao_repo.list_all(), agora)
        return QuadroOutputDTO(
            colunas=[ColunaQuadroDTO.from_coluna(c) for c in colunas],
            gerado_em=agora,
        )


class GerarAcessosService:
    """
    Use Case: Texto de acessos de uma instalação.

    Attributes:
        senha_padrao: Senha inicial das instalações (configuração)
    """

    def __init__(self, instalacao_repo: InstalacaoRepository, senha_padrao: str = ""):
        self.instalacao_repo = instalacao_repo
        self.senha_padrao = senha_padrao

    def execute(self, instalacao_id: str) -> AcessosOutputDTO:
        """
        Raises:
            EntityNotFoundError: Instalação não existe
        """
        instalacao = _buscar_ou_falhar(self.instalacao_repo, instalacao_id)
        return AcessosOutputDTO(
            instalacao_id=instalacao.id,
            dominio=extrair_dominio_base(instalacao.dominio),
            texto=gerar_texto_acessos(instalacao.dominio, self.senha_padrao),
        )
