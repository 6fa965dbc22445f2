"""
Use Cases do domínio de notificações (lado servidor).

- EnviarEmailService: envio livre (destinatários, assunto, corpo)
- EnviarEmailInstalacaoService: emails automáticos do kanban
"""

import logging
from typing import Iterable, Optional

from painel.core.shared.exceptions import BusinessRuleViolationError

from .dtos import EmailInstalacaoInputDTO, EnviarEmailInputDTO, EnvioEmailOutputDTO
from .entities import MensagemEmail, TipoNotificacao
from .ports import RenderizadorEmail, TransporteEmail


logger = logging.getLogger(__name__)


class EnviarEmailService:
    """
    Use Case: Enviar email livre.

    Example:
        service = EnviarEmailService(transporte)
        output = service.execute(EnviarEmailInputDTO(["a@b.com"], "Oi", "<p>Olá</p>"))
        output.message_id
    """

    def __init__(self, transporte: TransporteEmail):
        self.transporte = transporte

    def execute(self, input_dto: EnviarEmailInputDTO) -> EnvioEmailOutputDTO:
        """
        Raises:
            ValidationError: Campos ausentes ou inválidos
            IntegrationError: Falha no transporte
        """
        mensagem = MensagemEmail.de_corpo(
            input_dto.destinatarios, input_dto.assunto, input_dto.corpo
        )
        message_id = self.transporte.enviar(mensagem)

        logger.info(f"Email enviado para {len(mensagem.destinatarios)} destinatário(s)")
        return EnvioEmailOutputDTO(
            message_id=message_id,
            mensagem="Email(s) enviado(s) com sucesso.",
            destinatarios=len(mensagem.destinatarios),
        )


class EnviarEmailInstalacaoService:
    """
    Use Case: Enviar email automático de instalação.

    Destinatários fixos (configuração), HTML renderizado com domínio,
    telefone e link para o quadro de instalações.

    Attributes:
        transporte: Transporte de email
        renderizador: Renderizador do HTML
        destinatarios: Lista configurada de destinatários
        link_instalacoes: URL do quadro no painel ("" omite o botão)
    """

    def __init__(
        self,
        transporte: TransporteEmail,
        renderizador: RenderizadorEmail,
        destinatarios: Iterable[str] = (),
        link_instalacoes: Optional[str] = "",
    ):
        self.transporte = transporte
        self.renderizador = renderizador
        self.destinatarios = tuple(d for d in destinatarios if d)
        self.link_instalacoes = link_instalacoes or ""

    def execute(self, input_dto: EmailInstalacaoInputDTO) -> EnvioEmailOutputDTO:
        """
        Raises:
            BusinessRuleViolationError: Nenhum destinatário configurado
            IntegrationError: Falha no transporte
        """
        if not self.destinatarios:
            raise BusinessRuleViolationError(
                "Nenhum destinatário configurado para emails de instalação",
                rule="destinatarios_nao_configurados",
            )

        tipo = input_dto.tipo
        dominio = str(input_dto.dominio).strip() if input_dto.dominio is not None else ""
        telefone = str(input_dto.telefone).strip() if input_dto.telefone else ""

        html = self.renderizador.renderizar(tipo, {
            "titulo": tipo.titulo,
            "descricao": tipo.descricao,
            "cor_destaque": tipo.cor_destaque,
            "dominio": dominio or "—",
            "telefone": telefone or "—",
            "link_instalacoes": self.link_instalacoes,
        })

        texto = f"{tipo.prefixo_texto}: Domínio {dominio or '—'}, Telefone {telefone or '—'}."
        if self.link_instalacoes:
            texto += f" Acesse: {self.link_instalacoes}"

        mensagem = MensagemEmail(
            destinatarios=self.destinatarios,
            assunto=tipo.assunto,
            corpo_texto=texto,
            corpo_html=html,
        )
        message_id = self.transporte.enviar(mensagem)

        logger.info(f"Email '{tipo.value}' enviado (dominio={dominio or '—'})")
        return EnvioEmailOutputDTO(
            message_id=message_id,
            mensagem=_mensagem_sucesso(tipo),
            destinatarios=len(self.destinatarios),
        )


def _mensagem_sucesso(tipo: TipoNotificacao) -> str:
    if tipo is TipoNotificacao.INSTALACAO_FINALIZADA:
        return "Email de instalação finalizada enviado."
    return "Email de nova instalação enviado."
