"""
Testes do domínio de notificações.

Coverage:
- MensagemEmail.de_corpo(): validação e partes texto/HTML
- EnviarEmailService
- EnviarEmailInstalacaoService: destinatários fixos, HTML, link
"""

from unittest.mock import Mock

import pytest

from painel.core.notificacoes.dtos import EmailInstalacaoInputDTO, EnviarEmailInputDTO
from painel.core.notificacoes.entities import MensagemEmail, TipoNotificacao, remover_tags
from painel.core.notificacoes.ports import InMemoryTransporteEmail
from painel.core.notificacoes.use_cases import EnviarEmailInstalacaoService, EnviarEmailService
from painel.core.shared.exceptions import BusinessRuleViolationError, ValidationError


@pytest.fixture
def transporte():
    return InMemoryTransporteEmail()


@pytest.fixture
def renderizador():
    renderizador = Mock()
    renderizador.renderizar.return_value = "<html>ok</html>"
    return renderizador


class TestMensagemEmail:

    def test_corpo_html_gera_duas_partes(self):
        mensagem = MensagemEmail.de_corpo(["a@b.com"], "Assunto", "<p>Olá <b>mundo</b></p>")

        assert mensagem.corpo_texto == "Olá mundo"
        assert mensagem.corpo_html == "<p>Olá <b>mundo</b></p>"

    def test_corpo_texto_nao_tem_html(self):
        mensagem = MensagemEmail.de_corpo(["a@b.com"], "Assunto", "só texto")

        assert mensagem.corpo_html is None

    @pytest.mark.parametrize("destinatarios", [None, [], "a@b.com", ["  "]])
    def test_destinatarios_invalidos(self, destinatarios):
        with pytest.raises(ValidationError) as exc_info:
            MensagemEmail.de_corpo(destinatarios, "Assunto", "corpo")

        assert exc_info.value.message == (
            "destinatarios é obrigatório e deve ser um array não vazio."
        )

    def test_assunto_obrigatorio(self):
        with pytest.raises(ValidationError) as exc_info:
            MensagemEmail.de_corpo(["a@b.com"], "", "corpo")
        assert exc_info.value.message == "assunto é obrigatório."

    def test_corpo_obrigatorio(self):
        with pytest.raises(ValidationError) as exc_info:
            MensagemEmail.de_corpo(["a@b.com"], "Assunto", None)
        assert exc_info.value.message == "corpo é obrigatório."

    def test_remover_tags(self):
        assert remover_tags("<h1>Oi</h1><br/>tchau") == "Oitchau"


class TestEnviarEmailService:

    def test_envia(self, transporte):
        output = EnviarEmailService(transporte).execute(
            EnviarEmailInputDTO(["a@b.com", "c@d.com"], "Oi", "<p>Olá</p>")
        )

        assert output.to_dict() == {
            "success": True,
            "message": "Email(s) enviado(s) com sucesso.",
            "messageId": "<1@painel.local>",
        }
        assert transporte.enviadas[0].destinatarios == ("a@b.com", "c@d.com")

    def test_invalido_nao_chama_transporte(self, transporte):
        with pytest.raises(ValidationError):
            EnviarEmailService(transporte).execute(EnviarEmailInputDTO([], "Oi", "x"))

        assert transporte.enviadas == []


class TestEnviarEmailInstalacaoService:

    def test_nova_instalacao(self, transporte, renderizador):
        service = EnviarEmailInstalacaoService(
            transporte,
            renderizador,
            destinatarios=["ops@hublabel.test"],
            link_instalacoes="https://painel/admin/instalacoes",
        )

        output = service.execute(EmailInstalacaoInputDTO(
            TipoNotificacao.NOVA_INSTALACAO, dominio=" cliente.com ", telefone="1199"
        ))

        mensagem = transporte.enviadas[0]
        assert mensagem.assunto == "HubLabel – Nova instalação registrada"
        assert mensagem.destinatarios == ("ops@hublabel.test",)
        assert mensagem.corpo_html == "<html>ok</html>"
        assert mensagem.corpo_texto == (
            "Nova instalação: Domínio cliente.com, Telefone 1199. "
            "Acesse: https://painel/admin/instalacoes"
        )
        assert output.mensagem == "Email de nova instalação enviado."

        tipo, contexto = renderizador.renderizar.call_args[0]
        assert tipo is TipoNotificacao.NOVA_INSTALACAO
        assert contexto["cor_destaque"] == "#ffd323"
        assert contexto["dominio"] == "cliente.com"

    def test_finalizada_sem_telefone_nem_link(self, transporte, renderizador):
        service = EnviarEmailInstalacaoService(
            transporte, renderizador, destinatarios=["ops@hublabel.test"]
        )

        output = service.execute(EmailInstalacaoInputDTO(
            TipoNotificacao.INSTALACAO_FINALIZADA, dominio="cliente.com"
        ))

        mensagem = transporte.enviadas[0]
        assert mensagem.assunto == "HubLabel – Instalação finalizada"
        assert mensagem.corpo_texto == "Instalação finalizada: Domínio cliente.com, Telefone —."
        assert renderizador.renderizar.call_args[0][1]["cor_destaque"] == "#22c55e"
        assert output.mensagem == "Email de instalação finalizada enviado."

    def test_sem_destinatarios(self, transporte, renderizador):
        service = EnviarEmailInstalacaoService(transporte, renderizador, destinatarios=["", None])

        with pytest.raises(BusinessRuleViolationError):
            service.execute(EmailInstalacaoInputDTO(TipoNotificacao.NOVA_INSTALACAO, "x.com"))

        assert transporte.enviadas == []
