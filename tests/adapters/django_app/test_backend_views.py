"""
Testes das views do backend (/api/...).

Coverage:
- POST /api/enviar-email: sucesso, validação, falha do transporte
- POST /api/email-nova-instalacao e /api/email-instalacao-finalizada
- GET /api/n8n/workflow-link
- GET /api/inserir-anon-key-info e POST /api/salvar-anon-key
- Métodos não permitidos (inclusive OPTIONS) → 405
"""

import json
from unittest.mock import Mock

import pytest
from dependency_injector import providers

from painel.core.integracoes.anon_key import InMemoryClienteAnonKeyRepository
from painel.core.notificacoes.use_cases import EnviarEmailInstalacaoService
from painel.core.shared.exceptions import IntegrationError, RepositoryError


def _json(response):
    return json.loads(response.content)


class TestEnviarEmailView:

    def test_envia_email_html(self, client, outbox):
        response = client.post(
            '/api/enviar-email',
            data={
                'destinatarios': ['a@cliente.com', 'b@cliente.com'],
                'assunto': 'Relatório',
                'corpo': '<p>Olá <b>time</b></p>',
            },
            content_type='application/json',
        )

        assert response.status_code == 200
        data = _json(response)
        assert data['success'] is True
        assert data['message'] == 'Email(s) enviado(s) com sucesso.'
        assert data['messageId'].startswith('<')
        assert response['Access-Control-Allow-Origin'] == '*'

        email = outbox[0]
        assert email.to == ['a@cliente.com', 'b@cliente.com']
        assert email.body == 'Olá time'
        assert email.alternatives[0][1] == 'text/html'
        assert email.extra_headers['Message-ID'] == data['messageId']

    def test_destinatarios_obrigatorios(self, client, outbox):
        response = client.post(
            '/api/enviar-email',
            data={'destinatarios': [], 'assunto': 'x', 'corpo': 'y'},
            content_type='application/json',
        )

        assert response.status_code == 400
        assert _json(response) == {
            'error': 'destinatarios é obrigatório e deve ser um array não vazio.'
        }
        assert outbox == []

    def test_corpo_json_invalido_vira_vazio(self, client):
        response = client.post(
            '/api/enviar-email', data='{nao json', content_type='application/json'
        )

        assert response.status_code == 400
        assert 'destinatarios' in _json(response)['error']

    def test_falha_no_transporte(self, client, container):
        transporte = Mock()
        transporte.enviar.side_effect = IntegrationError("Falha ao enviar email.", service="smtp")
        container.transporte_email.override(providers.Object(transporte))

        response = client.post(
            '/api/enviar-email',
            data={'destinatarios': ['a@b.com'], 'assunto': 'x', 'corpo': 'y'},
            content_type='application/json',
        )

        assert response.status_code == 500
        assert _json(response) == {'error': 'Falha ao enviar email.'}

    def test_get_nao_permitido(self, client):
        response = client.get('/api/enviar-email')

        assert response.status_code == 405
        assert _json(response) == {'error': 'Método não permitido.'}

    def test_options_nao_permitido(self, client):
        response = client.options('/api/enviar-email')

        assert response.status_code == 405


class TestEmailInstalacaoView:

    def test_nova_instalacao(self, client, outbox):
        response = client.post(
            '/api/email-nova-instalacao',
            data={'dominio': 'cliente.com', 'telefone': '11 9999'},
            content_type='application/json',
        )

        assert response.status_code == 200
        assert _json(response) == {
            'success': True,
            'message': 'Email de nova instalação enviado.',
        }

        email = outbox[0]
        assert email.subject == 'HubLabel – Nova instalação registrada'
        assert email.to == ['ops@hublabel.test']
        html = email.alternatives[0][0]
        assert 'Nova instalação registrada' in html
        assert 'cliente.com' in html
        assert 'https://painel.hublabel.test/admin/instalacoes' in html
        assert '#ffd323' in html

    def test_instalacao_finalizada(self, client, outbox):
        response = client.post(
            '/api/email-instalacao-finalizada',
            data={'dominio': 'cliente.com'},
            content_type='application/json',
        )

        assert response.status_code == 200
        assert _json(response)['message'] == 'Email de instalação finalizada enviado.'
        assert outbox[0].subject == 'HubLabel – Instalação finalizada'
        assert '#22c55e' in outbox[0].alternatives[0][0]

    def test_html_escapa_dominio(self, client, outbox):
        client.post(
            '/api/email-nova-instalacao',
            data={'dominio': '<script>x</script>'},
            content_type='application/json',
        )

        html = outbox[0].alternatives[0][0]
        assert '<script>' not in html
        assert '&lt;script&gt;' in html

    def test_sem_destinatarios_configurados(self, client, container, outbox):
        container.enviar_email_instalacao_service.override(
            providers.Factory(
                EnviarEmailInstalacaoService,
                transporte=container.transporte_email,
                renderizador=container.renderizador_email,
                destinatarios=[],
            )
        )

        response = client.post(
            '/api/email-nova-instalacao',
            data={'dominio': 'cliente.com'},
            content_type='application/json',
        )

        assert response.status_code == 500
        assert _json(response) == {'error': 'Falha ao enviar email.'}
        assert outbox == []


class TestWorkflowLinkView:

    def test_nao_configurado(self, client):
        response = client.get('/api/n8n/workflow-link')

        assert response.status_code == 500
        assert 'N8N_URL' in _json(response)['error']

    def test_retorna_primeiro_link(self, client, container):
        gateway = Mock(configurado=True)
        gateway.obter_workflow.return_value = {
            'nodes': [
                {'url': 'https://x.app.n8n.cloud/webhook'},
                {'url': 'https://downloads.hublabel.com/app.apk'},
            ]
        }
        container.workflow_gateway.override(providers.Object(gateway))

        response = client.get('/api/n8n/workflow-link')

        assert response.status_code == 200
        assert _json(response) == {'link': 'https://downloads.hublabel.com/app.apk'}

    def test_sem_link(self, client, container):
        gateway = Mock(configurado=True)
        gateway.obter_workflow.return_value = {'nodes': []}
        container.workflow_gateway.override(providers.Object(gateway))

        assert _json(client.get('/api/n8n/workflow-link')) == {'link': None}

    def test_status_da_api_preservado(self, client, container):
        gateway = Mock(configurado=True)
        gateway.obter_workflow.side_effect = IntegrationError(
            'n8n retornou 404. Verifique URL, workflow ID e API key.',
            service='n8n',
            status_code=404,
        )
        container.workflow_gateway.override(providers.Object(gateway))

        response = client.get('/api/n8n/workflow-link')

        assert response.status_code == 404
        assert _json(response)['error'].startswith('n8n retornou 404')

    def test_post_nao_permitido(self, client):
        assert client.post('/api/n8n/workflow-link').status_code == 405


class TestAnonKeyViews:

    @pytest.fixture
    def clientes(self, container):
        repo = InMemoryClienteAnonKeyRepository({
            'tok-1': {'nomeSoftware': 'Agente X', 'dominio': 'cliente.com'},
        })
        container.cliente_anon_key_repository.override(providers.Object(repo))
        return repo

    def test_info(self, client, clientes):
        response = client.get('/api/inserir-anon-key-info', {'token': 'tok-1'})

        assert response.status_code == 200
        assert _json(response) == {'nomeSoftware': 'Agente X', 'dominio': 'cliente.com'}
        assert response['Access-Control-Allow-Origin'] == '*'

    def test_info_sem_token(self, client, clientes):
        response = client.get('/api/inserir-anon-key-info')

        assert response.status_code == 400
        assert _json(response) == {'error': 'token é obrigatório.'}

    def test_info_link_invalido(self, client, clientes):
        response = client.get('/api/inserir-anon-key-info', {'token': 'x'})

        assert response.status_code == 404
        assert _json(response) == {'error': 'Link inválido ou expirado.'}

    def test_info_falha_do_banco(self, client, container):
        repo = Mock()
        repo.buscar_por_token.side_effect = RepositoryError("timeout")
        container.cliente_anon_key_repository.override(providers.Object(repo))

        response = client.get('/api/inserir-anon-key-info', {'token': 'tok-1'})

        assert response.status_code == 500
        assert _json(response) == {'error': 'Erro ao carregar.'}

    def test_info_post_nao_permitido(self, client):
        assert client.post('/api/inserir-anon-key-info').status_code == 405

    def test_salvar(self, client, clientes):
        response = client.post(
            '/api/salvar-anon-key',
            data={'token': 'tok-1', 'anon_key': ' eyJ.chave '},
            content_type='application/json',
        )

        assert response.status_code == 200
        assert _json(response) == {'success': True, 'message': 'Anon Key salva com sucesso.'}
        assert clientes.clientes['tok-1']['supabase_anon_key'] == 'eyJ.chave'

    def test_salvar_campos_obrigatorios(self, client, clientes):
        response = client.post(
            '/api/salvar-anon-key', data={'token': 'tok-1'}, content_type='application/json'
        )

        assert response.status_code == 400
        assert _json(response) == {'error': 'token e anon_key são obrigatórios.'}

    def test_salvar_link_invalido(self, client, clientes):
        response = client.post(
            '/api/salvar-anon-key',
            data={'token': 'x', 'anon_key': 'k'},
            content_type='application/json',
        )

        assert response.status_code == 404

    def test_salvar_falha_do_banco(self, client, container):
        repo = Mock()
        repo.salvar_anon_key.side_effect = RepositoryError("timeout")
        container.cliente_anon_key_repository.override(providers.Object(repo))

        response = client.post(
            '/api/salvar-anon-key',
            data={'token': 'tok-1', 'anon_key': 'k'},
            content_type='application/json',
        )

        assert response.status_code == 500
        assert _json(response) == {'error': 'Erro ao salvar.'}

    def test_salvar_get_nao_permitido(self, client):
        assert client.get('/api/salvar-anon-key').status_code == 405
