"""
Cenário ponta a ponta do kanban.

O notificador HTTP real é ligado ao backend de email do próprio
projeto (httpx.MockTransport → Client do Django), então cada
movimento passa por API → use case → evento → HTTP → email.

Coverage:
- Criar (com anexo) → em andamento → finalizado
- Emails de nova instalação e de finalização na caixa de saída
- Anexos removidos do storage ao finalizar
- Falha do backend de email vira aviso sem desfazer a escrita
"""

import json

import httpx
import pytest
from dependency_injector import providers
from django.core.files.uploadedfile import SimpleUploadedFile

from painel.adapters.integrations import HttpNotificador
from painel.core.notificacoes.entities import TipoNotificacao
from painel.core.notificacoes.use_cases import EnviarEmailInstalacaoService


@pytest.fixture
def backend(client, container):
    """Notificador HTTP apontando para as views /api/... via Client do Django."""
    requisicoes = []

    def encaminhar(request):
        requisicoes.append(request)
        response = client.post(
            request.url.path,
            data=request.content,
            content_type='application/json',
            HTTP_AUTHORIZATION=request.headers.get('Authorization', ''),
        )
        return httpx.Response(response.status_code, content=response.content)

    notificador = HttpNotificador(
        'http://backend.local', transport=httpx.MockTransport(encaminhar)
    )
    container.notificador.override(providers.Object(notificador))
    return requisicoes


def _post_json(client, url, data, **extra):
    return client.post(url, data=json.dumps(data), content_type='application/json', **extra)


class TestFluxoCompleto:

    def test_criar_andar_e_finalizar(self, client, container, backend, outbox):
        arquivo = SimpleUploadedFile('logo.png', b'png', content_type='image/png')

        # Criar
        response = client.post(
            '/instalacoes/api/',
            {'dominio': 'loja.com', 'telefone': '11 98888-7777', 'coletar_acessos': 'true',
             'arquivos': [arquivo]},
            HTTP_AUTHORIZATION='Bearer token-op',
        )
        assert response.status_code == 201
        criada = json.loads(response.content)
        instalacao_id = criada['data']['id']
        assert criada['meta']['avisos'] == []

        assert outbox[0].subject == 'HubLabel – Nova instalação registrada'
        assert 'loja.com' in outbox[0].alternatives[0][0]
        assert '11 98888-7777' in outbox[0].alternatives[0][0]
        assert backend[0].url.path == TipoNotificacao.NOVA_INSTALACAO.rota
        assert backend[0].headers['Authorization'] == 'Bearer token-op'

        storage = container.blob_storage()
        assert len(storage.objetos) == 1

        # Em andamento
        response = _post_json(
            client,
            f'/instalacoes/api/{instalacao_id}/mover/',
            {'de_status': 'aguardando', 'para_status': 'em_andamento'},
        )
        movida = json.loads(response.content)
        assert movida['data']['coletar_acessos'] is False
        assert movida['meta']['efeitos'] == []
        assert len(outbox) == 1

        # Finalizado
        response = _post_json(
            client,
            f'/instalacoes/api/{instalacao_id}/mover/',
            {'de_status': 'em_andamento', 'para_status': 'finalizado'},
        )
        finalizada = json.loads(response.content)
        assert finalizada['data']['badge']['texto'] == 'Entregue'
        assert all(e['sucesso'] for e in finalizada['meta']['efeitos'])

        assert outbox[1].subject == 'HubLabel – Instalação finalizada'
        assert storage.objetos == {}
        assert len(storage.remocoes) == 1

        # Quadro final
        quadro = json.loads(client.get('/instalacoes/api/').content)['data']
        assert [c['total'] for c in quadro['colunas']] == [0, 0, 1]

    def test_falha_do_backend_vira_aviso(self, client, container, backend, repo, outbox):
        container.enviar_email_instalacao_service.override(
            providers.Factory(
                EnviarEmailInstalacaoService,
                transporte=container.transporte_email,
                renderizador=container.renderizador_email,
                destinatarios=[],
            )
        )

        response = _post_json(client, '/instalacoes/api/', {'dominio': 'loja.com'})

        assert response.status_code == 201
        data = json.loads(response.content)
        assert data['meta']['avisos'] == [TipoNotificacao.NOVA_INSTALACAO.aviso_falha]
        assert len(repo.list_all()) == 1
        assert outbox == []
