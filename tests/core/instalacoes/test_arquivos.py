"""
Testes do gerenciador de anexos.

Coverage:
- upload: caminho "<millis>-<nome sanitizado>" e URL pública
- extrair_caminho_storage: URL pública → (bucket, path)
- delete_all: uma remoção por URL, ignora URLs fora do padrão,
  falhas não propagam
"""

from unittest.mock import Mock

import pytest

from painel.core.instalacoes.arquivos import (
    GerenciadorArquivos,
    extrair_caminho_storage,
    sanitizar_nome,
)
from painel.core.instalacoes.dtos import ArquivoUploadDTO
from painel.core.instalacoes.entities import ArquivoInstalacao
from painel.core.instalacoes.ports import InMemoryBlobStorage
from painel.core.shared.exceptions import IntegrationError


@pytest.fixture
def storage():
    return InMemoryBlobStorage(base_url="https://proj.supabase.co")


@pytest.fixture
def gerenciador(storage):
    return GerenciadorArquivos(storage, bucket="instalacoes", relogio=lambda: 1700000000000)


class TestUpload:

    def test_upload_grava_com_prefixo_de_timestamp(self, gerenciador, storage):
        arquivo = gerenciador.upload(ArquivoUploadDTO("print tela (1).png", b"png", "image/png"))

        assert ("instalacoes", "1700000000000-print_tela__1_.png") in storage.objetos
        assert arquivo == ArquivoInstalacao(
            name="print tela (1).png",
            url=(
                "https://proj.supabase.co/storage/v1/object/public/"
                "instalacoes/1700000000000-print_tela__1_.png"
            ),
        )

    def test_upload_all_preserva_ordem(self, gerenciador):
        arquivos = gerenciador.upload_all([
            ArquivoUploadDTO("a.txt", b"a"),
            ArquivoUploadDTO("b.txt", b"b"),
        ])

        assert [a.name for a in arquivos] == ["a.txt", "b.txt"]

    def test_falha_no_upload_propaga(self):
        storage = Mock()
        storage.upload.side_effect = IntegrationError("Falha no upload", service="storage")

        with pytest.raises(IntegrationError):
            GerenciadorArquivos(storage).upload(ArquivoUploadDTO("a.txt", b"a"))

    @pytest.mark.parametrize("nome,esperado", [
        ("relatório final.pdf", "relat_rio_final.pdf"),
        ("ok-nome_1.zip", "ok-nome_1.zip"),
        ("", "arquivo"),
    ])
    def test_sanitizar_nome(self, nome, esperado):
        assert sanitizar_nome(nome) == esperado


class TestExtrairCaminho:

    def test_url_publica(self):
        url = "https://proj.supabase.co/storage/v1/object/public/instalacoes/171-a%20b.png"

        assert extrair_caminho_storage(url) == ("instalacoes", "171-a b.png")

    def test_subpastas_preservadas(self):
        url = "https://x/storage/v1/object/public/bucket/pasta/sub/arquivo.txt"

        assert extrair_caminho_storage(url) == ("bucket", "pasta/sub/arquivo.txt")

    @pytest.mark.parametrize("url", ["", "https://outro.cdn.com/arquivo.png", None])
    def test_fora_do_padrao(self, url):
        assert extrair_caminho_storage(url) is None


class TestDeleteAll:

    def test_uma_remocao_por_url(self, gerenciador, storage):
        urls = [
            storage.get_public_url("instalacoes", "1-a.png"),
            storage.get_public_url("instalacoes", "2-b.png"),
        ]

        relatorio = gerenciador.delete_all(urls)

        assert storage.remocoes == [
            ("instalacoes", ["1-a.png"]),
            ("instalacoes", ["2-b.png"]),
        ]
        assert relatorio.removidos == ["1-a.png", "2-b.png"]
        assert relatorio.sucesso

    def test_urls_fora_do_padrao_sao_ignoradas(self, gerenciador, storage):
        relatorio = gerenciador.delete_all(["https://cdn.externo.com/x.png"])

        assert storage.remocoes == []
        assert relatorio.ignorados == ["https://cdn.externo.com/x.png"]
        assert relatorio.resumo() == "0 removido(s), 1 ignorado(s), 0 falha(s)"

    def test_falha_numa_remocao_nao_interrompe_as_demais(self):
        storage = InMemoryBlobStorage()
        original = storage.remove

        def remove(bucket, paths):
            if paths == ["1-a.png"]:
                raise IntegrationError("storage fora do ar", service="storage")
            original(bucket, paths)

        storage.remove = remove
        gerenciador = GerenciadorArquivos(storage)
        urls = [
            storage.get_public_url("instalacoes", "1-a.png"),
            storage.get_public_url("instalacoes", "2-b.png"),
        ]

        relatorio = gerenciador.delete_all(urls)

        assert not relatorio.sucesso
        assert relatorio.falhas == [urls[0]]
        assert relatorio.removidos == ["2-b.png"]
