"""
Gerenciador de anexos das instalações.

- upload: grava em "<millis>-<nome sanitizado>" e devolve {name, url}
- delete_all: converte cada URL pública de volta em (bucket, path)
  e remove um objeto por chamada; URLs fora do padrão são ignoradas
"""

import logging
import re
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple
from urllib.parse import unquote

from painel.core.shared.exceptions import DomainException

from .dtos import ArquivoUploadDTO
from .entities import ArquivoInstalacao
from .ports import BlobStorage


logger = logging.getLogger(__name__)

BUCKET_PADRAO = "instalacoes"

_PADRAO_URL_PUBLICA = re.compile(r"/storage/v1/object/public/([^/]+)/(.+)$")
_CARACTERES_INVALIDOS = re.compile(r"[^a-zA-Z0-9._-]")


@dataclass
class RelatorioRemocao:
    """
    Resultado de uma limpeza de anexos.

    Attributes:
        removidos: Caminhos removidos com sucesso
        ignorados: URLs fora do padrão do storage
        falhas: URLs cuja remoção falhou
    """

    removidos: List[str] = field(default_factory=list)
    ignorados: List[str] = field(default_factory=list)
    falhas: List[str] = field(default_factory=list)

    @property
    def sucesso(self) -> bool:
        return not self.falhas

    def resumo(self) -> str:
        return (
            f"{len(self.removidos)} removido(s), "
            f"{len(self.ignorados)} ignorado(s), "
            f"{len(self.falhas)} falha(s)"
        )


def sanitizar_nome(nome: str) -> str:
    """Troca qualquer caractere fora de [a-zA-Z0-9._-] por "_"."""
    return _CARACTERES_INVALIDOS.sub("_", nome or "arquivo")


def extrair_caminho_storage(url: str) -> Optional[Tuple[str, str]]:
    """
    Converte URL pública em (bucket, path).

    Returns:
        Tupla (bucket, path) ou None se a URL não seguir o padrão
    """
    match = _PADRAO_URL_PUBLICA.search(url or "")
    if not match:
        return None
    bucket, caminho = match.groups()
    return bucket, unquote(caminho)


def _agora_millis() -> int:
    return int(time.time() * 1000)


class GerenciadorArquivos:
    """
    Upload e remoção de anexos no storage.

    Attributes:
        storage: Adapter de BlobStorage
        bucket: Bucket usado nos uploads
        relogio: Fonte do timestamp em milissegundos

    Example:
        gerenciador = GerenciadorArquivos(SupabaseStorage(client))
        arquivo = gerenciador.upload(ArquivoUploadDTO("print.png", b"..."))
        gerenciador.delete_all([arquivo.url])
    """

    def __init__(
        self,
        storage: BlobStorage,
        bucket: str = BUCKET_PADRAO,
        relogio: Callable[[], int] = _agora_millis,
    ):
        self.storage = storage
        self.bucket = bucket
        self.relogio = relogio

    def upload(self, arquivo: ArquivoUploadDTO) -> ArquivoInstalacao:
        """
        Envia um arquivo e devolve a referência para o registro.

        Raises:
            IntegrationError: Se o upload falhar
        """
        caminho = f"{self.relogio()}-{sanitizar_nome(arquivo.nome)}"
        caminho = self.storage.upload(
            self.bucket, caminho, arquivo.conteudo, arquivo.content_type
        )
        url = self.storage.get_public_url(self.bucket, caminho)

        logger.debug(f"Arquivo enviado: {arquivo.nome} -> {caminho}")
        return ArquivoInstalacao(name=arquivo.nome, url=url)

    def upload_all(self, arquivos: Iterable[ArquivoUploadDTO]) -> List[ArquivoInstalacao]:
        """Envia arquivos em ordem; a primeira falha interrompe."""
        return [self.upload(arquivo) for arquivo in arquivos]

    def delete_all(self, urls: Iterable[str]) -> RelatorioRemocao:
        """
        Remove do storage cada anexo referenciado (best-effort).

        Uma chamada de remoção por URL que segue o padrão.
        Falhas são registradas em log e no relatório, nunca propagadas.

        Args:
            urls: URLs públicas dos anexos

        Returns:
            RelatorioRemocao
        """
        relatorio = RelatorioRemocao()

        for url in urls:
            destino = extrair_caminho_storage(url)
            if destino is None:
                relatorio.ignorados.append(url)
                continue

            bucket, caminho = destino
            try:
                self.storage.remove(bucket, [caminho])
                relatorio.removidos.append(caminho)
            except DomainException as e:
                logger.warning(f"Falha ao remover arquivo {caminho} do storage: {e}")
                relatorio.falhas.append(url)

        if relatorio.ignorados:
            logger.debug(f"URLs fora do padrão do storage: {relatorio.ignorados}")

        return relatorio
