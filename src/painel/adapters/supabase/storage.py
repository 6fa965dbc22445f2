"""
Storage de arquivos do backend hospedado.

Implementa o port BlobStorage usado pelo GerenciadorArquivos.
"""

from typing import List, Optional

from .client import SupabaseRestClient


class SupabaseStorage:
    """
    BlobStorage sobre a API de storage.

    Example:
        storage = SupabaseStorage(client)
        storage.upload("instalacoes", "1700000000000-print.png", b"...", "image/png")
        storage.get_public_url("instalacoes", "1700000000000-print.png")
    """

    def __init__(self, client: SupabaseRestClient):
        self.client = client

    def upload(
        self,
        bucket: str,
        path: str,
        conteudo: bytes,
        content_type: Optional[str] = None,
    ) -> str:
        return self.client.storage_upload(bucket, path, conteudo, content_type)

    def get_public_url(self, bucket: str, path: str) -> str:
        return self.client.storage_public_url(bucket, path)

    def remove(self, bucket: str, paths: List[str]) -> None:
        self.client.storage_remove(bucket, paths)
