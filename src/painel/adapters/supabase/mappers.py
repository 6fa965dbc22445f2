"""
Mappers para conversão entre linhas JSON (PostgREST) e Entities.

Responsabilidades:
- Converter linha da tabela "instalacoes" → InstalacaoEntity
- Converter InstalacaoEntity → payload de insert

Princípios:
- Mappers são stateless
- Não contêm lógica de negócio
- Tratam apenas conversão de dados
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from django.utils.dateparse import parse_datetime

from painel.core.instalacoes.entities import (
    ArquivoInstalacao,
    InstalacaoEntity,
    PrioridadeInstalacao,
    StatusInstalacao,
)


class InstalacaoMapper:
    """
    Mapper entre a linha da tabela "instalacoes" e InstalacaoEntity.

    - to_entity(): linha → Entity
    - to_row(): Entity → payload de insert
    - to_entity_list(): List[linha] → List[Entity]
    """

    @staticmethod
    def to_entity(row: Dict[str, Any]) -> InstalacaoEntity:
        """
        Converte linha em entidade.

        Valores desconhecidos de prioridade caem em "normal"; linhas
        antigas sem coluna de arquivos viram lista vazia.
        """
        prioridade = (row.get("prioridade") or "normal").lower()
        if prioridade not in ("normal", "urgente"):
            prioridade = "normal"

        return InstalacaoEntity(
            id=str(row["id"]) if row.get("id") is not None else None,
            dominio=row.get("dominio") or "",
            telefone=row.get("telefone"),
            acessos=row.get("acessos"),
            status=StatusInstalacao.from_string(row.get("status") or "aguardando"),
            prioridade=PrioridadeInstalacao(prioridade),
            coletar_acessos=bool(row.get("coletar_acessos")),
            arquivos=InstalacaoMapper._arquivos(row.get("arquivos")),
            created_at=InstalacaoMapper._data(row.get("created_at")),
        )

    @staticmethod
    def to_row(entity: InstalacaoEntity) -> Dict[str, Any]:
        """
        Converte entidade em payload de insert.

        `id` e `created_at` ficam de fora: são gerados pelo banco.
        """
        return {
            "dominio": entity.dominio,
            "telefone": entity.telefone,
            "acessos": entity.acessos,
            "status": entity.status.value,
            "prioridade": entity.prioridade.value,
            "coletar_acessos": entity.coletar_acessos,
            "arquivos": [a.to_dict() for a in entity.arquivos],
        }

    @staticmethod
    def to_entity_list(rows: List[Dict[str, Any]]) -> List[InstalacaoEntity]:
        return [InstalacaoMapper.to_entity(row) for row in rows]

    @staticmethod
    def _arquivos(valor: Any) -> List[ArquivoInstalacao]:
        if not isinstance(valor, list):
            return []
        return [
            ArquivoInstalacao.from_dict(item)
            for item in valor
            if isinstance(item, dict) and item.get("url")
        ]

    @staticmethod
    def _data(valor: Any) -> Optional[datetime]:
        if not valor:
            return None
        if isinstance(valor, datetime):
            momento = valor
        else:
            momento = parse_datetime(str(valor))
            if momento is None:
                return None
        if momento.tzinfo is None:
            momento = momento.replace(tzinfo=timezone.utc)
        return momento
