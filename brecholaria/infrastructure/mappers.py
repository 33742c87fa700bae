"""
Mapeadores (Mappers) para converter entre:
1. Modelos do Django ORM
2. Entidades de Domínio (brecholaria.core.entities)
"""
from decimal import Decimal
from typing import Any, Optional, List, Dict

from django.apps import apps

# Importa as entidades do Core
from brecholaria.core.entities import (
    Produto as ProdutoEntity,
    Pedido as PedidoEntity,
    ItemPedido as ItemPedidoEntity,
    Endereco as EnderecoEntity,
)


def get_model(app_label: str, model_name: str):
    """Retorna um modelo do Django de forma segura (lazy loading)."""
    return apps.get_model(app_label, model_name)


def _decimal_ou_none(valor) -> Optional[Decimal]:
    return Decimal(str(valor)) if valor is not None else None


# ====================================================================
# MAPPER DO CATÁLOGO
# ====================================================================

class ProdutoMapper:
    """Mapeador para Produto."""

    @staticmethod
    def to_entity(model: Any) -> Optional[ProdutoEntity]:
        if not model: return None
        return ProdutoEntity(
            id=str(model.id),
            nome=model.nome,
            descricao=model.descricao,
            preco=_decimal_ou_none(model.preco),
            preco_original=_decimal_ou_none(model.preco_original),
            imagens=list(model.imagens or []),
            categoria=model.categoria,
            tamanho=model.tamanho,
            condicao=model.condicao,
            medidas=model.medidas,
            em_estoque=model.em_estoque,
            quantidade_estoque=model.quantidade_estoque,
            em_destaque=model.em_destaque,
            criado_em=model.criado_em,
            atualizado_em=model.atualizado_em,
        )

    @staticmethod
    def to_model(entity: ProdutoEntity, model: Any = None) -> Any:
        """Copia os campos da entidade para um model novo ou existente (sem salvar)."""
        if model is None:
            model = get_model('catalog', 'Produto')()
        model.nome = entity.nome
        model.descricao = entity.descricao or ""
        model.preco = entity.preco
        model.preco_original = entity.preco_original
        model.imagens = list(entity.imagens or [])
        model.categoria = entity.categoria
        model.tamanho = entity.tamanho
        model.condicao = entity.condicao
        model.medidas = entity.medidas
        model.em_estoque = entity.em_estoque
        model.quantidade_estoque = entity.quantidade_estoque
        model.em_destaque = entity.em_destaque
        return model


# ====================================================================
# MAPPERS DE PEDIDO
# Itens e endereço são gravados em JSON; Decimal vira string.
# ====================================================================

class EnderecoMapper:

    @staticmethod
    def to_entity(data: Optional[Dict]) -> Optional[EnderecoEntity]:
        if not data: return None
        return EnderecoEntity(
            rua=data.get("rua", ""),
            numero=data.get("numero", ""),
            complemento=data.get("complemento"),
            bairro=data.get("bairro", ""),
            cidade=data.get("cidade", ""),
            estado=data.get("estado", ""),
            cep=data.get("cep", ""),
        )

    @staticmethod
    def to_json(entity: Optional[EnderecoEntity]) -> Optional[Dict]:
        if entity is None: return None
        return {
            "rua": entity.rua,
            "numero": entity.numero,
            "complemento": entity.complemento,
            "bairro": entity.bairro,
            "cidade": entity.cidade,
            "estado": entity.estado,
            "cep": entity.cep,
        }


class ItemPedidoMapper:

    @staticmethod
    def to_entity(data: Dict) -> ItemPedidoEntity:
        return ItemPedidoEntity(
            produto_id=data["produto_id"],
            nome=data["nome"],
            preco=Decimal(str(data["preco"])),
            quantidade=int(data["quantidade"]),
            imagem=data.get("imagem") or "",
            tamanho=data.get("tamanho"),
        )

    @staticmethod
    def to_json(entity: ItemPedidoEntity) -> Dict:
        return {
            "produto_id": str(entity.produto_id),
            "nome": entity.nome,
            "preco": str(entity.preco),
            "quantidade": entity.quantidade,
            "imagem": entity.imagem,
            "tamanho": entity.tamanho,
        }


class PedidoMapper:
    """Mapeador para Pedido."""

    @staticmethod
    def to_entity(model: Any) -> Optional[PedidoEntity]:
        if not model: return None
        itens: List[ItemPedidoEntity] = [ItemPedidoMapper.to_entity(i) for i in (model.itens or [])]
        return PedidoEntity(
            id=str(model.id),
            nome_cliente=model.nome_cliente,
            email_cliente=model.email_cliente,
            telefone_cliente=model.telefone_cliente,
            endereco_cliente=EnderecoMapper.to_entity(model.endereco_cliente),
            itens=itens,
            total=_decimal_ou_none(model.total),
            status=model.status,
            metodo_pagamento=model.metodo_pagamento,
            pagamento_id=model.pagamento_id,
            gateway_atualizado_em=model.gateway_atualizado_em,
            criado_em=model.criado_em,
            atualizado_em=model.atualizado_em,
        )

    @staticmethod
    def to_model(entity: PedidoEntity) -> Any:
        return get_model('pedidos', 'Pedido')(
            nome_cliente=entity.nome_cliente,
            email_cliente=entity.email_cliente,
            telefone_cliente=entity.telefone_cliente,
            endereco_cliente=EnderecoMapper.to_json(entity.endereco_cliente),
            itens=[ItemPedidoMapper.to_json(item) for item in entity.itens],
            total=entity.total,
            status=entity.status,
            metodo_pagamento=entity.metodo_pagamento,
            pagamento_id=entity.pagamento_id,
        )
