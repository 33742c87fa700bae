"""
Camada de Infraestrutura: Implementação de Repositórios.

Esta camada traduz as operações abstratas definidas nas Portas da Core
em chamadas concretas ao Django ORM.
"""
import logging
from datetime import datetime
from typing import List, Optional, Dict

from django.apps import apps
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Q, Count
from django.utils import timezone

# Importações da Camada CORE (ENTIDADES e PORTAS)
from brecholaria.core.entities import Produto, Pedido, STATUS_PAGO, STATUS_PEDIDO
from brecholaria.core.ports import IProdutoRepository, IPedidoRepository
from brecholaria.core.exceptions import ProdutoNaoEncontradoError, PedidoNaoEncontradoError

from .mappers import ProdutoMapper, PedidoMapper

logger = logging.getLogger(__name__)


# ====================================================================
# REPOSITÓRIOS (Implementação Django ORM)
# ====================================================================

# Helper para Lazy Loading
def get_model(app_label, model_name):
    """Busca o modelo Django de forma segura (Lazy Loading)."""
    return apps.get_model(app_label, model_name)


class ProdutoRepositoryDjango(IProdutoRepository):
    """Implementação do ProdutoRepository usando o Django ORM."""

    @property
    def ProdutoModel(self):
        return get_model('catalog', 'Produto')

    def buscar_por_id(self, produto_id: str) -> Optional[Produto]:
        try:
            return ProdutoMapper.to_entity(self.ProdutoModel.objects.get(pk=produto_id))
        except (self.ProdutoModel.DoesNotExist, ValidationError, ValueError):
            # ValidationError: id que não é um UUID válido
            return None

    def listar(
        self,
        categoria: Optional[str] = None,
        busca: Optional[str] = None,
        apenas_destaque: bool = False,
        apenas_em_estoque: bool = False,
    ) -> List[Produto]:
        qs = self.ProdutoModel.objects.all()

        if categoria:
            qs = qs.filter(categoria__iexact=categoria)
        if busca:
            qs = qs.filter(Q(nome__icontains=busca) | Q(descricao__icontains=busca))
        if apenas_destaque:
            qs = qs.filter(em_destaque=True)
        if apenas_em_estoque:
            qs = qs.filter(em_estoque=True, quantidade_estoque__gt=0)

        return [ProdutoMapper.to_entity(model) for model in qs.order_by('-criado_em')]

    @transaction.atomic
    def salvar(self, produto: Produto) -> Produto:
        """Salva ou atualiza um Produto, convertendo a entidade para o modelo."""
        model = None
        if produto.id:
            try:
                model = self.ProdutoModel.objects.get(pk=produto.id)
            except (self.ProdutoModel.DoesNotExist, ValidationError, ValueError):
                raise ProdutoNaoEncontradoError(f"Produto {produto.id} não existe para atualização.")

        model = ProdutoMapper.to_model(produto, model)
        model.save()
        return ProdutoMapper.to_entity(model)

    def deletar(self, produto_id: str):
        deletados, _ = self.ProdutoModel.objects.filter(pk=produto_id).delete()
        if not deletados:
            raise ProdutoNaoEncontradoError()


class PedidoRepositoryDjango(IPedidoRepository):
    """Implementação do PedidoRepository (Order Store) usando o Django ORM."""

    @property
    def PedidoModel(self):
        return get_model('pedidos', 'Pedido')

    def _buscar_model(self, pedido_id: str):
        try:
            return self.PedidoModel.objects.get(pk=pedido_id)
        except (self.PedidoModel.DoesNotExist, ValidationError, ValueError):
            return None

    def criar(self, pedido: Pedido) -> Pedido:
        model = PedidoMapper.to_model(pedido)
        model.save()
        return PedidoMapper.to_entity(model)

    def buscar_por_id(self, pedido_id: str) -> Optional[Pedido]:
        return PedidoMapper.to_entity(self._buscar_model(pedido_id))

    def listar(self, status: Optional[str] = None, busca: Optional[str] = None) -> List[Pedido]:
        qs = self.PedidoModel.objects.all()
        if status:
            qs = qs.filter(status=status)
        if busca:
            filtro = Q(nome_cliente__icontains=busca) | Q(email_cliente__icontains=busca)
            # Busca por id só quando o termo é um UUID completo
            try:
                filtro |= Q(pk=self.PedidoModel._meta.pk.to_python(busca))
            except ValidationError:
                pass
            qs = qs.filter(filtro)
        return [PedidoMapper.to_entity(model) for model in qs.order_by('-criado_em')]

    def atualizar_status(self, pedido_id: str, novo_status: str, pagamento_id: Optional[str] = None) -> Pedido:
        """Edição manual (admin): sobrescreve o status sem checar o timestamp do gateway."""
        model = self._buscar_model(pedido_id)
        if model is None:
            raise PedidoNaoEncontradoError()

        model.status = novo_status
        campos = ['status', 'atualizado_em']
        if pagamento_id is not None:
            model.pagamento_id = pagamento_id
            campos.append('pagamento_id')
        model.save(update_fields=campos)
        return PedidoMapper.to_entity(model)

    def registrar_pagamento(
        self,
        pedido_id: str,
        status: str,
        pagamento_id: str,
        metodo_pagamento: Optional[str] = None,
        atualizado_em_gateway: Optional[datetime] = None,
    ) -> bool:
        """
        Compare-and-set em um único UPDATE: grava apenas se o pedido ainda não
        recebeu um estado do gateway mais recente que `atualizado_em_gateway`.
        Um mesmo timestamp é reaplicado (reentrega idempotente).
        Pedido já pago por outro pagamento não volta para "novo"/"cancelado"
        por causa de um pagamento abandonado.
        """
        campos = {
            'status': status,
            'pagamento_id': str(pagamento_id),
            'atualizado_em': timezone.now(),
        }
        if metodo_pagamento:
            campos['metodo_pagamento'] = metodo_pagamento

        try:
            qs = self.PedidoModel.objects.filter(pk=pedido_id)
        except (ValidationError, ValueError):
            return False

        if status != STATUS_PAGO:
            qs = qs.filter(~Q(status=STATUS_PAGO) | Q(pagamento_id=str(pagamento_id)))

        if atualizado_em_gateway is not None:
            campos['gateway_atualizado_em'] = atualizado_em_gateway
            qs = qs.filter(
                Q(gateway_atualizado_em__isnull=True) | Q(gateway_atualizado_em__lte=atualizado_em_gateway)
            )

        return qs.update(**campos) > 0

    def deletar(self, pedido_id: str):
        model = self._buscar_model(pedido_id)
        if model is None:
            raise PedidoNaoEncontradoError()
        model.delete()

    def contar_por_status(self) -> Dict[str, int]:
        contagem = {status: 0 for status in STATUS_PEDIDO}
        for linha in self.PedidoModel.objects.values('status').annotate(total=Count('id')):
            contagem[linha['status']] = linha['total']
        return contagem
