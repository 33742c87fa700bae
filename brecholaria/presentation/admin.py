# Configuração da interface administrativa do Django para os modelos da Brecholaria.

from django.contrib import admin

from brecholaria.catalog.models import Produto
from brecholaria.pedidos.models import Pedido


# ====================================================================
# 1. ADMIN PARA PRODUTOS
# ====================================================================

@admin.register(Produto)
class ProdutoAdmin(admin.ModelAdmin):
    list_display = ('nome', 'categoria', 'tamanho', 'condicao', 'preco', 'quantidade_estoque', 'em_estoque', 'em_destaque')
    list_filter = ('categoria', 'condicao', 'em_estoque', 'em_destaque')
    list_editable = ('preco', 'quantidade_estoque', 'em_estoque', 'em_destaque')
    search_fields = ('nome', 'descricao')


# ====================================================================
# 2. ADMIN PARA PEDIDOS
# ====================================================================

@admin.register(Pedido)
class PedidoAdmin(admin.ModelAdmin):
    list_display = ('id', 'nome_cliente', 'email_cliente', 'total', 'status', 'metodo_pagamento', 'criado_em')
    list_filter = ('status', 'metodo_pagamento', 'criado_em')
    search_fields = ('id', 'nome_cliente', 'email_cliente', 'pagamento_id')
    readonly_fields = ('itens', 'total', 'pagamento_id', 'gateway_atualizado_em', 'criado_em', 'atualizado_em')
    date_hierarchy = 'criado_em'
