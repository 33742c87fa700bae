"""
Rotas da API REST da loja: catálogo, carrinho, pedidos, pagamento,
webhook do Mercado Pago e painel administrativo.
"""
from django.urls import path

from . import views, views_pagamento, views_admin


urlpatterns = [
    # ====================================================================
    # 1. CATÁLOGO
    # ====================================================================
    path('api/produtos/', views.ProdutoListAPIView.as_view(), name='api_produtos'),
    path('api/produtos/<uuid:produto_id>/', views.ProdutoDetailAPIView.as_view(), name='api_produto_detalhe'),

    # ====================================================================
    # 2. CARRINHO E PEDIDOS
    # ====================================================================
    path('api/carrinho/', views.CarrinhoAPIView.as_view(), name='api_carrinho'),
    path('api/pedidos/', views.PedidoCreateAPIView.as_view(), name='api_pedidos'),
    path('api/pedidos/<uuid:pedido_id>/', views.PedidoDetailAPIView.as_view(), name='api_pedido_detalhe'),

    # ====================================================================
    # 3. PAGAMENTO (chamadas públicas, com CORS liberado)
    # ====================================================================
    path('api/pagamentos/', views_pagamento.PagamentoAPIView.as_view(), name='api_pagamentos'),
    path('api/webhooks/mercadopago/', views_pagamento.WebhookMercadoPagoAPIView.as_view(), name='webhook_mercadopago'),

    # ====================================================================
    # 4. PAINEL ADMINISTRATIVO
    # ====================================================================
    path('api/admin/estatisticas/', views_admin.EstatisticasAdminAPIView.as_view(), name='admin_estatisticas'),
    path('api/admin/pedidos/', views_admin.PedidosAdminAPIView.as_view(), name='admin_pedidos'),
    path('api/admin/pedidos/<uuid:pedido_id>/', views_admin.PedidoAdminAPIView.as_view(), name='admin_pedido_detalhe'),
    path('api/admin/pedidos/<uuid:pedido_id>/status/', views_admin.StatusPedidoAdminAPIView.as_view(), name='admin_pedido_status'),
    path('api/admin/produtos/', views_admin.ProdutosAdminAPIView.as_view(), name='admin_produtos'),
    path('api/admin/produtos/imagens/', views_admin.UploadImagemAdminAPIView.as_view(), name='admin_produto_imagens'),
    path('api/admin/produtos/<uuid:produto_id>/', views_admin.ProdutoAdminAPIView.as_view(), name='admin_produto_detalhe'),
]
