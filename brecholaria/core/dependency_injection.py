# brecholaria/core/dependency_injection.py
"""
Módulo de Injeção de Dependência (DI).
Responsável por instanciar os Use Cases com suas dependências de Repositórios/Gateways
concretos da camada de Infraestrutura.
"""
from django.conf import settings

from brecholaria.infrastructure.repositories import ProdutoRepositoryDjango, PedidoRepositoryDjango
from brecholaria.infrastructure.gateways import (
    ConfiguracaoMercadoPago,
    MercadoPagoGateway,
    EmailServiceGateway,
    ArmazenamentoImagensDjango,
)
from .use_cases import (
    ListarProdutosUseCase,
    DetalharProdutoUseCase,
    GerenciarProdutosAdminUseCase,
    CriarPedidoUseCase,
    ConsultarPedidoUseCase,
    CriarPagamentoUseCase,
    ProcessarNotificacaoPagamentoUseCase,
    GerenciarPedidosAdminUseCase,
)

# Repositórios e serviços concretos (sem estado)
produto_repo = ProdutoRepositoryDjango()
pedido_repo = PedidoRepositoryDjango()
email_service = EmailServiceGateway()
armazenamento = ArmazenamentoImagensDjango()


# ====================================================================
# Gateway de Pagamento
# ====================================================================

def get_configuracao_mercado_pago() -> ConfiguracaoMercadoPago:
    """Lê a configuração do settings a cada chamada (override_settings funciona nos testes)."""
    return ConfiguracaoMercadoPago(
        access_token=getattr(settings, 'MERCADO_PAGO_ACCESS_TOKEN', None) or None,
        notification_url=getattr(settings, 'MERCADO_PAGO_NOTIFICATION_URL', None) or None,
        webhook_secret=getattr(settings, 'MERCADO_PAGO_WEBHOOK_SECRET', None) or None,
        api_base_url=getattr(settings, 'MERCADO_PAGO_API_URL', 'https://api.mercadopago.com/v1'),
        timeout=getattr(settings, 'MERCADO_PAGO_TIMEOUT', 15),
    )

def get_gateway_pagamento() -> MercadoPagoGateway:
    return MercadoPagoGateway(get_configuracao_mercado_pago())


# ====================================================================
# Use Cases de Catálogo/Administração
# ====================================================================

def get_listar_produtos_use_case() -> ListarProdutosUseCase:
    return ListarProdutosUseCase(produto_repo)

def get_detalhar_produto_use_case() -> DetalharProdutoUseCase:
    return DetalharProdutoUseCase(produto_repo)

def get_gerenciar_produtos_admin_use_case() -> GerenciarProdutosAdminUseCase:
    return GerenciarProdutosAdminUseCase(produto_repo, pedido_repo, armazenamento)


# ====================================================================
# Use Cases de Pedidos/Pagamento
# ====================================================================

def get_criar_pedido_use_case() -> CriarPedidoUseCase:
    return CriarPedidoUseCase(pedido_repo, produto_repo)

def get_consultar_pedido_use_case() -> ConsultarPedidoUseCase:
    return ConsultarPedidoUseCase(pedido_repo)

def get_criar_pagamento_use_case() -> CriarPagamentoUseCase:
    return CriarPagamentoUseCase(pedido_repo, get_gateway_pagamento(), email_service)

def get_processar_notificacao_use_case() -> ProcessarNotificacaoPagamentoUseCase:
    return ProcessarNotificacaoPagamentoUseCase(pedido_repo, get_gateway_pagamento(), email_service)

def get_gerenciar_pedidos_admin_use_case() -> GerenciarPedidosAdminUseCase:
    return GerenciarPedidosAdminUseCase(pedido_repo)
