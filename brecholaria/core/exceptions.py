class BaseErroCore(Exception):
    """Classe base para todas as exceções da Camada Core."""
    pass

class DadosInvalidosError(BaseErroCore):
    """Erro levantado quando dados inválidos são fornecidos."""
    def __init__(self, message="Dados inválidos"):
        self.message = message
        super().__init__(self.message)

# ===============================================
# ERROS DE PERSISTÊNCIA E ENTIDADE
# ===============================================

class ItemNaoEncontradoError(BaseErroCore):
    """Erro levantado quando um item (genérico) não é encontrado."""
    def __init__(self, message="O item solicitado não foi encontrado."):
        self.message = message
        super().__init__(self.message)

class ProdutoNaoEncontradoError(ItemNaoEncontradoError):
    """Erro levantado quando um produto específico não é encontrado."""
    def __init__(self, message="Produto não encontrado"):
        super().__init__(message)

class PedidoNaoEncontradoError(ItemNaoEncontradoError):
    """Erro específico para Pedidos não encontrados."""
    def __init__(self, message="Pedido não encontrado"):
        super().__init__(message)

class FalhaPersistenciaError(BaseErroCore):
    """Erro levantado quando a gravação no banco falha."""
    def __init__(self, message="Falha ao atualizar pedido"):
        self.message = message
        super().__init__(self.message)

class EstoqueInsuficienteError(BaseErroCore):
    """Erro levantado quando a quantidade solicitada excede o estoque."""
    def __init__(self, produto_id: str, estoque_atual: int, quantidade_solicitada: int, message=None):
        self.produto_id = produto_id
        self.estoque_atual = estoque_atual
        self.quantidade_solicitada = quantidade_solicitada
        if message is None:
            message = (f"Estoque insuficiente para o produto {produto_id}. "
                       f"Disponível: {estoque_atual}, Solicitado: {quantidade_solicitada}.")
        self.message = message
        super().__init__(message)

# ===============================================
# ERROS DE FLUXO DE COMPRA E PAGAMENTO
# ===============================================

class CarrinhoVazioError(BaseErroCore):
    """Erro levantado ao tentar fazer checkout sem itens."""
    def __init__(self, message="O pedido precisa ter ao menos um item."):
        self.message = message
        super().__init__(self.message)

class StatusInvalidoError(BaseErroCore):
    """Erro levantado ao tentar definir um status de pedido inválido."""
    def __init__(self, message="O status fornecido não é válido para um pedido."):
        self.message = message
        super().__init__(self.message)

class PagamentoFalhouError(BaseErroCore):
    """Erro levantado quando o Gateway de Pagamento falha."""
    def __init__(self, message="A transação de pagamento foi rejeitada ou falhou.", detalhes=None):
        self.message = message
        self.detalhes = detalhes
        super().__init__(self.message)

class PagamentoRecusadoError(PagamentoFalhouError):
    """O gateway respondeu com erro (HTTP não-2xx)."""
    def __init__(self, message="Erro ao processar pagamento", detalhes=None, status_code=None):
        self.status_code = status_code
        super().__init__(message, detalhes)

class GatewayIndisponivelError(PagamentoFalhouError):
    """Falha de rede ao falar com o gateway."""
    pass

class ConfiguracaoAusenteError(BaseErroCore):
    """Credencial obrigatória do gateway não configurada (falha do operador)."""
    def __init__(self, message="Configuração de pagamento não disponível",
                 detalhes="Por favor, configure as credenciais do Mercado Pago"):
        self.message = message
        self.detalhes = detalhes
        super().__init__(self.message)

class AssinaturaInvalidaError(BaseErroCore):
    """A assinatura x-signature do webhook não confere."""
    def __init__(self, message="Assinatura do webhook inválida"):
        self.message = message
        super().__init__(self.message)

class ReferenciaExternaAusenteError(BaseErroCore):
    """O pagamento consultado não traz external_reference."""
    def __init__(self, message="Order ID not found"):
        self.message = message
        super().__init__(self.message)
