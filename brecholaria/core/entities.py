from dataclasses import dataclass, field
from decimal import Decimal
from datetime import datetime
from typing import List, Optional, Dict

# ====================================================================
# ENUMERAÇÕES DE DOMÍNIO
# Valores gravados no banco e trafegados na API (wire format).
# ====================================================================

STATUS_NOVO = "novo"
STATUS_PAGO = "pago"
STATUS_ENVIADO = "enviado"
STATUS_CONCLUIDO = "concluido"
STATUS_CANCELADO = "cancelado"

STATUS_PEDIDO = (STATUS_NOVO, STATUS_PAGO, STATUS_ENVIADO, STATUS_CONCLUIDO, STATUS_CANCELADO)

METODO_PIX = "pix"
METODO_CARTAO = "credit_card"
METODO_BOLETO = "boleto"

METODOS_PAGAMENTO = (METODO_PIX, METODO_CARTAO, METODO_BOLETO)

CONDICOES_PRODUTO = ("novo", "excelente", "bom", "usado")

CENTAVO = Decimal("0.01")


# ====================================================================
# ENTIDADES CORE
# Representam os objetos de negócio puros.
# ====================================================================

@dataclass
class Produto:
    """Peça do catálogo do brechó."""
    nome: str
    descricao: str
    preco: Decimal
    categoria: str
    tamanho: str
    condicao: str
    imagens: List[str] = field(default_factory=list)
    preco_original: Optional[Decimal] = None
    medidas: Optional[Dict[str, str]] = None
    em_estoque: bool = True
    quantidade_estoque: int = 1
    em_destaque: bool = False
    id: Optional[str] = None
    criado_em: Optional[datetime] = None
    atualizado_em: Optional[datetime] = None

    @property
    def imagem_principal(self) -> str:
        return self.imagens[0] if self.imagens else ""

    @property
    def disponivel(self) -> bool:
        return self.em_estoque and self.quantidade_estoque > 0


@dataclass
class Endereco:
    """Endereço de entrega informado no checkout."""
    rua: str
    numero: str
    bairro: str
    cidade: str
    estado: str
    cep: str
    complemento: Optional[str] = None


@dataclass
class ItemPedido:
    """Snapshot de um item no momento da compra (imutável)."""
    produto_id: str
    nome: str
    preco: Decimal
    quantidade: int
    imagem: str = ""
    tamanho: Optional[str] = None

    @property
    def subtotal(self) -> Decimal:
        return self.preco * self.quantidade


@dataclass
class Pedido:
    """Entidade do Pedido de Venda."""
    nome_cliente: str
    email_cliente: str
    itens: List[ItemPedido]
    total: Decimal = Decimal("0.00")
    status: str = STATUS_NOVO
    telefone_cliente: Optional[str] = None
    endereco_cliente: Optional[Endereco] = None
    metodo_pagamento: Optional[str] = None
    pagamento_id: Optional[str] = None
    # date_last_updated do último estado do gateway aplicado ao pedido
    gateway_atualizado_em: Optional[datetime] = None
    id: Optional[str] = None
    criado_em: Optional[datetime] = None
    atualizado_em: Optional[datetime] = None

    def calcular_total(self) -> Decimal:
        """Soma preço x quantidade dos itens persistidos."""
        total = sum((item.subtotal for item in self.itens), Decimal("0"))
        return total.quantize(CENTAVO)


@dataclass
class ItemCarrinho:
    """Item do carrinho de sessão, sempre com o preço atual do catálogo."""
    produto_id: str
    nome: str
    preco: Decimal
    quantidade: int
    imagem: str = ""
    tamanho: Optional[str] = None

    @property
    def subtotal(self) -> Decimal:
        return self.preco * self.quantidade


@dataclass
class Carrinho:
    """Entidade do Carrinho de Compras."""
    itens: List[ItemCarrinho] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum((item.subtotal for item in self.itens), Decimal("0")).quantize(CENTAVO)

    @property
    def quantidade_itens(self) -> int:
        return sum(item.quantidade for item in self.itens)

    def get_item(self, produto_id: str) -> Optional[ItemCarrinho]:
        return next((item for item in self.itens if item.produto_id == produto_id), None)


# ====================================================================
# PAGAMENTO
# ====================================================================

@dataclass
class SolicitacaoPagamento:
    """Pedido de criação de pagamento já validado (intenção de pagamento)."""
    pedido_id: str
    metodo: str
    valor: Decimal
    nome_cliente: str
    email_cliente: str
    token_cartao: Optional[str] = None
    parcelas: int = 1
    metodo_cartao_id: Optional[str] = None


@dataclass
class PagamentoGateway:
    """Projeção do registro de pagamento retornado pelo Mercado Pago."""
    id: str
    status: Optional[str]
    referencia_externa: Optional[str] = None
    valor: Optional[Decimal] = None
    qr_code: Optional[str] = None
    qr_code_base64: Optional[str] = None
    ticket_url: Optional[str] = None
    url_boleto: Optional[str] = None
    atualizado_em: Optional[datetime] = None


@dataclass
class ResultadoPagamento:
    """Resposta da criação de pagamento, com campos extras conforme o método."""
    pagamento_id: str
    status: Optional[str]
    metodo: Optional[str] = None
    qr_code: Optional[str] = None
    qr_code_base64: Optional[str] = None
    ticket_url: Optional[str] = None
    url_boleto: Optional[str] = None


@dataclass
class NotificacaoPagamento:
    """Notificação assíncrona recebida do gateway. Serve apenas como gatilho."""
    tipo: Optional[str]
    pagamento_id: Optional[str] = None
    assinatura: Optional[str] = None
    request_id: Optional[str] = None


@dataclass
class ResultadoNotificacao:
    mensagem: str
    pedido_id: Optional[str] = None
    status: Optional[str] = None
    aplicado: bool = False
