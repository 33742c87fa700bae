# brecholaria/core/ports.py
"""
Definição das Portas (Interfaces/Protocolos) da Arquitetura Limpa.

Estes protocolos definem o contrato que a camada de Infraestrutura (Repositorios, Gateways)
DEVE seguir para se conectar à camada Core (Casos de Uso).
"""

from typing import Protocol, List, Optional, Dict
from abc import abstractmethod
from datetime import datetime

from brecholaria.core.entities import (
    Produto, Pedido, SolicitacaoPagamento, PagamentoGateway
)


# ====================================================================
# 1. REPOSITÓRIOS (Portas de Persistência)
# ====================================================================

class IProdutoRepository(Protocol):
    """Protocolo para a persistência e busca de Produtos."""

    @abstractmethod
    def buscar_por_id(self, produto_id: str) -> Optional[Produto]: ...

    @abstractmethod
    def listar(
        self,
        categoria: Optional[str] = None,
        busca: Optional[str] = None,
        apenas_destaque: bool = False,
        apenas_em_estoque: bool = False,
    ) -> List[Produto]: ...

    @abstractmethod
    def salvar(self, produto: Produto) -> Produto: ...

    @abstractmethod
    def deletar(self, produto_id: str): ...


class IPedidoRepository(Protocol):
    """Protocolo para a persistência e gestão de Pedidos (Order Store)."""

    @abstractmethod
    def criar(self, pedido: Pedido) -> Pedido: ...

    @abstractmethod
    def buscar_por_id(self, pedido_id: str) -> Optional[Pedido]: ...

    @abstractmethod
    def listar(self, status: Optional[str] = None, busca: Optional[str] = None) -> List[Pedido]: ...

    @abstractmethod
    def atualizar_status(self, pedido_id: str, novo_status: str, pagamento_id: Optional[str] = None) -> Pedido: ...

    @abstractmethod
    def registrar_pagamento(
        self,
        pedido_id: str,
        status: str,
        pagamento_id: str,
        metodo_pagamento: Optional[str] = None,
        atualizado_em_gateway: Optional[datetime] = None,
    ) -> bool:
        """
        Grava status e payment id vindos do gateway. Quando `atualizado_em_gateway`
        é informado, só grava se ele não for mais antigo que o já aplicado.
        Um pedido pago só aceita status diferente de "pago" do próprio pagamento
        que o quitou. Retorna False quando a gravação foi descartada.
        """
        ...

    @abstractmethod
    def deletar(self, pedido_id: str): ...

    @abstractmethod
    def contar_por_status(self) -> Dict[str, int]: ...


# ====================================================================
# 2. GATEWAYS (Portas de Serviços Externos)
# ====================================================================

class IGatewayPagamento(Protocol):
    """Protocolo para o gateway de pagamento (Mercado Pago)."""

    @abstractmethod
    def criar_pagamento(self, solicitacao: SolicitacaoPagamento) -> PagamentoGateway: ...

    @abstractmethod
    def buscar_pagamento(self, pagamento_id: str) -> PagamentoGateway: ...

    @abstractmethod
    def assinatura_valida(self, pagamento_id: str, assinatura: Optional[str], request_id: Optional[str]) -> bool: ...


class IEmailService(Protocol):
    """Protocolo para o serviço de envio de e-mails."""

    @abstractmethod
    def enviar_aprovacao_pagamento(self, pedido: Pedido) -> bool: ...


class IArmazenamentoImagens(Protocol):
    """Protocolo para o armazenamento de arquivos (imagens de produtos)."""

    @abstractmethod
    def salvar(self, nome_original: str, conteudo: bytes) -> str:
        """Persiste o arquivo e retorna a URL pública."""
        ...
