# brecholaria/presentation/cart_manager.py
# Gerencia a persistência e manipulação do Carrinho de Compras na sessão do Django.

from django.http import HttpRequest

from brecholaria.core.entities import Carrinho, ItemCarrinho, Produto
from brecholaria.core.exceptions import ProdutoNaoEncontradoError, EstoqueInsuficienteError, DadosInvalidosError
from brecholaria.core.ports import IProdutoRepository
from brecholaria.core import dependency_injection


class CartManager:
    """
    Gerencia o carrinho de compras usando a sessão do Django para persistir o estado
    entre requisições. Só {produto_id: quantidade} fica na sessão; nome e preço são
    relidos do catálogo a cada carga.
    """

    SESSION_KEY = 'carrinho_brecholaria'

    def __init__(self, request: HttpRequest, produto_repo: IProdutoRepository = None):
        self.request = request
        self.produto_repo = produto_repo or dependency_injection.produto_repo
        self.carrinho: Carrinho = self._load_carrinho_from_session()

    # --- Métodos de Persistência ---

    @staticmethod
    def _to_item(produto: Produto, quantidade: int) -> ItemCarrinho:
        return ItemCarrinho(
            produto_id=produto.id,
            nome=produto.nome,
            preco=produto.preco,
            quantidade=quantidade,
            imagem=produto.imagem_principal,
            tamanho=produto.tamanho,
        )

    def _load_carrinho_from_session(self) -> Carrinho:
        raw_cart = self.request.session.get(self.SESSION_KEY) or {}

        itens = []
        for produto_id, quantidade in raw_cart.items():
            produto = self.produto_repo.buscar_por_id(produto_id)
            # Peças vendidas ou removidas somem do carrinho
            if produto and produto.disponivel:
                itens.append(self._to_item(produto, min(quantidade, produto.quantidade_estoque)))

        return Carrinho(itens=itens)

    def _save_carrinho_to_session(self):
        self.request.session[self.SESSION_KEY] = {
            str(item.produto_id): item.quantidade for item in self.carrinho.itens
        }
        self.request.session.modified = True

    def clear_carrinho(self):
        """Limpa o carrinho na sessão (usado após o checkout)."""
        if self.SESSION_KEY in self.request.session:
            del self.request.session[self.SESSION_KEY]
            self.request.session.modified = True
        self.carrinho = Carrinho()

    # --- Métodos de Manipulação ---

    def _produto_disponivel(self, produto_id: str) -> Produto:
        produto = self.produto_repo.buscar_por_id(produto_id)
        if not produto:
            raise ProdutoNaoEncontradoError()
        if not produto.disponivel:
            raise EstoqueInsuficienteError(produto_id, 0, 1, message=f"{produto.nome} está esgotado.")
        return produto

    def add_item(self, produto_id: str, quantidade: int = 1):
        """Adiciona ou incrementa uma peça no carrinho."""
        if quantidade <= 0:
            raise DadosInvalidosError("A quantidade a adicionar deve ser positiva.")
        produto = self._produto_disponivel(produto_id)

        existing_item = self.carrinho.get_item(produto.id)
        nova_quantidade = quantidade + (existing_item.quantidade if existing_item else 0)

        if nova_quantidade > produto.quantidade_estoque:
            raise EstoqueInsuficienteError(produto.id, produto.quantidade_estoque, nova_quantidade)

        if existing_item:
            existing_item.quantidade = nova_quantidade
        else:
            self.carrinho.itens.append(self._to_item(produto, nova_quantidade))

        self._save_carrinho_to_session()

    def remove_item(self, produto_id: str):
        """Remove completamente um item do carrinho."""
        self.carrinho.itens = [item for item in self.carrinho.itens if item.produto_id != str(produto_id)]
        self._save_carrinho_to_session()

    def update_quantity(self, produto_id: str, quantidade: int):
        """Define a quantidade de um item; zero ou menos remove."""
        if quantidade <= 0:
            self.remove_item(produto_id)
            return

        produto = self._produto_disponivel(produto_id)
        if quantidade > produto.quantidade_estoque:
            raise EstoqueInsuficienteError(produto.id, produto.quantidade_estoque, quantidade)

        existing_item = self.carrinho.get_item(produto.id)
        if existing_item:
            existing_item.quantidade = quantidade
        else:
            self.carrinho.itens.append(self._to_item(produto, quantidade))
        self._save_carrinho_to_session()

    # --- Métodos de Consulta ---

    def get_carrinho(self) -> Carrinho:
        return self.carrinho
