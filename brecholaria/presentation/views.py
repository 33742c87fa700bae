from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from brecholaria.core import dependency_injection
from brecholaria.core.entities import Endereco
from brecholaria.core.exceptions import BaseErroCore

from .cart_manager import CartManager
from .erros import resposta_de_erro, resposta_de_validacao
from .serializers import (
    ProdutoSerializer,
    CarrinhoSerializer,
    AlterarItemCarrinhoSerializer,
    CriarPedidoSerializer,
    PedidoSerializer,
)


# ====================================================================
# VIEWS: Orquestram a requisição, a execução dos casos de uso e a resposta.
# ====================================================================

def _bool_param(valor) -> bool:
    return str(valor).lower() in ('1', 'true', 'sim')


# ====================================================================
# CATÁLOGO
# ====================================================================

class ProdutoListAPIView(APIView):
    """Lista pública de produtos com filtros por categoria, busca, destaque e estoque."""
    permission_classes = [AllowAny]

    def get(self, request):
        params = request.query_params
        produtos = dependency_injection.get_listar_produtos_use_case().executar(
            categoria=params.get('categoria') or None,
            busca=params.get('busca') or None,
            apenas_destaque=_bool_param(params.get('destaque')),
            apenas_em_estoque=_bool_param(params.get('em_estoque')),
        )
        return Response(ProdutoSerializer(produtos, many=True).data)


class ProdutoDetailAPIView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, produto_id):
        try:
            produto = dependency_injection.get_detalhar_produto_use_case().executar(str(produto_id))
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(ProdutoSerializer(produto).data)


# ====================================================================
# CARRINHO (sessão)
# ====================================================================

class CarrinhoAPIView(APIView):
    """
    API View para o carrinho de compras guardado na sessão.
    Não exige login: o checkout do brechó é feito como convidado.
    """
    permission_classes = [AllowAny]

    def _resposta(self, cart: CartManager, codigo=status.HTTP_200_OK):
        return Response(CarrinhoSerializer(cart.get_carrinho()).data, status=codigo)

    def get(self, request):
        return self._resposta(CartManager(request))

    def post(self, request):
        """Adiciona um item ao carrinho (ou incrementa a quantidade)."""
        serializer = AlterarItemCarrinhoSerializer(data=request.data)
        if not serializer.is_valid():
            return resposta_de_validacao(serializer.errors)

        cart = CartManager(request)
        try:
            cart.add_item(serializer.validated_data['produto_id'], serializer.validated_data['quantidade'])
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return self._resposta(cart, status.HTTP_201_CREATED)

    def patch(self, request):
        """Define a quantidade de um item; zero remove."""
        serializer = AlterarItemCarrinhoSerializer(data=request.data)
        if not serializer.is_valid():
            return resposta_de_validacao(serializer.errors)

        cart = CartManager(request)
        try:
            cart.update_quantity(serializer.validated_data['produto_id'], serializer.validated_data['quantidade'])
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return self._resposta(cart)

    def delete(self, request):
        """Remove um item; sem produto_id esvazia o carrinho."""
        cart = CartManager(request)
        produto_id = request.data.get('produto_id') if hasattr(request.data, 'get') else None
        if produto_id:
            cart.remove_item(str(produto_id))
        else:
            cart.clear_carrinho()
        return self._resposta(cart)


# ====================================================================
# PEDIDOS
# ====================================================================

class PedidoCreateAPIView(APIView):
    """
    Finaliza o checkout: grava o pedido com preços do catálogo e esvazia o carrinho.
    O pagamento é criado em seguida, via /api/pagamentos/.
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = CriarPedidoSerializer(data=request.data)
        if not serializer.is_valid():
            return resposta_de_validacao(serializer.errors)

        dados = serializer.validated_data
        endereco = Endereco(**dados['customer_address']) if dados.get('customer_address') else None
        itens = [
            {'produto_id': item['id'], 'quantidade': item['quantity'], 'tamanho': item.get('size') or None}
            for item in dados['items']
        ]

        try:
            pedido = dependency_injection.get_criar_pedido_use_case().executar(
                nome_cliente=dados['customer_name'],
                email_cliente=dados['customer_email'],
                telefone_cliente=dados.get('customer_phone') or None,
                endereco=endereco,
                metodo_pagamento=dados.get('payment_method'),
                itens=itens,
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)

        CartManager(request).clear_carrinho()
        return Response(PedidoSerializer(pedido).data, status=status.HTTP_201_CREATED)


class PedidoDetailAPIView(APIView):
    """Consulta pública do pedido (página de confirmação)."""
    permission_classes = [AllowAny]

    def get(self, request, pedido_id):
        try:
            pedido = dependency_injection.get_consultar_pedido_use_case().executar(str(pedido_id))
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(PedidoSerializer(pedido).data)
