# brecholaria/presentation/views_admin.py
"""
API do painel de administração: pedidos, catálogo e estatísticas.
Todas as rotas exigem usuário staff.
"""
from rest_framework import status
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from brecholaria.core import dependency_injection
from brecholaria.core.entities import Produto
from brecholaria.core.exceptions import BaseErroCore

from .erros import resposta_de_erro, resposta_de_validacao
from .serializers import (
    PedidoSerializer,
    ProdutoSerializer,
    AtualizarStatusSerializer,
    UploadImagemSerializer,
)


class AdminAPIView(APIView):
    permission_classes = [IsAdminUser]


# ====================================================================
# DASHBOARD
# ====================================================================

class EstatisticasAdminAPIView(AdminAPIView):
    """Totais do dashboard: produtos (estoque, destaque) e pedidos por status."""

    def get(self, request):
        return Response(dependency_injection.get_gerenciar_produtos_admin_use_case().estatisticas())


# ====================================================================
# GERENCIAMENTO DE PEDIDOS
# ====================================================================

class PedidosAdminAPIView(AdminAPIView):
    """Lista de pedidos, mais recentes primeiro. Filtros: ?status= e ?busca=."""

    def get(self, request):
        try:
            pedidos = dependency_injection.get_gerenciar_pedidos_admin_use_case().listar_todos(
                status=request.query_params.get('status') or None,
                busca=request.query_params.get('busca') or None,
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(PedidoSerializer(pedidos, many=True).data)


class PedidoAdminAPIView(AdminAPIView):

    def get(self, request, pedido_id):
        try:
            pedido = dependency_injection.get_gerenciar_pedidos_admin_use_case().detalhar_pedido(str(pedido_id))
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(PedidoSerializer(pedido).data)

    def delete(self, request, pedido_id):
        try:
            dependency_injection.get_gerenciar_pedidos_admin_use_case().deletar_pedido(str(pedido_id))
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(status=status.HTTP_204_NO_CONTENT)


class StatusPedidoAdminAPIView(AdminAPIView):
    """Edição manual do status. Qualquer status válido pode substituir o atual."""

    def patch(self, request, pedido_id):
        serializer = AtualizarStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return resposta_de_validacao(serializer.errors)

        try:
            pedido = dependency_injection.get_gerenciar_pedidos_admin_use_case().atualizar_status_manual(
                str(pedido_id),
                serializer.validated_data['status'],
                pagamento_id=serializer.validated_data.get('payment_id') or None,
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(PedidoSerializer(pedido).data)


# ====================================================================
# GERENCIAMENTO DO CATÁLOGO
# ====================================================================

class ProdutosAdminAPIView(AdminAPIView):

    def post(self, request):
        serializer = ProdutoSerializer(data=request.data)
        if not serializer.is_valid():
            return resposta_de_validacao(serializer.errors)
        try:
            produto = dependency_injection.get_gerenciar_produtos_admin_use_case().criar(
                Produto(**serializer.validated_data)
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(ProdutoSerializer(produto).data, status=status.HTTP_201_CREATED)


class ProdutoAdminAPIView(AdminAPIView):

    def _atualizar(self, request, produto_id, parcial: bool):
        serializer = ProdutoSerializer(data=request.data, partial=parcial)
        if not serializer.is_valid():
            return resposta_de_validacao(serializer.errors)
        try:
            produto = dependency_injection.get_gerenciar_produtos_admin_use_case().atualizar(
                str(produto_id), dict(serializer.validated_data)
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(ProdutoSerializer(produto).data)

    def put(self, request, produto_id):
        return self._atualizar(request, produto_id, parcial=False)

    def patch(self, request, produto_id):
        return self._atualizar(request, produto_id, parcial=True)

    def delete(self, request, produto_id):
        try:
            dependency_injection.get_gerenciar_produtos_admin_use_case().deletar(str(produto_id))
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(status=status.HTTP_204_NO_CONTENT)


class UploadImagemAdminAPIView(AdminAPIView):
    """Recebe o arquivo (campo `arquivo`) e devolve a URL pública da imagem."""
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        serializer = UploadImagemSerializer(data=request.data)
        if not serializer.is_valid():
            return resposta_de_validacao(serializer.errors)

        arquivo = serializer.validated_data['arquivo']
        try:
            url = dependency_injection.get_gerenciar_produtos_admin_use_case().enviar_imagem(
                arquivo.name, arquivo.read()
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response({'url': url}, status=status.HTTP_201_CREATED)
