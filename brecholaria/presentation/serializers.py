from rest_framework import serializers

from brecholaria.core.entities import CONDICOES_PRODUTO, METODOS_PAGAMENTO

# Rótulos exibidos no painel para cada status de pedido
STATUS_LABELS = {
    'novo': 'Aguardando Pagamento',
    'pago': 'Pago',
    'enviado': 'Enviado',
    'concluido': 'Concluído',
    'cancelado': 'Cancelado',
}


def _preco(**kwargs):
    return serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False, **kwargs)


# ====================================================================
# SERIALIZERS DO CATÁLOGO
# Campos no formato do frontend (inglês); `source` aponta para a entidade.
# ====================================================================

class ProdutoSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    name = serializers.CharField(source='nome', max_length=255)
    description = serializers.CharField(source='descricao', allow_blank=True, required=False, default="")
    price = _preco(source='preco')
    original_price = _preco(source='preco_original', required=False, allow_null=True, default=None)
    images = serializers.ListField(child=serializers.CharField(), source='imagens', required=False, default=list)
    category = serializers.CharField(source='categoria', max_length=100)
    size = serializers.CharField(source='tamanho', max_length=20)
    condition = serializers.ChoiceField(source='condicao', choices=CONDICOES_PRODUTO)
    measurements = serializers.DictField(
        child=serializers.CharField(allow_blank=True), source='medidas', required=False, allow_null=True, default=None
    )
    in_stock = serializers.BooleanField(source='em_estoque', required=False, default=True)
    stock_quantity = serializers.IntegerField(source='quantidade_estoque', min_value=0, required=False, default=1)
    featured = serializers.BooleanField(source='em_destaque', required=False, default=False)
    created_at = serializers.DateTimeField(source='criado_em', read_only=True)
    updated_at = serializers.DateTimeField(source='atualizado_em', read_only=True)


class UploadImagemSerializer(serializers.Serializer):
    arquivo = serializers.ImageField()


# ====================================================================
# SERIALIZERS PARA O CARRINHO
# ====================================================================

class ItemCarrinhoSerializer(serializers.Serializer):
    id = serializers.CharField(source='produto_id')
    name = serializers.CharField(source='nome')
    price = _preco(source='preco')
    quantity = serializers.IntegerField(source='quantidade')
    image = serializers.CharField(source='imagem')
    size = serializers.CharField(source='tamanho', allow_null=True)
    subtotal = _preco()


class CarrinhoSerializer(serializers.Serializer):
    items = ItemCarrinhoSerializer(source='itens', many=True)
    total = _preco()
    count = serializers.IntegerField(source='quantidade_itens')


class AlterarItemCarrinhoSerializer(serializers.Serializer):
    produto_id = serializers.CharField()
    quantidade = serializers.IntegerField(required=False, default=1)


# ====================================================================
# SERIALIZERS DE PEDIDO
# ====================================================================

class EnderecoSerializer(serializers.Serializer):
    street = serializers.CharField(source='rua', max_length=255)
    number = serializers.CharField(source='numero', max_length=20)
    complement = serializers.CharField(source='complemento', required=False, allow_blank=True, allow_null=True)
    neighborhood = serializers.CharField(source='bairro', max_length=255)
    city = serializers.CharField(source='cidade', max_length=255)
    state = serializers.CharField(source='estado', min_length=2, max_length=2)
    zipCode = serializers.CharField(source='cep', max_length=9)


class ItemPedidoSerializer(serializers.Serializer):
    id = serializers.CharField(source='produto_id')
    name = serializers.CharField(source='nome')
    price = _preco(source='preco')
    quantity = serializers.IntegerField(source='quantidade')
    image = serializers.CharField(source='imagem')
    size = serializers.CharField(source='tamanho', allow_null=True)


class PedidoSerializer(serializers.Serializer):
    """Representação do pedido com os nomes de campo usados pelo frontend."""
    id = serializers.CharField()
    customer_name = serializers.CharField(source='nome_cliente')
    customer_email = serializers.EmailField(source='email_cliente')
    customer_phone = serializers.CharField(source='telefone_cliente', allow_null=True)
    customer_address = EnderecoSerializer(source='endereco_cliente', allow_null=True)
    items = ItemPedidoSerializer(source='itens', many=True)
    total = _preco()
    status = serializers.CharField()
    status_label = serializers.SerializerMethodField()
    payment_method = serializers.CharField(source='metodo_pagamento', allow_null=True)
    payment_id = serializers.CharField(source='pagamento_id', allow_null=True)
    created_at = serializers.DateTimeField(source='criado_em')
    updated_at = serializers.DateTimeField(source='atualizado_em')

    def get_status_label(self, obj):
        return STATUS_LABELS.get(obj.status, obj.status)


class ItemCheckoutSerializer(serializers.Serializer):
    # Preço e nome enviados pelo cliente são ignorados
    id = serializers.CharField()
    quantity = serializers.IntegerField(min_value=1, required=False, default=1)
    size = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class CriarPedidoSerializer(serializers.Serializer):
    """Validação dos dados de checkout."""
    customer_name = serializers.CharField(max_length=255)
    customer_email = serializers.EmailField()
    customer_phone = serializers.CharField(max_length=30, required=False, allow_blank=True, allow_null=True)
    customer_address = EnderecoSerializer(required=False, allow_null=True)
    payment_method = serializers.ChoiceField(choices=METODOS_PAGAMENTO, required=False, allow_null=True)
    items = ItemCheckoutSerializer(many=True, allow_empty=False)


class AtualizarStatusSerializer(serializers.Serializer):
    status = serializers.CharField()
    payment_id = serializers.CharField(required=False, allow_null=True, allow_blank=True)
