import uuid

from django.db import models


class Pedido(models.Model):
    """
    Pedido de venda. Itens e endereço ficam gravados como snapshot (JSON)
    do momento da compra.
    """

    STATUS_CHOICES = [
        ('novo', 'Aguardando Pagamento'),
        ('pago', 'Pago'),
        ('enviado', 'Enviado'),
        ('concluido', 'Concluído'),
        ('cancelado', 'Cancelado'),
    ]

    METODO_PAGAMENTO_CHOICES = [
        ('pix', 'PIX'),
        ('credit_card', 'Cartão de Crédito'),
        ('boleto', 'Boleto'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    nome_cliente = models.CharField(max_length=255, verbose_name="Nome do Cliente")
    email_cliente = models.EmailField(verbose_name="E-mail do Cliente")
    telefone_cliente = models.CharField(max_length=30, blank=True, null=True, verbose_name="Telefone")
    endereco_cliente = models.JSONField(null=True, blank=True, verbose_name="Endereço de Entrega")

    # [{"produto_id", "nome", "preco", "quantidade", "imagem", "tamanho"}, ...]
    itens = models.JSONField(default=list, verbose_name="Itens")
    total = models.DecimalField(max_digits=10, decimal_places=2, verbose_name="Total")

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='novo', db_index=True)
    metodo_pagamento = models.CharField(
        max_length=20, choices=METODO_PAGAMENTO_CHOICES, blank=True, null=True, verbose_name="Método de Pagamento"
    )
    pagamento_id = models.CharField(max_length=100, blank=True, null=True, verbose_name="ID do Pagamento")
    # date_last_updated do último estado do gateway aplicado
    gateway_atualizado_em = models.DateTimeField(null=True, blank=True)

    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Pedido"
        verbose_name_plural = "Pedidos"
        db_table = 'pedidos_pedido'
        ordering = ['-criado_em']

    def __str__(self):
        return f"Pedido #{str(self.id)[:8].upper()} - {self.nome_cliente}"
