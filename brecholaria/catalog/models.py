import uuid

from django.db import models


# ====================================================================
# Produto (peça do brechó)
# ====================================================================

class Produto(models.Model):
    """Modelo para representar uma peça no catálogo."""

    CONDICAO_CHOICES = [
        ('novo', 'Novo'),
        ('excelente', 'Excelente'),
        ('bom', 'Bom'),
        ('usado', 'Usado'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    nome = models.CharField(max_length=255, verbose_name="Nome")
    descricao = models.TextField(blank=True, verbose_name="Descrição")
    preco = models.DecimalField(max_digits=10, decimal_places=2, verbose_name="Preço")
    preco_original = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True, verbose_name="Preço Original"
    )
    # Lista ordenada de URLs; a primeira é a imagem principal
    imagens = models.JSONField(default=list, blank=True, verbose_name="Imagens")
    categoria = models.CharField(max_length=100, db_index=True, verbose_name="Categoria")
    tamanho = models.CharField(max_length=20, verbose_name="Tamanho")
    condicao = models.CharField(max_length=20, choices=CONDICAO_CHOICES, verbose_name="Condição")
    # {"bust": ..., "waist": ..., "length": ..., "shoulders": ...}
    medidas = models.JSONField(null=True, blank=True, verbose_name="Medidas")

    em_estoque = models.BooleanField(default=True, verbose_name="Em Estoque")
    quantidade_estoque = models.PositiveIntegerField(default=1, verbose_name="Quantidade em Estoque")
    em_destaque = models.BooleanField(default=False, verbose_name="Em Destaque")

    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Produto"
        verbose_name_plural = "Produtos"
        db_table = 'catalogo_produto'
        ordering = ['-criado_em']

    def __str__(self):
        return self.nome
