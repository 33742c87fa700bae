import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Produto',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('nome', models.CharField(max_length=255, verbose_name='Nome')),
                ('descricao', models.TextField(blank=True, verbose_name='Descrição')),
                ('preco', models.DecimalField(decimal_places=2, max_digits=10, verbose_name='Preço')),
                ('preco_original', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name='Preço Original')),
                ('imagens', models.JSONField(blank=True, default=list, verbose_name='Imagens')),
                ('categoria', models.CharField(db_index=True, max_length=100, verbose_name='Categoria')),
                ('tamanho', models.CharField(max_length=20, verbose_name='Tamanho')),
                ('condicao', models.CharField(choices=[('novo', 'Novo'), ('excelente', 'Excelente'), ('bom', 'Bom'), ('usado', 'Usado')], max_length=20, verbose_name='Condição')),
                ('medidas', models.JSONField(blank=True, null=True, verbose_name='Medidas')),
                ('em_estoque', models.BooleanField(default=True, verbose_name='Em Estoque')),
                ('quantidade_estoque', models.PositiveIntegerField(default=1, verbose_name='Quantidade em Estoque')),
                ('em_destaque', models.BooleanField(default=False, verbose_name='Em Destaque')),
                ('criado_em', models.DateTimeField(auto_now_add=True)),
                ('atualizado_em', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Produto',
                'verbose_name_plural': 'Produtos',
                'db_table': 'catalogo_produto',
                'ordering': ['-criado_em'],
            },
        ),
    ]
