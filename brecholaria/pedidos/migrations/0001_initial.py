import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Pedido',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('nome_cliente', models.CharField(max_length=255, verbose_name='Nome do Cliente')),
                ('email_cliente', models.EmailField(max_length=254, verbose_name='E-mail do Cliente')),
                ('telefone_cliente', models.CharField(blank=True, max_length=30, null=True, verbose_name='Telefone')),
                ('endereco_cliente', models.JSONField(blank=True, null=True, verbose_name='Endereço de Entrega')),
                ('itens', models.JSONField(default=list, verbose_name='Itens')),
                ('total', models.DecimalField(decimal_places=2, max_digits=10, verbose_name='Total')),
                ('status', models.CharField(choices=[('novo', 'Aguardando Pagamento'), ('pago', 'Pago'), ('enviado', 'Enviado'), ('concluido', 'Concluído'), ('cancelado', 'Cancelado')], db_index=True, default='novo', max_length=20)),
                ('metodo_pagamento', models.CharField(blank=True, choices=[('pix', 'PIX'), ('credit_card', 'Cartão de Crédito'), ('boleto', 'Boleto')], max_length=20, null=True, verbose_name='Método de Pagamento')),
                ('pagamento_id', models.CharField(blank=True, max_length=100, null=True, verbose_name='ID do Pagamento')),
                ('gateway_atualizado_em', models.DateTimeField(blank=True, null=True)),
                ('criado_em', models.DateTimeField(auto_now_add=True)),
                ('atualizado_em', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Pedido',
                'verbose_name_plural': 'Pedidos',
                'db_table': 'pedidos_pedido',
                'ordering': ['-criado_em'],
            },
        ),
    ]
