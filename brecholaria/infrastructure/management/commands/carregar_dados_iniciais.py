from decimal import Decimal

from django.core.management.base import BaseCommand

from brecholaria.catalog.models import Produto

UNSPLASH = 'https://images.unsplash.com/photo-{}?w=600'

# (nome, descrição, preço, preço original, imagem, categoria, tamanho, condição, medidas, destaque)
PRODUTOS = [
    ('Blazer Vintage Tweed',
     'Blazer clássico em tweed com botões dourados. Corte atemporal que combina elegância e conforto.',
     '189.90', '350.00', '1594938298603-c8148c4dae35', 'Casacos', 'M', 'excelente',
     {'bust': '96cm', 'waist': '88cm', 'length': '68cm', 'shoulders': '42cm'}, True),
    ('Vestido Floral Anos 70',
     'Vestido midi com estampa floral vibrante, típico dos anos 70. Tecido leve e fluido.',
     '129.90', '220.00', '1572804013309-59a88b7e92f1', 'Vestidos', 'P', 'bom',
     {'bust': '88cm', 'waist': '72cm', 'length': '110cm'}, True),
    ('Bolsa Couro Caramelo',
     'Bolsa de couro legítimo em tom caramelo envelhecido, com detalhes em metal dourado.',
     '249.90', None, '1548036328-c9fa89d128fa', 'Bolsas', 'Único', 'excelente', None, True),
    ('Camisa Seda Champagne',
     'Camisa em seda pura cor champagne. Elegante e versátil.',
     '159.90', '280.00', '1598554747436-c9293d6a588f', 'Blusas', 'G', 'novo',
     {'bust': '104cm', 'length': '72cm', 'shoulders': '44cm'}, True),
    ('Calça Pantalona Bege',
     'Calça pantalona de alfaiataria em tom bege. Cintura alta e caimento impecável.',
     '119.90', None, '1594633312681-425c7b97ccd1', 'Calças', 'M', 'excelente',
     {'waist': '76cm', 'length': '108cm'}, False),
    ('Jaqueta Jeans Oversized',
     'Jaqueta jeans vintage com lavagem clara e modelagem oversized.',
     '139.90', '200.00', '1551028719-00167b16eac5', 'Casacos', 'G', 'bom',
     {'bust': '112cm', 'length': '62cm', 'shoulders': '50cm'}, False),
    ('Saia Midi Plissada',
     'Saia midi plissada em tecido acetinado cor vinho.',
     '99.90', None, '1583496661160-fb5886a0uj9a', 'Saias', 'P', 'excelente',
     {'waist': '68cm', 'length': '75cm'}, False),
    ('Cinto Couro Trançado',
     'Cinto em couro trançado marrom escuro. Fivela em metal envelhecido.',
     '69.90', None, '1624222247344-550fb60583dc', 'Acessórios', 'M', 'bom', None, False),
    ('Cardigan Tricô Mostarda',
     'Cardigan em tricô grosso cor mostarda, com botões de madeira e bolsos frontais.',
     '149.90', '250.00', '1434389677669-e08b4cac3105', 'Casacos', 'M', 'excelente',
     {'bust': '100cm', 'length': '65cm'}, False),
    ('Chapéu Fedora Caramelo',
     'Chapéu fedora em feltro cor caramelo com fita decorativa.',
     '89.90', None, '1521369909029-2afed882baee', 'Acessórios', 'Único', 'excelente', None, False),
    ('Blusa Renda Marfim',
     'Blusa em renda delicada cor marfim. Mangas bufantes e gola alta.',
     '109.90', None, '1485968579169-a6d5e8e0a4d0', 'Blusas', 'P', 'novo',
     {'bust': '90cm', 'length': '58cm'}, False),
    ('Mocassim Couro Bordô',
     'Mocassim clássico em couro bordô com solado de borracha.',
     '179.90', '320.00', '1449505278894-297fdb3edbc1', 'Calçados', '38', 'excelente', None, False),
]


class Command(BaseCommand):
    help = 'Carrega o catálogo inicial de peças do brechó'

    def handle(self, *args, **kwargs):
        self.stdout.write('Criando dados iniciais...')

        criados = 0
        for nome, descricao, preco, preco_original, foto, categoria, tamanho, condicao, medidas, destaque in PRODUTOS:
            _, created = Produto.objects.get_or_create(
                nome=nome,
                defaults={
                    'descricao': descricao,
                    'preco': Decimal(preco),
                    'preco_original': Decimal(preco_original) if preco_original else None,
                    'imagens': [UNSPLASH.format(foto)],
                    'categoria': categoria,
                    'tamanho': tamanho,
                    'condicao': condicao,
                    'medidas': medidas,
                    'em_estoque': True,
                    'quantidade_estoque': 1,
                    'em_destaque': destaque,
                },
            )
            if created:
                criados += 1
                self.stdout.write(self.style.SUCCESS(f'Criado produto "{nome}"'))

        self.stdout.write(self.style.SUCCESS(f'{criados} produto(s) criado(s).'))
