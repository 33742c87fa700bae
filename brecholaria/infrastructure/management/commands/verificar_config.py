from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import connection
from django.db.utils import OperationalError


class Command(BaseCommand):
    help = 'Verifica se a configuração do Mercado Pago, banco e e-mail está completa'

    def add_arguments(self, parser):
        parser.add_argument(
            '--estrito', action='store_true',
            help='Falha (código de saída 1) quando houver avisos.',
        )

    def _ok(self, mensagem):
        self.stdout.write(self.style.SUCCESS(f'OK  {mensagem}'))

    def _aviso(self, mensagem):
        self.stdout.write(self.style.WARNING(f'!!  {mensagem}'))

    def handle(self, *args, **options):
        self.stdout.write('Verificando configuração...')
        problemas = []

        token = settings.MERCADO_PAGO_ACCESS_TOKEN
        if not token:
            problemas.append('MERCADO_PAGO_ACCESS_TOKEN não configurado: pagamentos retornarão erro 500.')
        elif token.startswith('TEST-'):
            self._aviso('MERCADO_PAGO_ACCESS_TOKEN é uma credencial de teste (sandbox).')
        else:
            self._ok('MERCADO_PAGO_ACCESS_TOKEN configurado')

        url = settings.MERCADO_PAGO_NOTIFICATION_URL
        if not url:
            problemas.append('MERCADO_PAGO_NOTIFICATION_URL vazio: o Mercado Pago não enviará webhooks.')
        elif not url.startswith('https://'):
            problemas.append('MERCADO_PAGO_NOTIFICATION_URL deve ser HTTPS e acessível publicamente.')
        else:
            self._ok(f'Webhook: {url}')

        if settings.MERCADO_PAGO_WEBHOOK_SECRET:
            self._ok('Assinatura do webhook será verificada')
        else:
            problemas.append('MERCADO_PAGO_WEBHOOK_SECRET vazio: assinatura do webhook não será verificada.')

        try:
            connection.ensure_connection()
            self._ok(f'Banco de dados acessível ({connection.vendor})')
        except OperationalError as e:
            problemas.append(f'Banco de dados indisponível: {e}')

        if settings.EMAIL_BACKEND.endswith('console.EmailBackend'):
            self._aviso('E-mails serão apenas exibidos no console (EMAIL_BACKEND).')

        if settings.DEBUG:
            self._aviso('DEBUG está ligado.')

        for problema in problemas:
            self._aviso(problema)

        if not problemas:
            self.stdout.write(self.style.SUCCESS('Configuração parece estar correta!'))
        elif options['estrito']:
            raise CommandError(f'{len(problemas)} problema(s) de configuração encontrado(s).')
