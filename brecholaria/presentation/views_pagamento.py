# brecholaria/presentation/views_pagamento.py
"""
Endpoints chamados pelo checkout (intenção de pagamento) e pelo Mercado Pago (webhook).
Ambos respondem sempre em JSON e liberam CORS para qualquer origem.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from brecholaria.core import dependency_injection
from brecholaria.core.entities import NotificacaoPagamento, METODO_PIX, METODO_BOLETO
from brecholaria.core.exceptions import (
    BaseErroCore, DadosInvalidosError, PagamentoFalhouError, ConfiguracaoAusenteError,
)

from .erros import resposta_de_erro, status_http_para

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'authorization, x-client-info, apikey, content-type',
}


def corpo_da_requisicao(request) -> dict:
    """Corpo JSON da requisição; corpo malformado vira erro de validação."""
    try:
        dados = request.data
    except ParseError:
        raise DadosInvalidosError("Dados inválidos")
    return dados if hasattr(dados, 'get') else {}


class CorsPermissivoMixin:
    """Acrescenta os headers de CORS em toda resposta e atende o preflight."""
    authentication_classes = []
    permission_classes = [AllowAny]

    def options(self, request, *args, **kwargs):
        return Response('ok', status=status.HTTP_200_OK)

    def finalize_response(self, request, response, *args, **kwargs):
        response = super().finalize_response(request, response, *args, **kwargs)
        for header, valor in CORS_HEADERS.items():
            response[header] = valor
        return response


class PagamentoAPIView(CorsPermissivoMixin, APIView):
    """
    POST /api/pagamentos/
    Cria o pagamento (pix, cartão ou boleto) no Mercado Pago para um pedido existente.
    """

    def post(self, request):
        try:
            dados = corpo_da_requisicao(request)
            resultado = dependency_injection.get_criar_pagamento_use_case().executar(dados)
        except Exception as e:
            return resposta_de_erro(e)

        corpo = {'paymentId': resultado.pagamento_id, 'status': resultado.status}
        if resultado.metodo == METODO_PIX:
            corpo.update({
                'qrCode': resultado.qr_code,
                'qrCodeBase64': resultado.qr_code_base64,
                'ticketUrl': resultado.ticket_url,
            })
        elif resultado.metodo == METODO_BOLETO:
            corpo['boletoUrl'] = resultado.url_boleto
        return Response(corpo, status=status.HTTP_200_OK)


class WebhookMercadoPagoAPIView(CorsPermissivoMixin, APIView):
    """
    POST /api/webhooks/mercadopago/
    Recebe as notificações do Mercado Pago e reconcilia o status do pedido
    a partir do estado atual do pagamento no gateway.
    """

    @staticmethod
    def _notificacao(request) -> NotificacaoPagamento:
        dados = corpo_da_requisicao(request)
        logger.info("Webhook recebido: %s", dados)

        pagamento_id = dados['data'].get('id') if isinstance(dados.get('data'), dict) else None
        # O Mercado Pago também manda o id na query string (?data.id=...)
        pagamento_id = pagamento_id or request.query_params.get('data.id')

        return NotificacaoPagamento(
            tipo=dados.get('type') or request.query_params.get('type'),
            pagamento_id=str(pagamento_id) if pagamento_id else None,
            assinatura=request.headers.get('x-signature'),
            request_id=request.headers.get('x-request-id'),
        )

    def post(self, request):
        try:
            notificacao = self._notificacao(request)
            resultado = dependency_injection.get_processar_notificacao_use_case().executar(notificacao)
        except ConfiguracaoAusenteError:
            return Response({'error': 'Configuration error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        except PagamentoFalhouError as e:
            # Falha ao consultar o gateway é erro do servidor neste endpoint
            return Response({'error': e.message}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        except BaseErroCore as e:
            return Response({'error': e.message}, status=status_http_para(e))
        except Exception as e:
            return resposta_de_erro(e)

        corpo = {'message': resultado.mensagem}
        if resultado.pedido_id:
            corpo.update({'orderId': resultado.pedido_id, 'status': resultado.status})
        return Response(corpo, status=status.HTTP_200_OK)
