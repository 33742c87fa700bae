# brecholaria/presentation/erros.py
"""Tradução das exceções do Core para respostas HTTP (sempre JSON)."""
import logging

from rest_framework import status
from rest_framework.response import Response

from brecholaria.core.exceptions import (
    BaseErroCore,
    DadosInvalidosError,
    ItemNaoEncontradoError,
    EstoqueInsuficienteError,
    CarrinhoVazioError,
    StatusInvalidoError,
    ReferenciaExternaAusenteError,
    AssinaturaInvalidaError,
    PagamentoRecusadoError,
    PagamentoFalhouError,
    ConfiguracaoAusenteError,
    FalhaPersistenciaError,
)

logger = logging.getLogger(__name__)

# Ordem importa: subclasses antes das classes-base
STATUS_POR_EXCECAO = (
    (AssinaturaInvalidaError, status.HTTP_401_UNAUTHORIZED),
    (ItemNaoEncontradoError, status.HTTP_404_NOT_FOUND),
    (DadosInvalidosError, status.HTTP_400_BAD_REQUEST),
    (EstoqueInsuficienteError, status.HTTP_400_BAD_REQUEST),
    (CarrinhoVazioError, status.HTTP_400_BAD_REQUEST),
    (StatusInvalidoError, status.HTTP_400_BAD_REQUEST),
    (ReferenciaExternaAusenteError, status.HTTP_400_BAD_REQUEST),
    (PagamentoRecusadoError, status.HTTP_400_BAD_REQUEST),
    (PagamentoFalhouError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ConfiguracaoAusenteError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (FalhaPersistenciaError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_http_para(exc: BaseErroCore) -> int:
    for classe, codigo in STATUS_POR_EXCECAO:
        if isinstance(exc, classe):
            return codigo
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def resposta_de_erro(exc: Exception, status_http: int = None) -> Response:
    """Monta {error, details?|message?} a partir da exceção."""
    if not isinstance(exc, BaseErroCore):
        logger.exception("Erro inesperado: %s", exc)
        return Response({'error': str(exc) or exc.__class__.__name__},
                        status=status_http or status.HTTP_500_INTERNAL_SERVER_ERROR)

    corpo = {'error': getattr(exc, 'message', str(exc))}
    if isinstance(exc, ConfiguracaoAusenteError):
        corpo['message'] = exc.detalhes
    elif getattr(exc, 'detalhes', None):
        corpo['details'] = exc.detalhes
    return Response(corpo, status=status_http or status_http_para(exc))


def resposta_de_validacao(erros) -> Response:
    return Response({'error': 'Dados inválidos', 'details': erros}, status=status.HTTP_400_BAD_REQUEST)
