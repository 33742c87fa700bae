import hashlib
import hmac
import logging
import os
import random
import time
import uuid
from dataclasses import dataclass
from datetime import timezone as dt_timezone
from decimal import Decimal
from typing import Optional, Tuple

import requests
from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.core.mail import send_mail
from django.utils.dateparse import parse_datetime

# Importa os Protocols e Entidades da camada Core
from brecholaria.core.ports import IGatewayPagamento, IEmailService, IArmazenamentoImagens
from brecholaria.core.entities import (
    Pedido, SolicitacaoPagamento, PagamentoGateway, METODO_PIX, METODO_CARTAO, METODO_BOLETO,
)
from brecholaria.core.exceptions import (
    PagamentoRecusadoError, GatewayIndisponivelError, ConfiguracaoAusenteError,
)

logger = logging.getLogger(__name__)

NOME_LOJA = "Brecholaria Vintage"


# ====================================================================
# CONFIGURAÇÃO
# ====================================================================

@dataclass(frozen=True)
class ConfiguracaoMercadoPago:
    """Credenciais e endereços do Mercado Pago, montados a partir do settings."""
    access_token: Optional[str]
    notification_url: Optional[str] = None
    webhook_secret: Optional[str] = None
    api_base_url: str = "https://api.mercadopago.com/v1"
    timeout: int = 15


def separar_nome(nome_completo: str) -> Tuple[str, str]:
    """Primeiro token vira first_name; o restante, last_name (ou o próprio primeiro nome)."""
    partes = (nome_completo or "").split()
    if not partes:
        return "", ""
    primeiro = partes[0]
    return primeiro, " ".join(partes[1:]) or primeiro


# ====================================================================
# GATEWAYS: Implementações concretas que se comunicam com APIs externas.
# ====================================================================

class MercadoPagoGateway(IGatewayPagamento):
    """
    Gateway para comunicação com a API de Pagamentos do Mercado Pago.
    Implementa a interface IGatewayPagamento do Core.
    """

    _PAYMENT_METHOD_FIXO = {
        METODO_PIX: "pix",
        METODO_BOLETO: "bolbradesco",
    }

    def __init__(self, config: ConfiguracaoMercadoPago):
        self.config = config
        self.api_base_url = config.api_base_url.rstrip("/")

    def _headers(self, idempotente: bool = False) -> dict:
        if not self.config.access_token:
            logger.error("MERCADO_PAGO_ACCESS_TOKEN não configurado")
            raise ConfiguracaoAusenteError()
        headers = {
            "Authorization": f"Bearer {self.config.access_token}",
            "Content-Type": "application/json",
        }
        if idempotente:
            headers["X-Idempotency-Key"] = str(uuid.uuid4())  # Para evitar duplicidade
        return headers

    def montar_payload(self, solicitacao: SolicitacaoPagamento) -> dict:
        """Monta o corpo do POST /payments de acordo com o método escolhido."""
        first_name, last_name = separar_nome(solicitacao.nome_cliente)
        payload = {
            "transaction_amount": float(solicitacao.valor),
            "description": f"Pedido #{solicitacao.pedido_id[:8].upper()} - {NOME_LOJA}",
            "payer": {
                "email": solicitacao.email_cliente,
                "first_name": first_name,
                "last_name": last_name,
            },
            "external_reference": solicitacao.pedido_id,
        }
        if self.config.notification_url:
            payload["notification_url"] = self.config.notification_url

        if solicitacao.metodo == METODO_CARTAO:
            payload["payment_method_id"] = solicitacao.metodo_cartao_id
            payload["token"] = solicitacao.token_cartao
            payload["installments"] = solicitacao.parcelas or 1
        else:
            payload["payment_method_id"] = self._PAYMENT_METHOD_FIXO[solicitacao.metodo]
        return payload

    @staticmethod
    def _mensagem_de_erro(response) -> str:
        try:
            data = response.json()
        except ValueError:
            return "Erro desconhecido"
        if not isinstance(data, dict):
            return "Erro desconhecido"
        causas = data.get("cause") or []
        descricao_causa = causas[0].get("description") if causas and isinstance(causas[0], dict) else None
        return data.get("message") or descricao_causa or "Erro desconhecido"

    @staticmethod
    def _para_pagamento(data: dict) -> PagamentoGateway:
        transaction_data = (data.get("point_of_interaction") or {}).get("transaction_data") or {}
        transaction_details = data.get("transaction_details") or {}

        atualizado_em = None
        if data.get("date_last_updated"):
            atualizado_em = parse_datetime(data["date_last_updated"])
            if atualizado_em is not None and atualizado_em.tzinfo is None:
                atualizado_em = atualizado_em.replace(tzinfo=dt_timezone.utc)

        valor = data.get("transaction_amount")
        return PagamentoGateway(
            id=str(data.get("id")),
            status=data.get("status"),
            referencia_externa=data.get("external_reference") or None,
            valor=Decimal(str(valor)) if valor is not None else None,
            qr_code=transaction_data.get("qr_code"),
            qr_code_base64=transaction_data.get("qr_code_base64"),
            ticket_url=transaction_data.get("ticket_url"),
            url_boleto=transaction_details.get("external_resource_url"),
            atualizado_em=atualizado_em,
        )

    # --- MÉTODOS PÚBLICOS QUE IMPLEMENTAM O PROTOCOLO CORE ---

    def criar_pagamento(self, solicitacao: SolicitacaoPagamento) -> PagamentoGateway:
        headers = self._headers(idempotente=True)
        payload = self.montar_payload(solicitacao)

        try:
            url = f"{self.api_base_url}/payments"
            response = requests.post(url, json=payload, headers=headers, timeout=self.config.timeout)
        except requests.exceptions.RequestException as e:
            logger.error("Erro de conexão com a API do Mercado Pago: %s", e)
            raise GatewayIndisponivelError(
                "Erro ao processar pagamento", detalhes=f"Erro de conexão com o Mercado Pago: {e}"
            )

        if not response.ok:
            detalhes = self._mensagem_de_erro(response)
            logger.error("Erro do Mercado Pago (%s): %s", response.status_code, detalhes)
            raise PagamentoRecusadoError(detalhes=detalhes, status_code=response.status_code)

        return self._para_pagamento(response.json())

    def buscar_pagamento(self, pagamento_id: str) -> PagamentoGateway:
        """Consulta o estado atual de um pagamento (fonte da verdade)."""
        headers = self._headers()
        url = f"{self.api_base_url}/payments/{pagamento_id}"

        try:
            response = requests.get(url, headers=headers, timeout=self.config.timeout)
        except requests.exceptions.RequestException as e:
            logger.error("Falha ao buscar o pagamento %s: %s", pagamento_id, e)
            raise GatewayIndisponivelError("Failed to fetch payment from Mercado Pago", detalhes=str(e))

        if not response.ok:
            logger.error("Erro ao buscar pagamento %s no MP (%s)", pagamento_id, response.status_code)
            raise PagamentoRecusadoError(
                "Failed to fetch payment from Mercado Pago",
                detalhes=self._mensagem_de_erro(response),
                status_code=response.status_code,
            )

        return self._para_pagamento(response.json())

    def assinatura_valida(self, pagamento_id: str, assinatura: Optional[str], request_id: Optional[str]) -> bool:
        """
        Confere o header x-signature (ts=...,v1=...) no formato do Mercado Pago:
        HMAC-SHA256(secret, "id:<data.id>;request-id:<x-request-id>;ts:<ts>;").
        Sem segredo configurado a verificação é desligada.
        """
        if not self.config.webhook_secret:
            logger.warning("MERCADO_PAGO_WEBHOOK_SECRET não configurado; assinatura do webhook não verificada")
            return True
        if not assinatura:
            return False

        partes = {}
        for trecho in assinatura.split(","):
            chave, _, valor = trecho.strip().partition("=")
            partes[chave.strip()] = valor.strip()
        ts, v1 = partes.get("ts"), partes.get("v1")
        if not ts or not v1:
            return False

        manifesto = f"id:{str(pagamento_id).lower()};"
        if request_id:
            manifesto += f"request-id:{request_id};"
        manifesto += f"ts:{ts};"

        esperado = hmac.new(
            self.config.webhook_secret.encode(), manifesto.encode(), hashlib.sha256
        ).hexdigest()
        return hmac.compare_digest(esperado, v1)


class EmailServiceGateway(IEmailService):
    """
    Gateway para envio de e-mails usando o sistema de e-mail do Django.
    Implementa o Protocolo IEmailService.
    """

    def enviar_aprovacao_pagamento(self, pedido: Pedido) -> bool:
        assunto = f"Pagamento aprovado! Pedido #{str(pedido.id)[:8].upper()} - {NOME_LOJA}"
        mensagem = (
            f"Olá, {pedido.nome_cliente}!\n\n"
            f"O pagamento do seu pedido #{str(pedido.id)[:8].upper()} foi aprovado.\n"
            f"Total: R$ {pedido.total:.2f}\n"
            f"Suas peças já estão sendo separadas para envio.\n\n"
            f"Equipe {NOME_LOJA}."
        )
        remetente = getattr(settings, "DEFAULT_FROM_EMAIL", "contato@brecholaria.com.br")

        try:
            send_mail(assunto, mensagem, remetente, [pedido.email_cliente], fail_silently=False)
            return True
        except Exception as e:
            logger.error("Falha ao enviar e-mail de aprovação do pedido %s: %s", pedido.id, e)
            return False


class ArmazenamentoImagensDjango(IArmazenamentoImagens):
    """Salva imagens de produtos no storage padrão do Django (MEDIA_ROOT, S3, ...)."""

    PASTA = "produtos"

    def gerar_nome(self, nome_original: str) -> str:
        extensao = os.path.splitext(nome_original)[1].lstrip(".").lower() or "jpg"
        aleatorio = "".join(random.choices("abcdefghijklmnopqrstuvwxyz0123456789", k=8))
        return f"{self.PASTA}/{int(time.time() * 1000)}-{aleatorio}.{extensao}"

    def salvar(self, nome_original: str, conteudo: bytes) -> str:
        caminho = default_storage.save(self.gerar_nome(nome_original), ContentFile(conteudo))
        logger.info("Imagem salva em %s", caminho)
        return default_storage.url(caminho)
