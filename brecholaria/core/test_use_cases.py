# brecholaria/core/test_use_cases.py

import unittest
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import Mock

from brecholaria.core.use_cases import (
    CriarPagamentoUseCase,
    ProcessarNotificacaoPagamentoUseCase,
    CriarPedidoUseCase,
    GerenciarPedidosAdminUseCase,
    GerenciarProdutosAdminUseCase,
    MAPA_STATUS_GATEWAY,
    mapear_status_gateway,
)
from brecholaria.core.entities import (
    Pedido, ItemPedido, Produto, PagamentoGateway, NotificacaoPagamento,
)
from brecholaria.core.exceptions import (
    DadosInvalidosError,
    PedidoNaoEncontradoError,
    PagamentoRecusadoError,
    ReferenciaExternaAusenteError,
    AssinaturaInvalidaError,
    FalhaPersistenciaError,
    EstoqueInsuficienteError,
    CarrinhoVazioError,
    StatusInvalidoError,
    ProdutoNaoEncontradoError,
)

PEDIDO_ID = "3f2a9c1e-0b7d-4e55-9a61-2c8f0e4d7b10"


def _pedido(status="novo"):
    return Pedido(
        id=PEDIDO_ID,
        nome_cliente="Ana Maria Souza",
        email_cliente="ana@example.com",
        itens=[ItemPedido(produto_id="p1", nome="Vestido Floral Anos 70", preco=Decimal("129.90"), quantidade=1)],
        total=Decimal("129.90"),
        status=status,
    )


# ====================================================================
# INTENÇÃO DE PAGAMENTO
# ====================================================================

class CriarPagamentoTestCase(unittest.TestCase):

    def setUp(self):
        self.pedido_repo_mock = Mock()
        self.gateway_mock = Mock()
        self.email_service_mock = Mock()
        self.use_case = CriarPagamentoUseCase(self.pedido_repo_mock, self.gateway_mock, self.email_service_mock)

        self.pedido_repo_mock.buscar_por_id.return_value = _pedido()
        self.pedido_repo_mock.registrar_pagamento.return_value = True

        self.dados_pix = {
            "orderId": PEDIDO_ID,
            "paymentMethod": "pix",
            "amount": 129.90,
            "customerName": "Ana Maria Souza",
            "customerEmail": "ana@example.com",
        }

    def test_pix_retorna_qr_code_e_mantem_pedido_novo(self):
        """
        Cenário: Pagamento PIX criado com status pending.
        """
        # ARRANGE
        self.gateway_mock.criar_pagamento.return_value = PagamentoGateway(
            id="1234567890", status="pending", qr_code="000201...", qr_code_base64="iVBOR...",
            ticket_url="https://mp/ticket",
        )

        # ACT
        resultado = self.use_case.executar(self.dados_pix)

        # ASSERT
        self.assertEqual(resultado.pagamento_id, "1234567890")
        self.assertEqual(resultado.status, "pending")
        self.assertEqual(resultado.qr_code, "000201...")
        self.assertEqual(resultado.qr_code_base64, "iVBOR...")
        self.assertEqual(resultado.ticket_url, "https://mp/ticket")
        self.assertIsNone(resultado.url_boleto)

        args, kwargs = self.pedido_repo_mock.registrar_pagamento.call_args
        self.assertEqual(args, (PEDIDO_ID, "novo", "1234567890"))
        self.assertEqual(kwargs["metodo_pagamento"], "pix")

    def test_valor_enviado_ao_gateway_e_o_total_recalculado(self):
        self.gateway_mock.criar_pagamento.return_value = PagamentoGateway(id="1", status="pending")
        self.dados_pix["amount"] = "129.9"

        self.use_case.executar(self.dados_pix)

        solicitacao = self.gateway_mock.criar_pagamento.call_args[0][0]
        self.assertEqual(solicitacao.valor, Decimal("129.90"))
        self.assertEqual(solicitacao.pedido_id, PEDIDO_ID)

    def test_cartao_aprovado_marca_pedido_como_pago(self):
        """
        Cenário: Cartão aprovado na hora. O pedido já vira "pago" e a resposta
        não traz campos de PIX nem de boleto.
        """
        self.gateway_mock.criar_pagamento.return_value = PagamentoGateway(id="99", status="approved")
        dados = dict(self.dados_pix, paymentMethod="credit_card", cardToken="tok_abc",
                     paymentMethodId="visa", installments=3)

        resultado = self.use_case.executar(dados)

        solicitacao = self.gateway_mock.criar_pagamento.call_args[0][0]
        self.assertEqual(solicitacao.token_cartao, "tok_abc")
        self.assertEqual(solicitacao.metodo_cartao_id, "visa")
        self.assertEqual(solicitacao.parcelas, 3)
        self.assertEqual(self.pedido_repo_mock.registrar_pagamento.call_args[0][1], "pago")
        self.assertIsNone(resultado.qr_code)
        self.assertIsNone(resultado.url_boleto)

        # Aprovação na hora também avisa o cliente
        self.email_service_mock.enviar_aprovacao_pagamento.assert_called_once()
        pedido_notificado = self.email_service_mock.enviar_aprovacao_pagamento.call_args[0][0]
        self.assertEqual(pedido_notificado.status, "pago")
        self.assertEqual(pedido_notificado.pagamento_id, "99")

    def test_pix_pendente_nao_envia_email(self):
        self.gateway_mock.criar_pagamento.return_value = PagamentoGateway(id="1", status="pending")

        self.use_case.executar(self.dados_pix)

        self.email_service_mock.enviar_aprovacao_pagamento.assert_not_called()

    def test_aprovado_sem_gravacao_nao_envia_email(self):
        """
        Cenário: O webhook já gravou um estado mais recente; a intenção não reenvia o e-mail.
        """
        self.gateway_mock.criar_pagamento.return_value = PagamentoGateway(id="99", status="approved")
        self.pedido_repo_mock.registrar_pagamento.return_value = False
        dados = dict(self.dados_pix, paymentMethod="credit_card", cardToken="tok", paymentMethodId="visa")

        self.use_case.executar(dados)

        self.email_service_mock.enviar_aprovacao_pagamento.assert_not_called()

    def test_falha_no_email_da_aprovacao_nao_interrompe(self):
        self.gateway_mock.criar_pagamento.return_value = PagamentoGateway(id="99", status="approved")
        self.email_service_mock.enviar_aprovacao_pagamento.side_effect = RuntimeError("smtp")
        dados = dict(self.dados_pix, paymentMethod="credit_card", cardToken="tok", paymentMethodId="visa")

        resultado = self.use_case.executar(dados)

        self.assertEqual(resultado.status, "approved")

    def test_parcelas_menores_que_um(self):
        dados = dict(self.dados_pix, paymentMethod="credit_card", cardToken="tok",
                     paymentMethodId="visa", installments=-3)

        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(dados)
        self.gateway_mock.criar_pagamento.assert_not_called()

    def test_valor_nao_finito(self):
        for valor in ("NaN", "Infinity", "-Infinity", "sNaN"):
            with self.subTest(valor=valor):
                with self.assertRaises(DadosInvalidosError):
                    self.use_case.executar(dict(self.dados_pix, amount=valor))
        self.gateway_mock.criar_pagamento.assert_not_called()

    def test_cartao_sem_token_falha_antes_do_gateway(self):
        dados = dict(self.dados_pix, paymentMethod="credit_card", paymentMethodId="visa")

        with self.assertRaises(DadosInvalidosError) as ctx:
            self.use_case.executar(dados)

        self.assertEqual(ctx.exception.message, "Token do cartão não fornecido")
        self.gateway_mock.criar_pagamento.assert_not_called()
        self.pedido_repo_mock.buscar_por_id.assert_not_called()

    def test_boleto_retorna_url_do_boleto(self):
        self.gateway_mock.criar_pagamento.return_value = PagamentoGateway(
            id="77", status="pending", url_boleto="https://mp/boleto.pdf",
        )
        resultado = self.use_case.executar(dict(self.dados_pix, paymentMethod="boleto"))

        self.assertEqual(resultado.url_boleto, "https://mp/boleto.pdf")
        self.assertIsNone(resultado.qr_code)

    def test_campos_obrigatorios_ausentes(self):
        for campo in ("orderId", "paymentMethod", "amount", "customerEmail"):
            with self.subTest(campo=campo):
                dados = dict(self.dados_pix)
                del dados[campo]
                with self.assertRaises(DadosInvalidosError):
                    self.use_case.executar(dados)
        self.gateway_mock.criar_pagamento.assert_not_called()

    def test_metodo_desconhecido_e_rejeitado(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(dict(self.dados_pix, paymentMethod="bitcoin"))

    def test_pedido_inexistente(self):
        self.pedido_repo_mock.buscar_por_id.return_value = None

        with self.assertRaises(PedidoNaoEncontradoError):
            self.use_case.executar(self.dados_pix)
        self.gateway_mock.criar_pagamento.assert_not_called()

    def test_valor_divergente_do_pedido(self):
        """
        Cenário: O cliente envia um valor menor que o total do pedido.
        """
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(dict(self.dados_pix, amount=1.00))
        self.gateway_mock.criar_pagamento.assert_not_called()

    def test_erro_do_gateway_nao_altera_pedido(self):
        self.gateway_mock.criar_pagamento.side_effect = PagamentoRecusadoError(detalhes="invalid payer email")

        with self.assertRaises(PagamentoRecusadoError):
            self.use_case.executar(self.dados_pix)
        self.pedido_repo_mock.registrar_pagamento.assert_not_called()

    def test_nome_sem_sobrenome_usa_nome_do_pedido_quando_vazio(self):
        self.gateway_mock.criar_pagamento.return_value = PagamentoGateway(id="1", status="pending")
        dados = dict(self.dados_pix)
        del dados["customerName"]

        self.use_case.executar(dados)

        self.assertEqual(self.gateway_mock.criar_pagamento.call_args[0][0].nome_cliente, "Ana Maria Souza")

    def test_falha_ao_gravar_vira_falha_de_persistencia(self):
        self.gateway_mock.criar_pagamento.return_value = PagamentoGateway(id="1", status="pending")
        self.pedido_repo_mock.registrar_pagamento.side_effect = RuntimeError("db down")

        with self.assertRaises(FalhaPersistenciaError):
            self.use_case.executar(self.dados_pix)


# ====================================================================
# WEBHOOK
# ====================================================================

class ProcessarNotificacaoTestCase(unittest.TestCase):

    def setUp(self):
        self.pedido_repo_mock = Mock()
        self.gateway_mock = Mock()
        self.email_service_mock = Mock()
        self.use_case = ProcessarNotificacaoPagamentoUseCase(
            self.pedido_repo_mock, self.gateway_mock, self.email_service_mock
        )
        self.gateway_mock.assinatura_valida.return_value = True
        self.pedido_repo_mock.buscar_por_id.return_value = _pedido()
        self.pedido_repo_mock.registrar_pagamento.return_value = True
        self.atualizado_em = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

    def _pagamento(self, status, referencia=PEDIDO_ID):
        return PagamentoGateway(
            id="555", status=status, referencia_externa=referencia, atualizado_em=self.atualizado_em,
        )

    def test_tipo_diferente_de_payment_e_ignorado(self):
        resultado = self.use_case.executar(NotificacaoPagamento(tipo="merchant_order", pagamento_id="1"))

        self.assertEqual(resultado.mensagem, "Notification type not handled")
        self.gateway_mock.buscar_pagamento.assert_not_called()
        self.pedido_repo_mock.registrar_pagamento.assert_not_called()

    def test_sem_id_do_pagamento(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(NotificacaoPagamento(tipo="payment"))

    def test_assinatura_invalida_nao_consulta_gateway(self):
        self.gateway_mock.assinatura_valida.return_value = False

        with self.assertRaises(AssinaturaInvalidaError):
            self.use_case.executar(NotificacaoPagamento(tipo="payment", pagamento_id="555"))
        self.gateway_mock.buscar_pagamento.assert_not_called()

    def test_aprovado_marca_pago_e_envia_email(self):
        """
        Cenário: Pagamento aprovado chega pelo webhook para um pedido novo.
        """
        self.gateway_mock.buscar_pagamento.return_value = self._pagamento("approved")

        resultado = self.use_case.executar(NotificacaoPagamento(tipo="payment", pagamento_id="555"))

        self.assertEqual(resultado.mensagem, "Webhook processed successfully")
        self.assertEqual(resultado.pedido_id, PEDIDO_ID)
        self.assertEqual(resultado.status, "pago")
        self.pedido_repo_mock.registrar_pagamento.assert_called_once_with(
            PEDIDO_ID, "pago", "555", atualizado_em_gateway=self.atualizado_em
        )
        self.email_service_mock.enviar_aprovacao_pagamento.assert_called_once()

    def test_reentrega_de_pedido_ja_pago_nao_reenvia_email(self):
        self.pedido_repo_mock.buscar_por_id.return_value = _pedido(status="pago")
        self.gateway_mock.buscar_pagamento.return_value = self._pagamento("approved")

        resultado = self.use_case.executar(NotificacaoPagamento(tipo="payment", pagamento_id="555"))

        self.assertEqual(resultado.status, "pago")
        self.email_service_mock.enviar_aprovacao_pagamento.assert_not_called()

    def test_falha_no_email_nao_interrompe(self):
        self.gateway_mock.buscar_pagamento.return_value = self._pagamento("approved")
        self.email_service_mock.enviar_aprovacao_pagamento.side_effect = RuntimeError("smtp")

        resultado = self.use_case.executar(NotificacaoPagamento(tipo="payment", pagamento_id="555"))

        self.assertTrue(resultado.aplicado)

    def test_rejeitado_cancela_pedido(self):
        self.gateway_mock.buscar_pagamento.return_value = self._pagamento("rejected")

        resultado = self.use_case.executar(NotificacaoPagamento(tipo="payment", pagamento_id="555"))

        self.assertEqual(resultado.status, "cancelado")
        self.email_service_mock.enviar_aprovacao_pagamento.assert_not_called()

    def test_sem_referencia_externa(self):
        self.gateway_mock.buscar_pagamento.return_value = self._pagamento("approved", referencia=None)

        with self.assertRaises(ReferenciaExternaAusenteError):
            self.use_case.executar(NotificacaoPagamento(tipo="payment", pagamento_id="555"))
        self.pedido_repo_mock.registrar_pagamento.assert_not_called()

    def test_pedido_desconhecido(self):
        self.gateway_mock.buscar_pagamento.return_value = self._pagamento("approved")
        self.pedido_repo_mock.buscar_por_id.return_value = None

        with self.assertRaises(PedidoNaoEncontradoError):
            self.use_case.executar(NotificacaoPagamento(tipo="payment", pagamento_id="555"))

    def test_notificacao_desatualizada_e_ignorada(self):
        """
        Cenário: Um "pending" atrasado chega depois do "approved" já aplicado.
        """
        self.pedido_repo_mock.buscar_por_id.return_value = _pedido(status="pago")
        self.gateway_mock.buscar_pagamento.return_value = self._pagamento("pending")
        self.pedido_repo_mock.registrar_pagamento.return_value = False

        resultado = self.use_case.executar(NotificacaoPagamento(tipo="payment", pagamento_id="555"))

        self.assertFalse(resultado.aplicado)
        self.assertEqual(resultado.status, "pago")
        self.assertEqual(resultado.mensagem, "Notificação desatualizada ignorada")

    def test_pagamento_abandonado_nao_reverte_pedido_pago(self):
        """
        Cenário: O pedido foi pago com o cartão 777; o PIX 555 abandonado expira depois.
        """
        pedido_pago = _pedido(status="pago")
        pedido_pago.pagamento_id = "777"
        self.pedido_repo_mock.buscar_por_id.return_value = pedido_pago
        self.gateway_mock.buscar_pagamento.return_value = self._pagamento("cancelled")
        self.pedido_repo_mock.registrar_pagamento.return_value = False

        resultado = self.use_case.executar(NotificacaoPagamento(tipo="payment", pagamento_id="555"))

        self.assertFalse(resultado.aplicado)
        self.assertEqual(resultado.status, "pago")
        self.assertEqual(resultado.mensagem, "Notificação de outro pagamento ignorada")
        self.email_service_mock.enviar_aprovacao_pagamento.assert_not_called()

    def test_erro_ao_gravar(self):
        self.gateway_mock.buscar_pagamento.return_value = self._pagamento("approved")
        self.pedido_repo_mock.registrar_pagamento.side_effect = RuntimeError("db down")

        with self.assertRaises(FalhaPersistenciaError):
            self.use_case.executar(NotificacaoPagamento(tipo="payment", pagamento_id="555"))


class MapaStatusGatewayTestCase(unittest.TestCase):

    def test_mapeamento_completo(self):
        esperado = {
            "approved": "pago",
            "pending": "novo",
            "in_process": "novo",
            "rejected": "cancelado",
            "cancelled": "cancelado",
            "refunded": "cancelado",
            "charged_back": "cancelado",
        }
        self.assertEqual(MAPA_STATUS_GATEWAY, esperado)

    def test_status_desconhecido_vira_novo(self):
        self.assertEqual(mapear_status_gateway("authorized"), "novo")
        self.assertEqual(mapear_status_gateway(None), "novo")


# ====================================================================
# PEDIDOS E CATÁLOGO
# ====================================================================

class CriarPedidoTestCase(unittest.TestCase):

    def setUp(self):
        self.pedido_repo_mock = Mock()
        self.produto_repo_mock = Mock()
        self.use_case = CriarPedidoUseCase(self.pedido_repo_mock, self.produto_repo_mock)
        self.pedido_repo_mock.criar.side_effect = lambda pedido: pedido

        self.produto = Produto(
            id="p1", nome="Blazer Vintage Tweed", descricao="", preco=Decimal("189.90"),
            categoria="Casacos", tamanho="M", condicao="excelente",
            imagens=["https://img/blazer.jpg"], quantidade_estoque=2,
        )
        self.produto_repo_mock.buscar_por_id.return_value = self.produto

    def test_total_usa_preco_do_catalogo(self):
        pedido = self.use_case.executar(
            nome_cliente="Ana", email_cliente="ana@example.com",
            itens=[{"produto_id": "p1", "quantidade": 2, "preco": "0.01"}],
        )

        self.assertEqual(pedido.total, Decimal("379.80"))
        self.assertEqual(pedido.status, "novo")
        self.assertEqual(pedido.itens[0].imagem, "https://img/blazer.jpg")
        self.assertEqual(pedido.itens[0].tamanho, "M")

    def test_estoque_insuficiente(self):
        with self.assertRaises(EstoqueInsuficienteError):
            self.use_case.executar(
                nome_cliente="Ana", email_cliente="ana@example.com",
                itens=[{"produto_id": "p1", "quantidade": 3}],
            )
        self.pedido_repo_mock.criar.assert_not_called()

    def test_produto_esgotado(self):
        self.produto.em_estoque = False
        with self.assertRaises(EstoqueInsuficienteError):
            self.use_case.executar(
                nome_cliente="Ana", email_cliente="ana@example.com",
                itens=[{"produto_id": "p1", "quantidade": 1}],
            )

    def test_sem_itens(self):
        with self.assertRaises(CarrinhoVazioError):
            self.use_case.executar(nome_cliente="Ana", email_cliente="ana@example.com", itens=[])


class GerenciarPedidosAdminTestCase(unittest.TestCase):

    def setUp(self):
        self.pedido_repo_mock = Mock()
        self.use_case = GerenciarPedidosAdminUseCase(self.pedido_repo_mock)

    def test_qualquer_status_valido_sobrescreve(self):
        self.pedido_repo_mock.buscar_por_id.return_value = _pedido(status="concluido")

        self.use_case.atualizar_status_manual(PEDIDO_ID, "novo")

        self.pedido_repo_mock.atualizar_status.assert_called_once_with(PEDIDO_ID, "novo", pagamento_id=None)

    def test_status_invalido(self):
        with self.assertRaises(StatusInvalidoError):
            self.use_case.atualizar_status_manual(PEDIDO_ID, "ENTREGUE")
        self.pedido_repo_mock.atualizar_status.assert_not_called()

    def test_pedido_nao_encontrado(self):
        self.pedido_repo_mock.buscar_por_id.return_value = None
        with self.assertRaises(PedidoNaoEncontradoError):
            self.use_case.atualizar_status_manual(PEDIDO_ID, "enviado")


class GerenciarProdutosAdminTestCase(unittest.TestCase):

    def setUp(self):
        self.produto_repo_mock = Mock()
        self.pedido_repo_mock = Mock()
        self.armazenamento_mock = Mock()
        self.use_case = GerenciarProdutosAdminUseCase(
            self.produto_repo_mock, self.pedido_repo_mock, self.armazenamento_mock
        )
        self.produto = Produto(
            id="p1", nome="Saia Midi Plissada", descricao="", preco=Decimal("99.90"),
            categoria="Saias", tamanho="P", condicao="excelente",
        )

    def test_preco_zero_e_rejeitado(self):
        self.produto.preco = Decimal("0")
        with self.assertRaises(DadosInvalidosError):
            self.use_case.criar(self.produto)
        self.produto_repo_mock.salvar.assert_not_called()

    def test_atualizacao_parcial(self):
        self.produto_repo_mock.buscar_por_id.return_value = self.produto
        self.produto_repo_mock.salvar.side_effect = lambda p: p

        atualizado = self.use_case.atualizar("p1", {"preco": Decimal("79.90"), "em_destaque": True})

        self.assertEqual(atualizado.preco, Decimal("79.90"))
        self.assertTrue(atualizado.em_destaque)
        self.assertEqual(atualizado.nome, "Saia Midi Plissada")

    def test_deletar_inexistente(self):
        self.produto_repo_mock.buscar_por_id.return_value = None
        with self.assertRaises(ProdutoNaoEncontradoError):
            self.use_case.deletar("nao-existe")

    def test_estatisticas(self):
        outro = Produto(
            id="p2", nome="Cinto", descricao="", preco=Decimal("69.90"), categoria="Acessórios",
            tamanho="M", condicao="bom", em_estoque=False, em_destaque=True,
        )
        self.produto_repo_mock.listar.return_value = [self.produto, outro]
        self.pedido_repo_mock.contar_por_status.return_value = {"novo": 1}

        stats = self.use_case.estatisticas()

        self.assertEqual(stats["total_produtos"], 2)
        self.assertEqual(stats["em_estoque"], 1)
        self.assertEqual(stats["fora_de_estoque"], 1)
        self.assertEqual(stats["em_destaque"], 1)
        self.assertEqual(stats["pedidos_por_status"], {"novo": 1})


if __name__ == '__main__':
    unittest.main()
