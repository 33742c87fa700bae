# brecholaria/core/use_cases.py
"""
Implementação dos Casos de Uso (Lógica de Negócio) da aplicação.
Esta camada depende apenas das Entidades e Portas (Interfaces) do Core,
garantindo o isolamento da lógica de negócio.
"""
import logging
from dataclasses import replace
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Dict

# Entidades e Exceções
from brecholaria.core.entities import (
    Produto, Pedido, ItemPedido, Endereco, SolicitacaoPagamento, ResultadoPagamento,
    NotificacaoPagamento, ResultadoNotificacao, CENTAVO, CONDICOES_PRODUTO,
    METODOS_PAGAMENTO, METODO_PIX, METODO_CARTAO, METODO_BOLETO,
    STATUS_NOVO, STATUS_PAGO, STATUS_CANCELADO, STATUS_PEDIDO,
)
from brecholaria.core.exceptions import (
    DadosInvalidosError,
    CarrinhoVazioError,
    EstoqueInsuficienteError,
    ProdutoNaoEncontradoError,
    PedidoNaoEncontradoError,
    StatusInvalidoError,
    ReferenciaExternaAusenteError,
    AssinaturaInvalidaError,
    FalhaPersistenciaError,
)

# Portas (Interfaces)
from brecholaria.core.ports import (
    IProdutoRepository,
    IPedidoRepository,
    IGatewayPagamento,
    IEmailService,
    IArmazenamentoImagens,
)

logger = logging.getLogger(__name__)

# Divergência máxima aceita entre o valor enviado pelo cliente e o total do pedido.
TOLERANCIA_VALOR = Decimal("0.01")

# Status do Mercado Pago -> status do pedido. Qualquer outro valor vira "novo".
MAPA_STATUS_GATEWAY = {
    "approved": STATUS_PAGO,
    "pending": STATUS_NOVO,
    "in_process": STATUS_NOVO,
    "rejected": STATUS_CANCELADO,
    "cancelled": STATUS_CANCELADO,
    "refunded": STATUS_CANCELADO,
    "charged_back": STATUS_CANCELADO,
}


def mapear_status_gateway(status_gateway: Optional[str]) -> str:
    """Traduz o status de pagamento do gateway para o status do pedido."""
    return MAPA_STATUS_GATEWAY.get(status_gateway, STATUS_NOVO)


def _para_decimal(valor, campo: str) -> Decimal:
    try:
        numero = Decimal(str(valor))
    except (InvalidOperation, ValueError, TypeError):
        raise DadosInvalidosError(f"Valor inválido para '{campo}'.")
    # NaN e Infinity são aceitos pelo Decimal, mas não são valores monetários
    if not numero.is_finite():
        raise DadosInvalidosError(f"Valor inválido para '{campo}'.")
    return numero


def _avisar_aprovacao(email_service: IEmailService, pedido: Pedido, pagamento_id: str):
    """E-mail de pagamento aprovado (melhor esforço: falhas só são logadas)."""
    pedido.status = STATUS_PAGO
    pedido.pagamento_id = str(pagamento_id)
    try:
        email_service.enviar_aprovacao_pagamento(pedido)
    except Exception:
        logger.exception("Falha ao enviar e-mail de aprovação do pedido %s", pedido.id)


# ====================================================================
# 1. CASOS DE USO DO CATÁLOGO
# ====================================================================

class ListarProdutosUseCase:
    """Caso de Uso responsável por listar produtos com filtros."""
    def __init__(self, produto_repo: IProdutoRepository):
        self.produto_repo = produto_repo

    def executar(
        self,
        categoria: Optional[str] = None,
        busca: Optional[str] = None,
        apenas_destaque: bool = False,
        apenas_em_estoque: bool = False,
    ) -> List[Produto]:
        return self.produto_repo.listar(
            categoria=categoria,
            busca=busca,
            apenas_destaque=apenas_destaque,
            apenas_em_estoque=apenas_em_estoque,
        )


class DetalharProdutoUseCase:
    """Caso de Uso para obter os detalhes de um produto específico."""
    def __init__(self, produto_repo: IProdutoRepository):
        self.produto_repo = produto_repo

    def executar(self, produto_id: str) -> Produto:
        produto = self.produto_repo.buscar_por_id(produto_id)
        if not produto:
            raise ProdutoNaoEncontradoError()
        return produto


class GerenciarProdutosAdminUseCase:
    """
    Operações do painel administrativo sobre o catálogo:
    cadastro, edição, remoção, upload de imagens e estatísticas.
    """
    def __init__(
        self,
        produto_repo: IProdutoRepository,
        pedido_repo: IPedidoRepository,
        armazenamento: IArmazenamentoImagens,
    ):
        self.produto_repo = produto_repo
        self.pedido_repo = pedido_repo
        self.armazenamento = armazenamento

    @staticmethod
    def _validar(produto: Produto):
        if not produto.nome or not produto.nome.strip():
            raise DadosInvalidosError("O nome do produto é obrigatório.")
        if produto.preco is None or produto.preco <= 0:
            raise DadosInvalidosError("O preço deve ser maior que zero.")
        if produto.quantidade_estoque < 0:
            raise DadosInvalidosError("O estoque não pode ser negativo.")
        if produto.condicao not in CONDICOES_PRODUTO:
            raise DadosInvalidosError(f"Condição '{produto.condicao}' inválida.")

    def criar(self, produto: Produto) -> Produto:
        self._validar(produto)
        produto_salvo = self.produto_repo.salvar(produto)
        logger.info("Produto %s cadastrado: %s", produto_salvo.id, produto_salvo.nome)
        return produto_salvo

    def atualizar(self, produto_id: str, alteracoes: Dict) -> Produto:
        """Aplica alterações parciais (PATCH) ou completas (PUT) sobre o produto."""
        produto = self.produto_repo.buscar_por_id(produto_id)
        if not produto:
            raise ProdutoNaoEncontradoError()
        atualizado = replace(produto, **alteracoes)
        self._validar(atualizado)
        return self.produto_repo.salvar(atualizado)

    def deletar(self, produto_id: str):
        if not self.produto_repo.buscar_por_id(produto_id):
            raise ProdutoNaoEncontradoError()
        self.produto_repo.deletar(produto_id)
        logger.info("Produto %s removido do catálogo", produto_id)

    def enviar_imagem(self, nome_arquivo: str, conteudo: bytes) -> str:
        if not conteudo:
            raise DadosInvalidosError("Arquivo de imagem vazio.")
        return self.armazenamento.salvar(nome_arquivo, conteudo)

    def estatisticas(self) -> Dict:
        produtos = self.produto_repo.listar()
        em_estoque = sum(1 for p in produtos if p.em_estoque)
        return {
            "total_produtos": len(produtos),
            "em_estoque": em_estoque,
            "fora_de_estoque": len(produtos) - em_estoque,
            "em_destaque": sum(1 for p in produtos if p.em_destaque),
            "pedidos_por_status": self.pedido_repo.contar_por_status(),
        }


# ====================================================================
# 2. CASOS DE USO DE PEDIDO E CHECKOUT
# ====================================================================

class CriarPedidoUseCase:
    """
    Registra o pedido a partir dos itens do checkout.
    Preço, nome e imagem vêm do catálogo; valores enviados pelo cliente são ignorados.
    """
    def __init__(self, pedido_repo: IPedidoRepository, produto_repo: IProdutoRepository):
        self.pedido_repo = pedido_repo
        self.produto_repo = produto_repo

    def executar(
        self,
        nome_cliente: str,
        email_cliente: str,
        itens: List[Dict],
        telefone_cliente: Optional[str] = None,
        endereco: Optional[Endereco] = None,
        metodo_pagamento: Optional[str] = None,
    ) -> Pedido:
        if not itens:
            raise CarrinhoVazioError()
        if metodo_pagamento and metodo_pagamento not in METODOS_PAGAMENTO:
            raise DadosInvalidosError(f"Método de pagamento '{metodo_pagamento}' inválido.")

        itens_pedido = []
        for item in itens:
            quantidade = int(item.get("quantidade", 1))
            if quantidade <= 0:
                raise DadosInvalidosError("A quantidade deve ser positiva.")

            produto = self.produto_repo.buscar_por_id(item["produto_id"])
            if not produto:
                raise ProdutoNaoEncontradoError(f"Produto {item['produto_id']} não encontrado")
            if not produto.disponivel or produto.quantidade_estoque < quantidade:
                raise EstoqueInsuficienteError(
                    produto_id=produto.id,
                    estoque_atual=produto.quantidade_estoque if produto.em_estoque else 0,
                    quantidade_solicitada=quantidade,
                )

            itens_pedido.append(ItemPedido(
                produto_id=produto.id,
                nome=produto.nome,
                preco=produto.preco,
                quantidade=quantidade,
                imagem=produto.imagem_principal,
                tamanho=item.get("tamanho") or produto.tamanho,
            ))

        pedido = Pedido(
            nome_cliente=nome_cliente,
            email_cliente=email_cliente,
            telefone_cliente=telefone_cliente,
            endereco_cliente=endereco,
            itens=itens_pedido,
            metodo_pagamento=metodo_pagamento,
            status=STATUS_NOVO,
        )
        pedido.total = pedido.calcular_total()

        pedido_criado = self.pedido_repo.criar(pedido)
        logger.info("Pedido %s criado (total %s)", pedido_criado.id, pedido_criado.total)
        return pedido_criado


class ConsultarPedidoUseCase:
    """Consulta pública de um pedido pelo ID (página de confirmação)."""
    def __init__(self, pedido_repo: IPedidoRepository):
        self.pedido_repo = pedido_repo

    def executar(self, pedido_id: str) -> Pedido:
        pedido = self.pedido_repo.buscar_por_id(pedido_id)
        if not pedido:
            raise PedidoNaoEncontradoError()
        return pedido


# ====================================================================
# 3. CASOS DE USO DE PAGAMENTO
# ====================================================================

class CriarPagamentoUseCase:
    """
    Intenção de pagamento: valida a solicitação, confere o valor com o pedido,
    cria o pagamento no gateway e grava o payment id no pedido.
    O pedido só é alterado depois de uma resposta de sucesso do gateway.
    Cartão aprovado na hora já leva o pedido a "pago" e dispara o e-mail ao cliente.
    """
    def __init__(
        self,
        pedido_repo: IPedidoRepository,
        pagamento_gateway: IGatewayPagamento,
        email_service: IEmailService,
    ):
        self.pedido_repo = pedido_repo
        self.pagamento_gateway = pagamento_gateway
        self.email_service = email_service

    @staticmethod
    def validar(dados: Dict) -> SolicitacaoPagamento:
        """Converte o corpo da requisição em SolicitacaoPagamento. Não tem efeitos colaterais."""
        pedido_id = dados.get("orderId")
        metodo = dados.get("paymentMethod")
        valor = dados.get("amount")
        email = dados.get("customerEmail")

        if not pedido_id or not metodo or not valor or not email:
            raise DadosInvalidosError("Dados inválidos")
        if metodo not in METODOS_PAGAMENTO:
            raise DadosInvalidosError("Dados inválidos")

        valor = _para_decimal(valor, "amount")
        if valor <= 0:
            raise DadosInvalidosError("Dados inválidos")

        solicitacao = SolicitacaoPagamento(
            pedido_id=str(pedido_id),
            metodo=metodo,
            valor=valor,
            nome_cliente=(dados.get("customerName") or "").strip(),
            email_cliente=email,
        )

        if metodo == METODO_CARTAO:
            if not dados.get("cardToken") or not dados.get("paymentMethodId"):
                raise DadosInvalidosError("Token do cartão não fornecido")
            solicitacao.token_cartao = dados["cardToken"]
            solicitacao.metodo_cartao_id = dados["paymentMethodId"]
            try:
                solicitacao.parcelas = int(dados.get("installments") or 1)
            except (TypeError, ValueError):
                raise DadosInvalidosError("Número de parcelas inválido.")
            if solicitacao.parcelas < 1:
                raise DadosInvalidosError("Número de parcelas inválido.")

        return solicitacao

    def executar(self, dados: Dict) -> ResultadoPagamento:
        solicitacao = self.validar(dados)

        pedido = self.pedido_repo.buscar_por_id(solicitacao.pedido_id)
        if not pedido:
            raise PedidoNaoEncontradoError()

        total = pedido.calcular_total()
        if abs(solicitacao.valor - total) > TOLERANCIA_VALOR:
            logger.warning(
                "Valor divergente para o pedido %s: enviado %s, calculado %s",
                pedido.id, solicitacao.valor, total,
            )
            raise DadosInvalidosError("O valor informado não confere com o total do pedido.")
        solicitacao.valor = total

        if not solicitacao.nome_cliente:
            solicitacao.nome_cliente = pedido.nome_cliente

        pagamento = self.pagamento_gateway.criar_pagamento(solicitacao)
        logger.info(
            "Pagamento %s criado para o pedido %s (status %s)",
            pagamento.id, pedido.id, pagamento.status,
        )

        novo_status = STATUS_PAGO if pagamento.status == "approved" else STATUS_NOVO
        try:
            aplicado = self.pedido_repo.registrar_pagamento(
                pedido.id,
                novo_status,
                pagamento.id,
                metodo_pagamento=solicitacao.metodo,
                atualizado_em_gateway=pagamento.atualizado_em,
            )
        except Exception as e:
            logger.exception("Falha ao gravar o pagamento %s no pedido %s", pagamento.id, pedido.id)
            raise FalhaPersistenciaError() from e
        if not aplicado:
            logger.info("Pedido %s já possui estado mais recente do gateway", pedido.id)
        elif novo_status == STATUS_PAGO and pedido.status != STATUS_PAGO:
            _avisar_aprovacao(self.email_service, pedido, pagamento.id)

        resultado = ResultadoPagamento(
            pagamento_id=pagamento.id, status=pagamento.status, metodo=solicitacao.metodo
        )
        if solicitacao.metodo == METODO_PIX:
            resultado.qr_code = pagamento.qr_code
            resultado.qr_code_base64 = pagamento.qr_code_base64
            resultado.ticket_url = pagamento.ticket_url
        elif solicitacao.metodo == METODO_BOLETO:
            resultado.url_boleto = pagamento.url_boleto
        return resultado


class ProcessarNotificacaoPagamentoUseCase:
    """
    Use Case para atualizar o status de um pedido baseado na notificação
    de pagamento (Webhook). A notificação é só um gatilho: o estado do
    pagamento é sempre consultado novamente no gateway.
    """
    def __init__(
        self,
        pedido_repo: IPedidoRepository,
        pagamento_gateway: IGatewayPagamento,
        email_service: IEmailService,
    ):
        self.pedido_repo = pedido_repo
        self.pagamento_gateway = pagamento_gateway
        self.email_service = email_service

    def executar(self, notificacao: NotificacaoPagamento) -> ResultadoNotificacao:
        if notificacao.tipo != "payment":
            return ResultadoNotificacao(mensagem="Notification type not handled")

        if not notificacao.pagamento_id:
            raise DadosInvalidosError("Payment ID not found")

        if not self.pagamento_gateway.assinatura_valida(
            notificacao.pagamento_id, notificacao.assinatura, notificacao.request_id
        ):
            logger.warning("Webhook com assinatura inválida para o pagamento %s", notificacao.pagamento_id)
            raise AssinaturaInvalidaError()

        # 1. Estado atual do pagamento no gateway
        pagamento = self.pagamento_gateway.buscar_pagamento(notificacao.pagamento_id)
        logger.info("Payment %s status: %s", pagamento.id, pagamento.status)

        if not pagamento.referencia_externa:
            logger.error("Pagamento %s sem external_reference", pagamento.id)
            raise ReferenciaExternaAusenteError()

        # 2. Mapeia e localiza o pedido
        novo_status = mapear_status_gateway(pagamento.status)
        pedido = self.pedido_repo.buscar_por_id(pagamento.referencia_externa)
        if not pedido:
            raise PedidoNaoEncontradoError()

        # 3. Gravação condicionada ao timestamp do gateway
        try:
            aplicado = self.pedido_repo.registrar_pagamento(
                pedido.id,
                novo_status,
                str(notificacao.pagamento_id),
                atualizado_em_gateway=pagamento.atualizado_em,
            )
        except Exception as e:
            logger.exception("Erro ao atualizar pedido %s", pedido.id)
            raise FalhaPersistenciaError("Failed to update order") from e

        if not aplicado:
            outro_pagamento = (
                pedido.status == STATUS_PAGO
                and pedido.pagamento_id
                and pedido.pagamento_id != str(notificacao.pagamento_id)
            )
            if outro_pagamento:
                logger.info(
                    "Pagamento %s ignorado: pedido %s já foi pago pelo pagamento %s",
                    pagamento.id, pedido.id, pedido.pagamento_id,
                )
                mensagem = "Notificação de outro pagamento ignorada"
            else:
                logger.info(
                    "Notificação desatualizada do pagamento %s ignorada; pedido %s segue %s",
                    pagamento.id, pedido.id, pedido.status,
                )
                mensagem = "Notificação desatualizada ignorada"
            return ResultadoNotificacao(mensagem=mensagem, pedido_id=pedido.id, status=pedido.status)

        logger.info("Pedido %s: %s -> %s", pedido.id, pedido.status, novo_status)

        # 4. Notificação ao cliente (melhor esforço)
        if novo_status == STATUS_PAGO and pedido.status != STATUS_PAGO:
            _avisar_aprovacao(self.email_service, pedido, notificacao.pagamento_id)

        return ResultadoNotificacao(
            mensagem="Webhook processed successfully",
            pedido_id=pedido.id,
            status=novo_status,
            aplicado=True,
        )


# ====================================================================
# 4. CASOS DE USO ADMINISTRATIVOS
# ====================================================================

class GerenciarPedidosAdminUseCase:
    """Caso de Uso para listagem e atualização de pedidos (acesso administrativo)."""

    def __init__(self, pedido_repo: IPedidoRepository):
        self.pedido_repo = pedido_repo

    def listar_todos(self, status: Optional[str] = None, busca: Optional[str] = None) -> List[Pedido]:
        """Lista todos os pedidos, com filtro opcional por status e busca por nome/e-mail/id."""
        if status and status not in STATUS_PEDIDO:
            raise StatusInvalidoError(f"O status '{status}' não é um status de pedido válido.")
        return self.pedido_repo.listar(status=status, busca=busca)

    def detalhar_pedido(self, pedido_id: str) -> Pedido:
        pedido = self.pedido_repo.buscar_por_id(pedido_id)
        if not pedido:
            raise PedidoNaoEncontradoError()
        return pedido

    def atualizar_status_manual(
        self, pedido_id: str, novo_status: str, pagamento_id: Optional[str] = None
    ) -> Pedido:
        """Qualquer status da enumeração pode sobrescrever o atual."""
        if novo_status not in STATUS_PEDIDO:
            raise StatusInvalidoError(f"O status '{novo_status}' não é um status de pedido válido.")
        if not self.pedido_repo.buscar_por_id(pedido_id):
            raise PedidoNaoEncontradoError()

        pedido = self.pedido_repo.atualizar_status(pedido_id, novo_status, pagamento_id=pagamento_id)
        logger.info("Status do pedido %s alterado manualmente para %s", pedido_id, novo_status)
        return pedido

    def deletar_pedido(self, pedido_id: str):
        if not self.pedido_repo.buscar_por_id(pedido_id):
            raise PedidoNaoEncontradoError()
        self.pedido_repo.deletar(pedido_id)
        logger.info("Pedido %s removido", pedido_id)
