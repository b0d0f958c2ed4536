class ServiceDeskError(Exception):
    """Classe base para todas as exceções de domínio dos chamados."""
    pass


class NotAuthenticated(ServiceDeskError):
    """Operação tentada sem uma sessão autenticada."""
    pass


class NotAuthorized(ServiceDeskError):
    """Cliente tentando executar uma operação exclusiva do planejador."""
    pass


class NotFound(ServiceDeskError):
    """Operação referenciando um id inexistente."""

    def __init__(self, entity: str, entity_id: object):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} não encontrado: {entity_id}")


class ValidationError(ServiceDeskError):
    """
    Campo obrigatório ausente ou malformado.
    Sempre levantada antes de qualquer chamada ao armazenamento.
    """

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class InvalidTransition(ValidationError):
    """Transição de status fora da tabela permitida (ex.: voltar de concluído)."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Transição inválida: {current} → {target}", field="status")


class PaymentMethodRequired(ValidationError):
    """Baixa de pagamento sem método válido (pix, cash, card, transfer, boleto)."""

    def __init__(self, message: str = "Selecione o método de pagamento"):
        super().__init__(message, field="payment_method")


class NoPaymentAttached(ServiceDeskError):
    """Tentativa de dar baixa num chamado sem cobrança anexada."""
    pass


class DuplicateUser(ServiceDeskError):
    """Cadastro com WhatsApp já existente ou mesmo nome + últimos 4 dígitos."""
    pass


class StoreUnavailable(ServiceDeskError):
    """
    O armazenamento está inacessível ou retornou erro.
    Não há nova tentativa: a falha é propagada para quem chamou.
    """
    pass
