"""
Regras de ciclo de vida de uma conta a receber.

Estados: ABERTO → VENCIDO (classificador de vencimento), {ABERTO, VENCIDO} →
RECEBIDO (baixa) e {ABERTO, VENCIDO} → CANCELADO. RECEBIDO e CANCELADO são
terminais. Aqui ficam apenas as regras puras; a persistência está em
accounts_service.
"""

from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

from app.config import get_settings
from app.models.accounts import AccountReceivable, ReceivableStatus

CENTS = Decimal("0.01")

SETTLEABLE_STATUSES = (ReceivableStatus.ABERTO, ReceivableStatus.VENCIDO)


def to_money(value: Decimal | float | int | str | None) -> Decimal:
    """Converte para Decimal com duas casas. None vale zero."""
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def can_settle(account: AccountReceivable | None) -> bool:
    """True se a conta existe e está ABERTO ou VENCIDO."""
    if account is None:
        return False
    return account.status in SETTLEABLE_STATUSES


def compute_settlement_total(
    original: Decimal | float | int | str,
    discount: Decimal | float | int | str | None = None,
    interest: Decimal | float | int | str | None = None,
    penalty: Decimal | float | int | str | None = None,
) -> Decimal:
    """
    Valor total a receber: original - desconto + juros + multa.

    Não aplica piso: se o desconto superar o restante o resultado é negativo,
    e cabe a quem chama decidir se aceita.
    """
    return (
        to_money(original)
        - to_money(discount)
        + to_money(interest)
        + to_money(penalty)
    )


def compute_balance(account: AccountReceivable) -> Decimal:
    """Saldo = total devido - valor já recebido."""
    total = compute_settlement_total(
        account.valor_original,
        account.valor_desconto,
        account.valor_juros,
        account.valor_multa,
    )
    return total - to_money(account.valor_recebido)


# ── Classificador de vencimento ─────────


class OverdueClassifier(Protocol):
    """Decide quando um título ABERTO passa a VENCIDO."""

    def overdue_before(self, today: date) -> date:
        """Títulos com vencimento anterior a esta data estão vencidos."""
        ...

    def is_overdue(self, account: AccountReceivable, today: date) -> bool:
        ...


class DueDateOverdueClassifier:
    """Vencido quando data_vencimento + carência < hoje."""

    def __init__(self, grace_days: int = 0):
        if grace_days < 0:
            raise ValueError("grace_days não pode ser negativo")
        self.grace_days = grace_days

    def overdue_before(self, today: date) -> date:
        return today - timedelta(days=self.grace_days)

    def is_overdue(self, account: AccountReceivable, today: date) -> bool:
        if account.status != ReceivableStatus.ABERTO:
            return False
        return account.data_vencimento < self.overdue_before(today)


def get_overdue_classifier() -> OverdueClassifier:
    """Classificador padrão, com a carência definida em OVERDUE_GRACE_DAYS."""
    return DueDateOverdueClassifier(grace_days=get_settings().OVERDUE_GRACE_DAYS)
