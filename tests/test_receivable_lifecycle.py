"""Regras puras do ciclo de vida: elegibilidade, total da baixa e vencimento."""

from datetime import date
from decimal import Decimal
from itertools import permutations

import pytest

from app.models.accounts import AccountReceivable, ReceivableStatus
from app.services.receivable_lifecycle import (
    DueDateOverdueClassifier,
    can_settle,
    compute_balance,
    compute_settlement_total,
    to_money,
)


def _account(status: ReceivableStatus, **kwargs) -> AccountReceivable:
    fields = {
        "valor_original": Decimal("500.00"),
        "valor_desconto": Decimal("0.00"),
        "valor_juros": Decimal("0.00"),
        "valor_multa": Decimal("0.00"),
        "valor_recebido": Decimal("0.00"),
        "data_vencimento": date(2026, 3, 1),
    }
    fields.update(kwargs)
    return AccountReceivable(status=status, **fields)


@pytest.mark.parametrize("status", [ReceivableStatus.ABERTO, ReceivableStatus.VENCIDO])
def test_can_settle_open_and_overdue(status):
    assert can_settle(_account(status)) is True


@pytest.mark.parametrize("status", [ReceivableStatus.RECEBIDO, ReceivableStatus.CANCELADO])
def test_cannot_settle_terminal_states(status):
    assert can_settle(_account(status)) is False


def test_cannot_settle_missing_account():
    assert can_settle(None) is False


def test_settlement_total_example():
    assert compute_settlement_total(1000, 100, 50, 20) == Decimal("970.00")


def test_settlement_total_defaults_adjustments_to_zero():
    assert compute_settlement_total(Decimal("250.50")) == Decimal("250.50")
    assert compute_settlement_total(100, None, 5, None) == Decimal("105.00")


def test_settlement_total_can_go_negative():
    assert compute_settlement_total(100, 150, 0, 0) == Decimal("-50.00")


def test_settlement_total_independent_of_adjustment_order():
    original = Decimal("812.37")
    adjustments = [-Decimal("12.10"), Decimal("3.33"), Decimal("7.00")]
    expected = compute_settlement_total(original, Decimal("12.10"), Decimal("3.33"), Decimal("7.00"))
    for order in permutations(adjustments):
        assert original + sum(order) == expected


def test_settlement_total_rounds_float_inputs_to_cents():
    assert compute_settlement_total(0.1, 0, 0.2, 0) == Decimal("0.30")
    assert to_money("10.005") == Decimal("10.01")


def test_balance_is_total_due_minus_received():
    account = _account(
        ReceivableStatus.VENCIDO,
        valor_juros=Decimal("25.00"),
    )
    assert compute_balance(account) == Decimal("525.00")

    account.valor_recebido = Decimal("525.00")
    assert compute_balance(account) == Decimal("0.00")


class TestDueDateOverdueClassifier:
    def test_overdue_after_due_date(self):
        classifier = DueDateOverdueClassifier()
        account = _account(ReceivableStatus.ABERTO, data_vencimento=date(2026, 3, 1))
        assert classifier.is_overdue(account, today=date(2026, 3, 2)) is True

    def test_not_overdue_on_due_date(self):
        classifier = DueDateOverdueClassifier()
        account = _account(ReceivableStatus.ABERTO, data_vencimento=date(2026, 3, 1))
        assert classifier.is_overdue(account, today=date(2026, 3, 1)) is False

    def test_grace_period_delays_overdue(self):
        classifier = DueDateOverdueClassifier(grace_days=5)
        account = _account(ReceivableStatus.ABERTO, data_vencimento=date(2026, 3, 1))
        assert classifier.overdue_before(date(2026, 3, 10)) == date(2026, 3, 5)
        assert classifier.is_overdue(account, today=date(2026, 3, 6)) is False
        assert classifier.is_overdue(account, today=date(2026, 3, 7)) is True

    @pytest.mark.parametrize(
        "status",
        [ReceivableStatus.VENCIDO, ReceivableStatus.RECEBIDO, ReceivableStatus.CANCELADO],
    )
    def test_only_open_accounts_become_overdue(self, status):
        classifier = DueDateOverdueClassifier()
        account = _account(status, data_vencimento=date(2020, 1, 1))
        assert classifier.is_overdue(account, today=date(2026, 3, 1)) is False

    def test_negative_grace_rejected(self):
        with pytest.raises(ValueError):
            DueDateOverdueClassifier(grace_days=-1)
