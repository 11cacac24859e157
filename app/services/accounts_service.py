"""
Lógica de negócio para Contas a Receber.
CRUD + baixa integral + cancelamento + marcação de vencidos.
"""

import logging
import math
from datetime import date
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import NotFoundException, ValidationException
from app.models import AccountReceivable, Customer, Employee, ReceivableStatus
from app.schemas.accounts import (
    ARCreate,
    ARListResponse,
    ARResponse,
    ARUpdate,
    ReceiveAccountRequest,
)
from app.services import payment_method_service
from app.services.receivable_lifecycle import (
    SETTLEABLE_STATUSES,
    OverdueClassifier,
    can_settle,
    compute_balance,
    compute_settlement_total,
    to_money,
)

logger = logging.getLogger(__name__)

_NULLABLE_UPDATE_FIELDS = {"forma_pagamento_id", "observacoes"}


# ── Helpers ──────────────────────────────


def _ar_to_response(ar: AccountReceivable) -> ARResponse:
    return ARResponse(
        id=ar.id,
        venda_numero_pedido=ar.venda_numero_pedido,
        venda_modelo=ar.venda_modelo,
        venda_serie=ar.venda_serie,
        venda_cliente_id=ar.venda_cliente_id,
        parcela=ar.parcela,
        cliente_id=ar.cliente_id,
        cliente_nome=ar.cliente.razao_social if ar.cliente else None,
        cliente_cnpj_cpf=ar.cliente.cnpj_cpf if ar.cliente else None,
        numero_documento=ar.numero_documento,
        tipo_documento=ar.tipo_documento,
        data_emissao=ar.data_emissao,
        data_vencimento=ar.data_vencimento,
        data_recebimento=ar.data_recebimento,
        valor_original=float(ar.valor_original),
        valor_desconto=float(ar.valor_desconto),
        valor_juros=float(ar.valor_juros),
        valor_multa=float(ar.valor_multa),
        valor_recebido=float(ar.valor_recebido),
        valor_saldo=float(ar.valor_saldo),
        forma_pagamento_id=ar.forma_pagamento_id,
        forma_pagamento_nome=ar.forma_pagamento.descricao if ar.forma_pagamento else None,
        status=ar.status,
        recebido_por=ar.recebido_por,
        recebido_por_nome=ar.recebedor.nome if ar.recebedor else None,
        observacoes=ar.observacoes,
        ativo=ar.ativo,
        created_at=ar.created_at,
        updated_at=ar.updated_at,
    )


def _with_relations(query):
    return query.options(
        selectinload(AccountReceivable.cliente),
        selectinload(AccountReceivable.forma_pagamento),
        selectinload(AccountReceivable.recebedor),
    )


async def find_receivable(db: AsyncSession, ar_id: int) -> AccountReceivable | None:
    """Busca uma conta ativa pelo id, sempre relendo do banco."""
    result = await db.execute(
        _with_relations(select(AccountReceivable))
        .where(AccountReceivable.id == ar_id, AccountReceivable.ativo.is_(True))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def _get_active_receivable(db: AsyncSession, ar_id: int) -> AccountReceivable:
    ar = await find_receivable(db, ar_id)
    if not ar:
        raise NotFoundException(detail=f"Conta a receber com ID {ar_id} não encontrada")
    return ar


async def _transition(
    db: AsyncSession,
    ar_id: int,
    from_statuses: tuple[ReceivableStatus, ...],
    values: dict[str, Any],
) -> int:
    """
    UPDATE condicional ao status atual. Retorna o número de linhas afetadas;
    zero significa que outra operação mudou o status entre a leitura e a escrita.
    """
    result = await db.execute(
        update(AccountReceivable)
        .where(
            AccountReceivable.id == ar_id,
            AccountReceivable.ativo.is_(True),
            AccountReceivable.status.in_(from_statuses),
        )
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


async def _check_payment_method(db: AsyncSession, forma_pagamento_id: int) -> None:
    if not await payment_method_service.payment_method_is_active(db, forma_pagamento_id):
        raise ValidationException(
            f"Forma de pagamento com ID {forma_pagamento_id} não encontrada ou inativa"
        )


# ── Account Receivable ──────────────────


async def create_receivable(db: AsyncSession, data: ARCreate) -> ARResponse:
    """Cria uma conta a receber em ABERTO com saldo igual ao total devido."""
    customer = await db.get(Customer, data.cliente_id)
    if not customer:
        raise ValidationException(f"Cliente com ID {data.cliente_id} não encontrado")

    if data.forma_pagamento_id is not None:
        await _check_payment_method(db, data.forma_pagamento_id)

    total = compute_settlement_total(
        data.valor_original, data.valor_desconto, data.valor_juros, data.valor_multa
    )
    if total < 0:
        raise ValidationException("O desconto não pode ser maior que o valor total da conta")

    ar = AccountReceivable(
        venda_numero_pedido=data.venda_numero_pedido,
        venda_modelo=data.venda_modelo,
        venda_serie=data.venda_serie,
        venda_cliente_id=data.venda_cliente_id,
        parcela=data.parcela,
        cliente_id=data.cliente_id,
        numero_documento=data.numero_documento,
        tipo_documento=data.tipo_documento,
        data_emissao=data.data_emissao,
        data_vencimento=data.data_vencimento,
        valor_original=to_money(data.valor_original),
        valor_desconto=to_money(data.valor_desconto),
        valor_juros=to_money(data.valor_juros),
        valor_multa=to_money(data.valor_multa),
        valor_recebido=to_money(0),
        valor_saldo=total,
        forma_pagamento_id=data.forma_pagamento_id,
        status=ReceivableStatus.ABERTO,
        observacoes=data.observacoes,
        ativo=True,
    )
    db.add(ar)
    await db.commit()
    logger.info(
        "Conta a receber criada: id=%s cliente=%s documento=%s total=%s",
        ar.id, ar.cliente_id, ar.numero_documento, total,
    )
    return await get_receivable(db, ar.id)


async def get_receivable(db: AsyncSession, ar_id: int) -> ARResponse:
    ar = await _get_active_receivable(db, ar_id)
    return _ar_to_response(ar)


async def list_receivables(
    db: AsyncSession,
    cliente_id: int | None = None,
    status: ReceivableStatus | None = None,
    data_inicio: date | None = None,
    data_fim: date | None = None,
    page: int = 1,
    size: int = 20,
) -> ARListResponse:
    query = select(AccountReceivable).where(AccountReceivable.ativo.is_(True))
    if cliente_id is not None:
        query = query.where(AccountReceivable.cliente_id == cliente_id)
    if status is not None:
        query = query.where(AccountReceivable.status == status)
    if data_inicio is not None:
        query = query.where(AccountReceivable.data_vencimento >= data_inicio)
    if data_fim is not None:
        query = query.where(AccountReceivable.data_vencimento <= data_fim)

    count_q = select(func.count()).select_from(query.subquery())
    total = (await db.execute(count_q)).scalar() or 0
    pages = max(1, math.ceil(total / size))

    query = (
        _with_relations(query)
        .order_by(AccountReceivable.data_vencimento.asc(), AccountReceivable.id.asc())
        .offset((page - 1) * size).limit(size)
    )
    result = await db.execute(query)
    items = result.scalars().unique().all()

    return ARListResponse(
        items=[_ar_to_response(a) for a in items],
        total=total, page=page, size=size, pages=pages,
    )


async def list_overdue(
    db: AsyncSession,
    classifier: OverdueClassifier,
    today: date | None = None,
) -> list[ARResponse]:
    """Contas em ABERTO que o classificador considera vencidas."""
    today = today or date.today()
    result = await db.execute(
        _with_relations(select(AccountReceivable))
        .where(
            AccountReceivable.ativo.is_(True),
            AccountReceivable.status == ReceivableStatus.ABERTO,
            AccountReceivable.data_vencimento < classifier.overdue_before(today),
        )
        .order_by(AccountReceivable.data_vencimento.asc())
    )
    return [
        _ar_to_response(a)
        for a in result.scalars().all()
        if classifier.is_overdue(a, today)
    ]


async def update_receivable(
    db: AsyncSession, ar_id: int, data: ARUpdate,
) -> ARResponse:
    """Edita dados do título e recalcula o saldo."""
    ar = await _get_active_receivable(db, ar_id)
    if ar.status == ReceivableStatus.RECEBIDO:
        raise ValidationException("Não é possível atualizar uma conta já recebida")
    if ar.status == ReceivableStatus.CANCELADO:
        raise ValidationException("Não é possível atualizar uma conta cancelada")

    update_data = data.model_dump(exclude_unset=True)
    if not update_data:
        raise ValidationException("Nenhum campo para atualizar")

    for key, value in update_data.items():
        if value is None and key not in _NULLABLE_UPDATE_FIELDS:
            raise ValidationException(f"O campo {key} não pode ser nulo")
        if key.startswith("valor_"):
            update_data[key] = to_money(value)

    if update_data.get("forma_pagamento_id") is not None:
        await _check_payment_method(db, update_data["forma_pagamento_id"])

    emissao = update_data.get("data_emissao", ar.data_emissao)
    vencimento = update_data.get("data_vencimento", ar.data_vencimento)
    if vencimento < emissao:
        raise ValidationException("data_vencimento não pode ser anterior à data_emissao")

    total = compute_settlement_total(
        update_data.get("valor_original", ar.valor_original),
        update_data.get("valor_desconto", ar.valor_desconto),
        update_data.get("valor_juros", ar.valor_juros),
        update_data.get("valor_multa", ar.valor_multa),
    )
    if total < 0:
        raise ValidationException("O desconto não pode ser maior que o valor total da conta")

    for key, value in update_data.items():
        setattr(ar, key, value)
    ar.valor_saldo = compute_balance(ar)

    await db.commit()
    return await get_receivable(db, ar.id)


async def settle_receivable(
    db: AsyncSession, ar_id: int, data: ReceiveAccountRequest,
) -> ARResponse:
    """
    Baixa integral de uma conta ABERTO/VENCIDO.

    O valor recebido precisa ser exatamente o total (original - desconto +
    juros + multa); recebimento parcial é rejeitado. A gravação é um UPDATE
    condicional ao status, então duas baixas concorrentes não passam ambas.
    """
    ar = await _get_active_receivable(db, ar_id)

    if not can_settle(ar):
        if ar.status == ReceivableStatus.RECEBIDO:
            raise ValidationException("Esta conta já foi recebida")
        raise ValidationException("Não é possível receber uma conta cancelada")

    if data.data_recebimento is None:
        raise ValidationException("A data de recebimento é obrigatória")
    if data.forma_pagamento_id is None:
        raise ValidationException("A forma de pagamento é obrigatória")
    await _check_payment_method(db, data.forma_pagamento_id)

    if data.recebido_por is not None and not await db.get(Employee, data.recebido_por):
        raise ValidationException(f"Funcionário com ID {data.recebido_por} não encontrado")

    desconto = to_money(data.valor_desconto if data.valor_desconto is not None else ar.valor_desconto)
    juros = to_money(data.valor_juros if data.valor_juros is not None else ar.valor_juros)
    multa = to_money(data.valor_multa if data.valor_multa is not None else ar.valor_multa)

    total = compute_settlement_total(ar.valor_original, desconto, juros, multa)
    if total < 0:
        raise ValidationException("O desconto não pode ser maior que o valor total da conta")

    if to_money(data.valor_recebido) != total:
        raise ValidationException(
            f"O valor recebido deve ser igual ao valor total da conta ({total}). "
            "Recebimento parcial não é permitido."
        )

    values: dict[str, Any] = {
        "data_recebimento": data.data_recebimento,
        "valor_desconto": desconto,
        "valor_juros": juros,
        "valor_multa": multa,
        "valor_recebido": total,
        "valor_saldo": to_money(0),
        "forma_pagamento_id": data.forma_pagamento_id,
        "status": ReceivableStatus.RECEBIDO,
        "recebido_por": data.recebido_por,
    }
    if data.observacoes is not None:
        values["observacoes"] = data.observacoes

    affected = await _transition(db, ar_id, SETTLEABLE_STATUSES, values)
    if affected == 0:
        await db.rollback()
        raise ValidationException(
            "A conta foi alterada por outra operação e não pode mais ser recebida"
        )

    await db.commit()
    logger.info(
        "Conta a receber %s recebida: valor=%s forma_pagamento=%s",
        ar_id, total, data.forma_pagamento_id,
    )
    return await get_receivable(db, ar_id)


async def cancel_receivable(db: AsyncSession, ar_id: int) -> ARResponse:
    """ABERTO/VENCIDO → CANCELADO."""
    ar = await _get_active_receivable(db, ar_id)
    if ar.status == ReceivableStatus.RECEBIDO:
        raise ValidationException("Não é possível cancelar uma conta já recebida")
    if ar.status == ReceivableStatus.CANCELADO:
        raise ValidationException("Esta conta já está cancelada")

    affected = await _transition(
        db, ar_id, SETTLEABLE_STATUSES, {"status": ReceivableStatus.CANCELADO}
    )
    if affected == 0:
        await db.rollback()
        raise ValidationException(
            "A conta foi alterada por outra operação e não pode mais ser cancelada"
        )

    await db.commit()
    logger.info("Conta a receber %s cancelada", ar_id)
    return await get_receivable(db, ar_id)


async def remove_receivable(db: AsyncSession, ar_id: int) -> None:
    """Exclusão lógica (ativo = false). Contas recebidas não podem ser removidas."""
    ar = await _get_active_receivable(db, ar_id)
    if ar.status == ReceivableStatus.RECEBIDO:
        raise ValidationException("Não é possível remover uma conta já recebida")

    ar.ativo = False
    await db.commit()
    logger.info("Conta a receber %s removida", ar_id)


async def update_overdue_status(
    db: AsyncSession,
    classifier: OverdueClassifier,
    today: date | None = None,
) -> int:
    """Marca como VENCIDO as contas em ABERTO vencidas. Retorna quantas mudaram."""
    today = today or date.today()
    candidates = await db.execute(
        select(AccountReceivable)
        .where(
            AccountReceivable.ativo.is_(True),
            AccountReceivable.status == ReceivableStatus.ABERTO,
            AccountReceivable.data_vencimento < classifier.overdue_before(today),
        )
        .execution_options(populate_existing=True)
    )
    overdue_ids = [
        a.id for a in candidates.scalars().all() if classifier.is_overdue(a, today)
    ]

    affected = 0
    if overdue_ids:
        result = await db.execute(
            update(AccountReceivable)
            .where(
                AccountReceivable.id.in_(overdue_ids),
                AccountReceivable.ativo.is_(True),
                AccountReceivable.status == ReceivableStatus.ABERTO,
            )
            .values(status=ReceivableStatus.VENCIDO)
            .execution_options(synchronize_session=False)
        )
        affected = result.rowcount
    await db.commit()
    logger.info("Contas marcadas como vencidas: %s (referência %s)", affected, today)
    return affected
