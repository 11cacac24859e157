"""
Lógica de negócio para Formas de Pagamento.

Exclusão: se a forma de pagamento já foi usada em alguma conta a receber,
apenas inativa; caso contrário remove o registro.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictException, NotFoundException
from app.models import AccountReceivable, PaymentMethod
from app.schemas.payment_method import (
    PaymentMethodCreate,
    PaymentMethodDeleteResponse,
    PaymentMethodResponse,
    PaymentMethodUpdate,
)

logger = logging.getLogger(__name__)


async def _get_or_404(db: AsyncSession, pm_id: int) -> PaymentMethod:
    pm = await db.get(PaymentMethod, pm_id)
    if not pm:
        raise NotFoundException(detail=f"Forma de pagamento com ID {pm_id} não encontrada")
    return pm


async def _ensure_unique_code(
    db: AsyncSession, codigo: str | None, exclude_id: int | None = None
) -> None:
    if not codigo:
        return
    query = select(PaymentMethod.id).where(PaymentMethod.codigo == codigo)
    if exclude_id is not None:
        query = query.where(PaymentMethod.id != exclude_id)
    if (await db.execute(query)).first():
        raise ConflictException(f"Já existe uma forma de pagamento com o código '{codigo}'")


async def payment_method_is_active(db: AsyncSession, pm_id: int) -> bool:
    """True se a forma de pagamento existe e está ativa."""
    result = await db.execute(
        select(PaymentMethod.id).where(
            PaymentMethod.id == pm_id,
            PaymentMethod.ativo.is_(True),
        )
    )
    return result.first() is not None


async def create_payment_method(
    db: AsyncSession, data: PaymentMethodCreate,
) -> PaymentMethodResponse:
    await _ensure_unique_code(db, data.codigo)
    pm = PaymentMethod(**data.model_dump())
    db.add(pm)
    await db.commit()
    await db.refresh(pm)
    logger.info("Forma de pagamento criada: %s (%s)", pm.descricao, pm.id)
    return PaymentMethodResponse.model_validate(pm)


async def list_payment_methods(
    db: AsyncSession, include_inactive: bool = False,
) -> list[PaymentMethodResponse]:
    query = select(PaymentMethod)
    if not include_inactive:
        query = query.where(PaymentMethod.ativo.is_(True))
    result = await db.execute(query.order_by(PaymentMethod.descricao))
    return [PaymentMethodResponse.model_validate(pm) for pm in result.scalars().all()]


async def get_payment_method(db: AsyncSession, pm_id: int) -> PaymentMethodResponse:
    pm = await _get_or_404(db, pm_id)
    return PaymentMethodResponse.model_validate(pm)


async def update_payment_method(
    db: AsyncSession, pm_id: int, data: PaymentMethodUpdate,
) -> PaymentMethodResponse:
    pm = await _get_or_404(db, pm_id)
    update_data = data.model_dump(exclude_unset=True)

    if "codigo" in update_data and update_data["codigo"] != pm.codigo:
        await _ensure_unique_code(db, update_data["codigo"], exclude_id=pm.id)

    for key, value in update_data.items():
        setattr(pm, key, value)

    await db.commit()
    await db.refresh(pm)
    return PaymentMethodResponse.model_validate(pm)


async def delete_payment_method(
    db: AsyncSession, pm_id: int,
) -> PaymentMethodDeleteResponse:
    pm = await _get_or_404(db, pm_id)

    in_use = await db.execute(
        select(AccountReceivable.id)
        .where(AccountReceivable.forma_pagamento_id == pm_id)
        .limit(1)
    )
    if in_use.first():
        pm.ativo = False
        await db.commit()
        await db.refresh(pm)
        logger.info("Forma de pagamento %s em uso, marcada como inativa", pm_id)
        return PaymentMethodDeleteResponse(id=pm_id, deleted=False, deactivated=True)

    await db.delete(pm)
    await db.commit()
    logger.info("Forma de pagamento %s excluída", pm_id)
    return PaymentMethodDeleteResponse(id=pm_id, deleted=True, deactivated=False)
