"""Endpoints REST para Formas de Pagamento."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.payment_method import (
    PaymentMethodCreate,
    PaymentMethodDeleteResponse,
    PaymentMethodResponse,
    PaymentMethodUpdate,
)
from app.services import payment_method_service

router = APIRouter()


@router.post("", response_model=PaymentMethodResponse, status_code=201)
async def create_payment_method(
    data: PaymentMethodCreate,
    db: AsyncSession = Depends(get_db),
):
    return await payment_method_service.create_payment_method(db, data=data)


@router.get("", response_model=list[PaymentMethodResponse])
async def list_payment_methods(
    include_inactive: bool = Query(False),
    db: AsyncSession = Depends(get_db),
):
    """Lista formas de pagamento (por padrão só as ativas)."""
    return await payment_method_service.list_payment_methods(
        db, include_inactive=include_inactive
    )


@router.get("/{pm_id}", response_model=PaymentMethodResponse)
async def get_payment_method(
    pm_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await payment_method_service.get_payment_method(db, pm_id=pm_id)


@router.patch("/{pm_id}", response_model=PaymentMethodResponse)
async def update_payment_method(
    pm_id: int,
    data: PaymentMethodUpdate,
    db: AsyncSession = Depends(get_db),
):
    return await payment_method_service.update_payment_method(db, pm_id=pm_id, data=data)


@router.delete("/{pm_id}", response_model=PaymentMethodDeleteResponse)
async def delete_payment_method(
    pm_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Remove a forma de pagamento, ou apenas inativa se já estiver em uso."""
    return await payment_method_service.delete_payment_method(db, pm_id=pm_id)
