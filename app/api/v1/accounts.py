"""Endpoints REST para Contas a Receber."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.accounts import ReceivableStatus
from app.schemas.accounts import (
    ARCreate,
    ARListResponse,
    ARResponse,
    ARUpdate,
    OverdueUpdateResponse,
    ReceiveAccountRequest,
)
from app.services import accounts_service
from app.services.receivable_lifecycle import OverdueClassifier, get_overdue_classifier

router = APIRouter()


@router.post("", response_model=ARResponse, status_code=201)
async def create_receivable(
    data: ARCreate,
    db: AsyncSession = Depends(get_db),
):
    """Cria uma conta a receber em ABERTO."""
    return await accounts_service.create_receivable(db, data=data)


@router.get("", response_model=ARListResponse)
async def list_receivables(
    cliente_id: int | None = Query(None),
    status: ReceivableStatus | None = Query(None),
    data_inicio: date | None = Query(None, description="Vencimento a partir de"),
    data_fim: date | None = Query(None, description="Vencimento até"),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    """Lista contas a receber ativas."""
    return await accounts_service.list_receivables(
        db, cliente_id=cliente_id, status=status,
        data_inicio=data_inicio, data_fim=data_fim, page=page, size=size,
    )


@router.get("/overdue", response_model=list[ARResponse])
async def list_overdue(
    classifier: OverdueClassifier = Depends(get_overdue_classifier),
    db: AsyncSession = Depends(get_db),
):
    """Contas em aberto já vencidas, da mais antiga para a mais recente."""
    return await accounts_service.list_overdue(db, classifier=classifier)


@router.get("/customer/{cliente_id}", response_model=ARListResponse)
async def list_by_customer(
    cliente_id: int,
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    return await accounts_service.list_receivables(
        db, cliente_id=cliente_id, page=page, size=size,
    )


@router.post("/update-overdue-status", response_model=OverdueUpdateResponse)
async def update_overdue_status(
    classifier: OverdueClassifier = Depends(get_overdue_classifier),
    db: AsyncSession = Depends(get_db),
):
    """Marca como VENCIDO as contas em aberto com vencimento ultrapassado."""
    today = date.today()
    updated = await accounts_service.update_overdue_status(
        db, classifier=classifier, today=today
    )
    return OverdueUpdateResponse(updated=updated, reference_date=today)


@router.get("/{ar_id}", response_model=ARResponse)
async def get_receivable(
    ar_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await accounts_service.get_receivable(db, ar_id=ar_id)


@router.patch("/{ar_id}", response_model=ARResponse)
async def update_receivable(
    ar_id: int,
    data: ARUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Edita uma conta ainda não recebida nem cancelada."""
    return await accounts_service.update_receivable(db, ar_id=ar_id, data=data)


@router.post("/{ar_id}/receive", response_model=ARResponse)
async def receive_account(
    ar_id: int,
    data: ReceiveAccountRequest,
    db: AsyncSession = Depends(get_db),
):
    """Registra o recebimento integral da conta."""
    return await accounts_service.settle_receivable(db, ar_id=ar_id, data=data)


@router.post("/{ar_id}/cancel", response_model=ARResponse)
async def cancel_receivable(
    ar_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await accounts_service.cancel_receivable(db, ar_id=ar_id)


@router.delete("/{ar_id}", status_code=204)
async def remove_receivable(
    ar_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Exclusão lógica da conta."""
    await accounts_service.remove_receivable(db, ar_id=ar_id)
