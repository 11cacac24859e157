"""Schemas Pydantic v2 para Formas de Pagamento."""

from datetime import datetime

from pydantic import BaseModel, Field


class PaymentMethodCreate(BaseModel):
    descricao: str = Field(..., min_length=1, max_length=100)
    codigo: str | None = Field(None, max_length=20)
    tipo: str | None = Field(None, max_length=30)
    ativo: bool = True


class PaymentMethodUpdate(BaseModel):
    descricao: str | None = Field(None, min_length=1, max_length=100)
    codigo: str | None = Field(None, max_length=20)
    tipo: str | None = Field(None, max_length=30)
    ativo: bool | None = None


class PaymentMethodResponse(BaseModel):
    id: int
    descricao: str
    codigo: str | None = None
    tipo: str | None = None
    ativo: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class PaymentMethodDeleteResponse(BaseModel):
    id: int
    deleted: bool
    deactivated: bool
