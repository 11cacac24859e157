"""Schemas Pydantic v2 para Contas a Receber."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from app.models.accounts import DocumentType, ReceivableStatus


class ARCreate(BaseModel):
    venda_numero_pedido: int | None = None
    venda_modelo: str | None = Field(None, max_length=2)
    venda_serie: str | None = Field(None, max_length=3)
    venda_cliente_id: int | None = None
    parcela: int | None = Field(None, ge=1)
    cliente_id: int
    numero_documento: str = Field(..., min_length=1, max_length=50)
    tipo_documento: DocumentType = DocumentType.FATURA
    data_emissao: date
    data_vencimento: date
    valor_original: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    valor_desconto: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    valor_juros: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    valor_multa: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    forma_pagamento_id: int | None = None
    observacoes: str | None = Field(None, max_length=500)

    @model_validator(mode="after")
    def check_dates(self) -> "ARCreate":
        if self.data_vencimento < self.data_emissao:
            raise ValueError("data_vencimento não pode ser anterior à data_emissao")
        return self


class ARUpdate(BaseModel):
    """Campos editáveis enquanto a conta não foi recebida nem cancelada."""
    numero_documento: str | None = Field(None, min_length=1, max_length=50)
    tipo_documento: DocumentType | None = None
    data_emissao: date | None = None
    data_vencimento: date | None = None
    valor_original: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    valor_desconto: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    valor_juros: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    valor_multa: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    forma_pagamento_id: int | None = None
    observacoes: str | None = Field(None, max_length=500)


class ReceiveAccountRequest(BaseModel):
    """
    Dados da baixa. Desconto/juros/multa omitidos usam os valores já gravados
    na conta; valor_recebido deve bater com o total calculado.
    """
    valor_recebido: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    data_recebimento: date | None = None
    forma_pagamento_id: int | None = None
    valor_desconto: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    valor_juros: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    valor_multa: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    recebido_por: int | None = None
    observacoes: str | None = Field(None, max_length=500)


class ARResponse(BaseModel):
    id: int
    venda_numero_pedido: int | None = None
    venda_modelo: str | None = None
    venda_serie: str | None = None
    venda_cliente_id: int | None = None
    parcela: int | None = None
    cliente_id: int
    cliente_nome: str | None = None
    cliente_cnpj_cpf: str | None = None
    numero_documento: str
    tipo_documento: DocumentType
    data_emissao: date
    data_vencimento: date
    data_recebimento: date | None = None
    valor_original: float
    valor_desconto: float
    valor_juros: float
    valor_multa: float
    valor_recebido: float
    valor_saldo: float
    forma_pagamento_id: int | None = None
    forma_pagamento_nome: str | None = None
    status: ReceivableStatus
    recebido_por: int | None = None
    recebido_por_nome: str | None = None
    observacoes: str | None = None
    ativo: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class ARListResponse(BaseModel):
    items: list[ARResponse]
    total: int
    page: int
    size: int
    pages: int


class OverdueUpdateResponse(BaseModel):
    updated: int
    reference_date: date
