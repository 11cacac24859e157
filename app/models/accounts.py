"""
Modelo AccountReceivable — Contas a receber.

Cada registro é um título contra um cliente, opcionalmente vinculado a uma
venda/parcela. O recebimento é sempre integral (sem baixa parcial).
"""

import enum
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class ReceivableStatus(str, enum.Enum):
    """Situação de uma conta a receber."""
    ABERTO = "ABERTO"
    RECEBIDO = "RECEBIDO"
    VENCIDO = "VENCIDO"
    CANCELADO = "CANCELADO"


class DocumentType(str, enum.Enum):
    """Tipo do documento que origina o título."""
    FATURA = "FATURA"
    DUPLICATA = "DUPLICATA"
    BOLETO = "BOLETO"
    NOTA_FISCAL = "NOTA_FISCAL"


class AccountReceivable(Base):
    __tablename__ = "contas_receber"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # ── Vínculo com a venda (opcional) ───
    venda_numero_pedido: Mapped[int | None] = mapped_column(Integer)
    venda_modelo: Mapped[str | None] = mapped_column(String(2))
    venda_serie: Mapped[str | None] = mapped_column(String(3))
    venda_cliente_id: Mapped[int | None] = mapped_column(Integer)
    parcela: Mapped[int | None] = mapped_column(Integer)

    cliente_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("clientes.id"), nullable=False
    )
    numero_documento: Mapped[str] = mapped_column(String(50), nullable=False)
    tipo_documento: Mapped[DocumentType] = mapped_column(
        Enum(DocumentType, name="tipodocumento", values_callable=lambda e: [x.value for x in e]),
        nullable=False, default=DocumentType.FATURA
    )
    data_emissao: Mapped[date] = mapped_column(Date, nullable=False)
    data_vencimento: Mapped[date] = mapped_column(Date, nullable=False)
    data_recebimento: Mapped[date | None] = mapped_column(Date)

    valor_original: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    valor_desconto: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0.00")
    )
    valor_juros: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0.00")
    )
    valor_multa: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0.00")
    )
    valor_recebido: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0.00")
    )
    valor_saldo: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0.00")
    )

    forma_pagamento_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("formas_pagamento.id")
    )
    status: Mapped[ReceivableStatus] = mapped_column(
        Enum(ReceivableStatus, name="statusconta", values_callable=lambda e: [x.value for x in e]),
        nullable=False, default=ReceivableStatus.ABERTO
    )
    recebido_por: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("funcionarios.id")
    )
    observacoes: Mapped[str | None] = mapped_column(String(500))
    ativo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # ── Relationships ────────────────────
    cliente: Mapped["Customer"] = relationship("Customer")  # noqa: F821
    forma_pagamento: Mapped["PaymentMethod"] = relationship("PaymentMethod")  # noqa: F821
    recebedor: Mapped["Employee"] = relationship("Employee")  # noqa: F821

    __table_args__ = (
        Index("idx_cr_cliente", "cliente_id"),
        Index("idx_cr_status", "status", "ativo"),
        Index("idx_cr_vencimento", "data_vencimento"),
    )
