"""
Modelos SQLAlchemy — exportar todos para que o Alembic os detecte.
"""

from app.models.customer import Customer
from app.models.employee import Employee
from app.models.payment_method import PaymentMethod
from app.models.accounts import AccountReceivable, DocumentType, ReceivableStatus

__all__ = [
    "Customer",
    "Employee",
    "PaymentMethod",
    "AccountReceivable",
    "DocumentType",
    "ReceivableStatus",
]
