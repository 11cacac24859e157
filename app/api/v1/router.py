"""
Router principal da API v1.
Agrupa todos os sub-routers da versão 1.
"""

from fastapi import APIRouter

from app.api.v1.accounts import router as accounts_router
from app.api.v1.payment_methods import router as payment_methods_router

api_v1_router = APIRouter()

api_v1_router.include_router(
    accounts_router,
    prefix="/accounts-receivable",
    tags=["Contas a Receber"],
)

api_v1_router.include_router(
    payment_methods_router,
    prefix="/payment-methods",
    tags=["Formas de Pagamento"],
)
