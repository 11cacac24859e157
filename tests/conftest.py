"""
Fixtures compartilhadas para Pytest.
Configura banco de dados de teste e clientes HTTP.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import date
from decimal import Decimal

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.database import Base, get_db
from app.main import app
from app.models import Customer, Employee, PaymentMethod
from app.schemas.accounts import ARCreate, ARResponse
from app.services import accounts_service

# ── Engine de teste (SQLite async) ───────────────────
TEST_DATABASE_URL = "sqlite+aiosqlite:///./test.db"

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
test_session_factory = async_sessionmaker(
    test_engine, class_=AsyncSession, expire_on_commit=False
)


@pytest_asyncio.fixture
async def setup_database():
    """Cria e destrói as tabelas a cada teste."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session(setup_database) -> AsyncGenerator[AsyncSession, None]:
    """Fornece uma sessão de DB de teste."""
    async with test_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Cliente HTTP de teste que usa o DB de teste."""

    async def _get_test_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_test_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def customer(db_session: AsyncSession) -> Customer:
    customer = Customer(razao_social="Comercial Silva Ltda", cnpj_cpf="12.345.678/0001-90")
    db_session.add(customer)
    await db_session.commit()
    await db_session.refresh(customer)
    return customer


@pytest_asyncio.fixture
async def employee(db_session: AsyncSession) -> Employee:
    employee = Employee(nome="Maria Souza")
    db_session.add(employee)
    await db_session.commit()
    await db_session.refresh(employee)
    return employee


@pytest_asyncio.fixture
async def payment_method(db_session: AsyncSession) -> PaymentMethod:
    pm = PaymentMethod(descricao="PIX", codigo="PIX", tipo="transferencia")
    db_session.add(pm)
    await db_session.commit()
    await db_session.refresh(pm)
    return pm


@pytest_asyncio.fixture
async def inactive_payment_method(db_session: AsyncSession) -> PaymentMethod:
    pm = PaymentMethod(descricao="Cheque", codigo="CHQ", tipo="cheque", ativo=False)
    db_session.add(pm)
    await db_session.commit()
    await db_session.refresh(pm)
    return pm


@pytest_asyncio.fixture
async def make_receivable(
    db_session: AsyncSession, customer: Customer,
) -> Callable[..., Awaitable[ARResponse]]:
    """Factory de contas a receber em ABERTO via service."""

    async def _make(**overrides) -> ARResponse:
        fields = {
            "cliente_id": customer.id,
            "numero_documento": "NF-1001/1",
            "data_emissao": date(2026, 1, 10),
            "data_vencimento": date(2026, 2, 10),
            "valor_original": Decimal("1000.00"),
        }
        fields.update(overrides)
        return await accounts_service.create_receivable(db_session, ARCreate(**fields))

    return _make
