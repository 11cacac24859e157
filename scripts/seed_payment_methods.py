"""
Seed das formas de pagamento padrão.

Uso:
    python scripts/seed_payment_methods.py

Faz upsert por código: se já existe, atualiza descrição/tipo e reativa;
se não existe, cria.
"""

import asyncio
import sys
from pathlib import Path

from sqlalchemy import select

# Adicionar o diretório raiz ao path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.database import async_session_factory  # noqa: E402
from app.models import PaymentMethod  # noqa: E402


DEFAULT_METHODS = [
    ("DIN", "Dinheiro", "dinheiro"),
    ("PIX", "PIX", "transferencia"),
    ("CC", "Cartão de Crédito", "cartao"),
    ("CD", "Cartão de Débito", "cartao"),
    ("BOL", "Boleto Bancário", "boleto"),
    ("TED", "Transferência Bancária", "transferencia"),
]


async def seed_payment_methods() -> None:
    created = updated = 0
    async with async_session_factory() as db:
        for codigo, descricao, tipo in DEFAULT_METHODS:
            result = await db.execute(
                select(PaymentMethod).where(PaymentMethod.codigo == codigo)
            )
            pm = result.scalar_one_or_none()
            if pm:
                pm.descricao = descricao
                pm.tipo = tipo
                pm.ativo = True
                updated += 1
            else:
                db.add(PaymentMethod(codigo=codigo, descricao=descricao, tipo=tipo, ativo=True))
                created += 1
        await db.commit()

    print(f"Formas de pagamento: {created} criadas, {updated} atualizadas")


def main():
    asyncio.run(seed_payment_methods())


if __name__ == "__main__":
    main()
