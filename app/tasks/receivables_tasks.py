"""
Tarefas Celery de contas a receber.
Marca diariamente como VENCIDO os títulos em aberto com vencimento ultrapassado.
"""

import asyncio
import logging

from app.tasks.celery_app import celery_app

logger = logging.getLogger(__name__)


@celery_app.task(
    bind=True,
    max_retries=3,
    default_retry_delay=300,
    name="receivables.update_overdue_status",
)
def update_overdue_status_task(self, reference_date: str | None = None):
    """
    Executa o classificador de vencimento sobre as contas em aberto.
    `reference_date` (YYYY-MM-DD) permite reprocessar um dia específico.
    """
    from datetime import date

    async def _process():
        from app.database import async_session_factory
        from app.services.accounts_service import update_overdue_status
        from app.services.receivable_lifecycle import get_overdue_classifier

        today = date.fromisoformat(reference_date) if reference_date else date.today()
        async with async_session_factory() as db:
            return await update_overdue_status(
                db, classifier=get_overdue_classifier(), today=today
            )

    try:
        updated = asyncio.run(_process())
    except Exception as exc:
        logger.error(f"Falha ao atualizar contas vencidas: {exc}")
        raise self.retry(exc=exc)

    logger.info(f"Contas a receber marcadas como vencidas: {updated}")
    return {"updated": updated}
