"""
Configuração do Celery para tarefas assíncronas e agendadas.
"""

from celery import Celery
from celery.schedules import crontab

from app.config import get_settings

settings = get_settings()

celery_app = Celery(
    "gestao",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone=settings.CELERY_TIMEZONE,
    enable_utc=True,
    task_track_started=True,
    task_acks_late=True,
    worker_prefetch_multiplier=1,
)

# ── Celery Beat ──────────────────────────────────────
celery_app.conf.beat_schedule = {
    "receivables-update-overdue-status": {
        "task": "receivables.update_overdue_status",
        "schedule": crontab(hour=settings.OVERDUE_CHECK_HOUR, minute=0),
    },
}

# Auto-descobrir tarefas em app/tasks/
celery_app.autodiscover_tasks(["app.tasks"], related_name="receivables_tasks")
