from celery import Celery

from app.core.config import settings

celery_app = Celery(
    "clientdesk",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["app.mycelery.worker"],
)

celery_app.conf.update(
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    timezone="UTC",
    enable_utc=True,
    # Pick up delayed and retried emails even when no trigger fires
    beat_schedule={
        "process-email-queue": {
            "task": "process_email_queue",
            "schedule": 300.0,
        },
    },
)
