# pizzaria/functions/scheduler/scheduler.py
import logging

from apscheduler.schedulers.background import BackgroundScheduler

from pizzaria.functions.cart.cart_jobs import delete_expired_carts, expire_old_carts
from pizzaria.functions.payment.pending_pix import reconcile_pending_pix


def start_scheduler() -> BackgroundScheduler:
    scheduler = BackgroundScheduler(timezone="UTC")

    # Roda a cada 10 minutos
    scheduler.add_job(expire_old_carts, "interval", minutes=10)

    # Roda 1x por dia, 3 da manhã UTC
    scheduler.add_job(delete_expired_carts, "cron", hour=3, minute=0)

    # Confirma PIX pagos cujo webhook não chegou
    scheduler.add_job(reconcile_pending_pix, "interval", minutes=1)

    scheduler.start()
    logging.info("SISTEMA >>> Agendador iniciado")
    return scheduler
