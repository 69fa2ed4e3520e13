"""Gunicorn configuration for production deployments.

Usage:
  gunicorn studiosync.main:app -c gunicorn_conf.py

Workers are uvicorn workers; on SIGTERM each one stops accepting
connections and drains in-flight requests for up to ``graceful_timeout``.
"""

import logging
import multiprocessing
import os
import sys
import threading
import traceback

logger = logging.getLogger("gunicorn.error")

bind = f"0.0.0.0:{os.getenv('PORT', '5000')}"
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.getenv("WEB_CONCURRENCY", str(min(4, multiprocessing.cpu_count() * 2))))
chdir = os.path.dirname(os.path.abspath(__file__))

timeout = int(os.getenv("GUNICORN_TIMEOUT", "60"))
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", "30"))
keepalive = 5

accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()


def worker_abort(worker):  # type: ignore[no-untyped-def]
    """Dump every thread's stack when a worker is killed for exceeding the timeout."""
    logger.critical("Worker %s timed out (pid=%s). Thread stacks follow:", worker, worker.pid)
    names = {t.ident: t.name for t in threading.enumerate()}
    for thread_id, frame in sys._current_frames().items():
        logger.critical(
            "Thread %s (id=%s):\n%s",
            names.get(thread_id, "unknown"),
            thread_id,
            "".join(traceback.format_stack(frame)),
        )
