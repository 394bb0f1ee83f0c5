import logging
import os
import sys

bind = f"0.0.0.0:{os.getenv('PORT', '3000')}"
workers = int(os.getenv('WEB_CONCURRENCY', 2))
worker_class = "sync"
worker_tmp_dir = "/dev/shm"
max_requests = 1000
max_requests_jitter = 100
timeout = 120
keepalive = 5

# Logging (stdout/stderr so the host collects it)
accesslog = "-"
errorlog = "-"
loglevel = os.getenv('LOG_LEVEL', 'info').lower()
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process naming
proc_name = "portfolio-backend"

# Server mechanics
daemon = False
wsgi_app = "portfolio.wsgi:application"


# Server hooks
def on_starting(server):
    """Called just before the master process is initialized.

    The service cannot run without its store, so a failed check stops
    gunicorn before any worker is spawned.
    """
    server.log.info("Starting Gunicorn server")

    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'portfolio.settings')
    import django
    django.setup()

    from contact.store import StoreUnavailable, ensure_store_ready
    try:
        ensure_store_ready(migrate=os.getenv('MIGRATE_ON_START', 'False') == 'True')
    except StoreUnavailable as exc:
        server.log.error("Error connecting to the database: %s", exc)
        logging.shutdown()
        sys.exit(1)
    finally:
        # Workers are forked from this process and must open their own connections
        from django.db import connections
        connections.close_all()

    server.log.info("Contact store is ready")


def on_reload(server):
    """Called to recycle workers during a reload via SIGHUP."""
    server.log.info("Reloading Gunicorn server")


def when_ready(server):
    """Called just after the server is started."""
    server.log.info("Gunicorn server is ready. Spawning workers")


def worker_int(worker):
    """Called when a worker receives the SIGINT or SIGQUIT signal."""
    worker.log.info("Worker received SIGINT or SIGQUIT signal")


def worker_abort(worker):
    """Called when a worker receives the SIGABRT signal."""
    worker.log.info("Worker received SIGABRT signal")
