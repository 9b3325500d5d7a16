"""
Gunicorn configuration for the scoring API.

Env vars that override defaults:
  PORT       TCP port to bind
  WORKERS    number of worker processes (default: 2)
  LOG_LEVEL  gunicorn error-log level (default: info)
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Scoring is CPU-light and DB-bound; two workers fit a 512 MB container.
workers = int(os.environ.get("WORKERS", "2"))

worker_class = "uvicorn.workers.UvicornWorker"

keepalive = 5

# A full explanation reads at most baseline-window days of rows.
timeout = 60

loglevel = os.environ.get("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

graceful_timeout = 30
