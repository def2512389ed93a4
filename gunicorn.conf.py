"""
Gunicorn configuration for the DailyReport schema administration service.

Usage:
    gunicorn dailyreport.main:app -c gunicorn.conf.py
"""

# Bind to all interfaces on port 8000
bind = "0.0.0.0:8000"

# Operator-facing admin service; small fixed pool
workers = 2

# Use Uvicorn's ASGI worker for FastAPI
worker_class = "uvicorn.workers.UvicornWorker"

# Request timeout (seconds); full-collection backfills can be slow
timeout = 600

# Keep-alive connections (seconds)
keepalive = 5

# Logging
accesslog = "-"  # stdout
errorlog = "-"   # stderr
loglevel = "info"
