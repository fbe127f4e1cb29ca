"""Gunicorn configuration for production.

Usage:
    gunicorn -c gunicorn_config.py "bounded_context:create_app()"
"""
import multiprocessing
import os

# Server socket
port = os.getenv("PORT", "8000")
bind = f"0.0.0.0:{port}"
backlog = 2048

# Worker processes
workers_env = os.getenv("GUNICORN_WORKERS")
if workers_env:
    workers = int(workers_env)
else:
    cpu_count = multiprocessing.cpu_count()
    if cpu_count <= 2:
        workers = 2
    elif cpu_count <= 4:
        workers = 4
    else:
        workers = min(cpu_count, 8)

worker_class = "sync"
timeout = 60
keepalive = 5
graceful_timeout = 30  # Time to wait for workers to finish before killing them

# Logging
accesslog = "-"  # stdout
errorlog = "-"  # stdout
loglevel = "info"
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'
capture_output = True

# Process naming
proc_name = os.getenv("SERVICE_NAME", "bounded-context")

# Server mechanics
daemon = False
pidfile = None
umask = 0
