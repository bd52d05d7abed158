import os

# Bind & workers
bind = "0.0.0.0:8000"
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = 1  # store calls block the worker; scale with workers
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (collected by Docker)
accesslog = "-"
errorlog = "-"
loglevel = "info"  # application logs follow LOG_LEVEL

# Trust proxy headers so refresh tokens record the real client IP
forwarded_allow_ips = "*"
proxy_protocol = False

wsgi_app = "wsgi:app"
