import os

# Bind & workers (thread-per-request)
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = int(os.getenv("GUNICORN_THREADS", "4"))
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Trust proxy headers (pair with USE_PROXYFIX)
forwarded_allow_ips = "*"
proxy_protocol = False
