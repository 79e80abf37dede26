import os

# Bind & workers
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:3000")
# Sessions live in process memory: more than one worker splits them
workers = int(os.getenv("GUNICORN_WORKERS", "1"))
threads = int(os.getenv("GUNICORN_THREADS", "4"))
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (collected by Docker)
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Honour proxy headers
forwarded_allow_ips = "*"
proxy_protocol = False
