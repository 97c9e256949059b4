# Bind & workers
bind = "0.0.0.0:8000"
workers = 2  # override with env GUNICORN_WORKERS
threads = 1
timeout = 60  # above SOCIAL_HTTP_TIMEOUT_SECONDS x 2 provider calls per login
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (collected by Docker)
accesslog = "-"
errorlog = "-"
loglevel = "info"  # override with env LOG_LEVEL

# Forwarded headers; the app applies ProxyFix so the rate limiter sees client IPs
forwarded_allow_ips = "*"
proxy_protocol = False

wsgi_app = "app:create_app()"
