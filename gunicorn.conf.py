import os

# Bind to the port provided via the PORT environment variable, defaulting to
# 5000.
bind = f"0.0.0.0:{os.getenv('PORT', '5000')}"

# Handlers are request scoped and share one database engine per worker
# process, so plain sync workers are enough.
worker_class = "sync"
workers = int(os.getenv("WEB_CONCURRENCY", "2"))

# A slow database round trip stalls the request; let gunicorn recycle a
# worker that hangs far beyond a normal page load.
timeout = int(os.getenv("GUNICORN_TIMEOUT", "60"))
