"""Production server startup script for the campus feed service.

Starts the Django application with Gunicorn. Feed streams hold a worker
thread for as long as the client stays connected, so the thread count is
what bounds concurrent streams per worker.
"""

import os
import sys

from gunicorn.app.wsgiapp import run


def main():
    """Start the campus feed service using Gunicorn.

    - Binds to 0.0.0.0:$PORT (default 8000) for container accessibility
    - gthread workers so long-lived feed streams do not block other requests
    - Timeout disabled for streaming responses; backend calls carry their
      own timeouts
    - Logs to stdout/stderr for container log aggregation
    """
    sys.argv = [
        "gunicorn",
        "campus_feed.wsgi:application",
        "--bind",
        f"0.0.0.0:{os.getenv('PORT', '8000')}",
        "--worker-class",
        "gthread",
        "--workers",
        os.getenv("GUNICORN_WORKERS", "2"),
        "--threads",
        os.getenv("GUNICORN_THREADS", "16"),
        "--timeout",
        "0",
        "--access-logfile",
        "-",
        "--error-logfile",
        "-",
    ]
    run()


if __name__ == "__main__":
    main()
