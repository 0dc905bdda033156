"""
WSGI entrypoint for the metrics API. In production, point your server here:

    gunicorn 'wsgi:app' --chdir web --bind 0.0.0.0:5000
"""

from netapp import create_app

app = create_app()
