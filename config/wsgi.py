# backend/config/wsgi.py
"""
WSGI entrypoint.

Django is wrapped by the Socket.IO server so both share one process:
/socket.io/ is served by python-socketio, everything else by Django.
"""
import os

from django.conf import settings
from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

django_application = get_wsgi_application()

import socketio  # noqa: E402

from rentflow.realtime.server import sio  # noqa: E402

application = socketio.WSGIApp(sio, django_application)

if settings.SCHEDULER_AUTOSTART:
    from rentflow.scheduler.runner import start_scheduler  # noqa: E402

    start_scheduler()
