"""
WSGI entry point. Serves the REST API only; the chat relay and Socket.IO
pushes need the ASGI application in ``config/asgi.py``.
"""

from django.core.wsgi import get_wsgi_application

from config import use_default_settings

use_default_settings()

application = get_wsgi_application()
