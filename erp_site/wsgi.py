"""
WSGI config for erp_site project.

Configures the rotating file log, builds the WSGI ``application`` and applies
pending migrations before the first request is served.

For more information on this file, see
https://docs.djangoproject.com/en/5.2/howto/deployment/wsgi/
"""

import logging
import os

from django.core.management import call_command
from django.core.wsgi import get_wsgi_application
from django.db.utils import OperationalError

from erp_site.logging import configure_logging

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "erp_site.settings")

configure_logging()

application = get_wsgi_application()

try:
    call_command("migrate", interactive=False)
except OperationalError as exc:
    # The database may come up after the server; the next deploy migrates.
    logging.getLogger("erp_site").warning("Startup migrations skipped: %s", exc)
