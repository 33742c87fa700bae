"""
WSGI config for the Brecholaria project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'brecholaria.settings')

application = get_wsgi_application()
