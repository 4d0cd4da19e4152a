"""
WSGI config for the pCash project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'pcash.settings')

application = get_wsgi_application()
