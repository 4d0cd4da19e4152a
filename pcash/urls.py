"""
URL configuration for the pCash project.

The wallet API is mounted at the root so the paths match the mobile
client (`/userLogin`, `/send-money`, ...). The Django admin lives under
`/admin/`.
"""

from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', include('wallet.urls', namespace='wallet')),
]

# Serve receipts in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
