# config/urls.py

from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # Aplicações principais
    path('', include('apps.core.urls')),
    path('pipeline/', include('apps.pipeline.urls')),
    path('conexoes/', include('apps.conexoes.urls')),
]

# Servir arquivos de mídia em desenvolvimento
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

# Customizar títulos do admin
admin.site.site_header = 'Flow Imob Admin'
admin.site.site_title = 'Flow Imob'
admin.site.index_title = 'Administração do CRM'
