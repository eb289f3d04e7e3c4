from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'snacks'

router = DefaultRouter()
router.register(r'requests', views.SnackRequestViewSet, basename='request')

urlpatterns = [
    # GET    /api/snacks/requests/              - List requests (?month=YYYY-MM&month_field=...)
    # POST   /api/snacks/requests/              - Submit request
    # GET    /api/snacks/requests/{id}/         - Get request
    # POST   /api/snacks/requests/{id}/vote/    - Vote up/down
    # GET    /api/snacks/requests/stream/       - Live snapshots (SSE)
    path('cycle/', views.current_cycle, name='current-cycle'),

    path('', include(router.urls)),
]
