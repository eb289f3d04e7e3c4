from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'orders'

router = SimpleRouter()
router.register(r'', views.OrderViewSet, basename='order')

urlpatterns = [
    # POST   /api/orders/purchase/   - Purchase requests (admin)
    # GET    /api/orders/            - Order history (admin)
    # GET    /api/orders/{id}/       - Order details (admin)
    path('purchase/', views.purchase, name='purchase'),

    path('', include(router.urls)),
]
