from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import HotelViewSet

router = SimpleRouter()
router.register('', HotelViewSet, basename='hotel')

urlpatterns = [
    path('', include(router.urls)),
]
