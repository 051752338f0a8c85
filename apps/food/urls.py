from rest_framework.routers import SimpleRouter
from .views import FoodItemViewSet

router = SimpleRouter()
router.register('', FoodItemViewSet, basename='food')

urlpatterns = router.urls
