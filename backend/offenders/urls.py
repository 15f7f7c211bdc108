"""
Offenders app URL configuration (included under ``/api/``).

  /api/accused/                   → list / register / retrieve / patch
  /api/accused/by-cnic/?cnic=     → GET
  /api/vehicles/                  → list / retrieve
  /api/vehicles/by-plate/?plate=  → GET
"""

from rest_framework.routers import DefaultRouter

from .views import AccusedViewSet, VehicleViewSet

router = DefaultRouter()
router.register(prefix=r"accused", viewset=AccusedViewSet, basename="accused")
router.register(prefix=r"vehicles", viewset=VehicleViewSet, basename="vehicle")

urlpatterns = router.urls
