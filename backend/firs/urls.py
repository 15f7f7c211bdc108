"""
FIRs app URL configuration (included under ``/api/``).

  /api/firs/                    → list / file / retrieve / patch
  /api/firs/eligible-challans/  → GET
"""

from rest_framework.routers import DefaultRouter

from .views import FirViewSet

router = DefaultRouter()
router.register(prefix=r"firs", viewset=FirViewSet, basename="fir")

urlpatterns = router.urls
