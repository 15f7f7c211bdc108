"""
Challans app URL configuration (included under ``/api/``).

  /api/violations/                   → list / create / patch
  /api/challans/                     → list / issue / retrieve
  /api/challans/search/?plate=&cnic= → GET
"""

from rest_framework.routers import DefaultRouter

from .views import ChallanViewSet, ViolationViewSet

router = DefaultRouter()
router.register(prefix=r"violations", viewset=ViolationViewSet, basename="violation")
router.register(prefix=r"challans", viewset=ChallanViewSet, basename="challan")

urlpatterns = router.urls
