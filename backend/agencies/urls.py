"""
Agencies app URL configuration (included under ``/api/``).

Route Hierarchy
---------------
  /api/stations/        → list / create / retrieve
  /api/court-types/     → list / create
  /api/courts/          → list / create / retrieve
  /api/officers/        → list / enrol / retrieve
  /api/judges/          → list / enrol / retrieve
"""

from rest_framework.routers import DefaultRouter

from .views import (
    CourtTypeViewSet,
    CourtViewSet,
    JudgeViewSet,
    PoliceOfficerViewSet,
    PoliceStationViewSet,
)

router = DefaultRouter()
router.register(prefix=r"stations", viewset=PoliceStationViewSet, basename="station")
router.register(prefix=r"court-types", viewset=CourtTypeViewSet, basename="court-type")
router.register(prefix=r"courts", viewset=CourtViewSet, basename="court")
router.register(prefix=r"officers", viewset=PoliceOfficerViewSet, basename="officer")
router.register(prefix=r"judges", viewset=JudgeViewSet, basename="judge")

urlpatterns = router.urls
