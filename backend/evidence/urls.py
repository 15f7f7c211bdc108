"""
Evidence app URL configuration (included under ``/api/``).

  /api/iot-devices/                      → list / register / retrieve / patch
  /api/iot-devices/{id}/pair/            → POST
  /api/iot-devices/{id}/unpair/          → POST
  /api/emission-reports/                 → list / record / retrieve
  /api/emission-reports/{id}/verify/     → GET
"""

from rest_framework.routers import DefaultRouter

from .views import EmissionReportViewSet, IotDeviceViewSet

router = DefaultRouter()
router.register(prefix=r"iot-devices", viewset=IotDeviceViewSet, basename="iot-device")
router.register(prefix=r"emission-reports", viewset=EmissionReportViewSet, basename="emission-report")

urlpatterns = router.urls
