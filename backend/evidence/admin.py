from django.contrib import admin

from .models import EmissionReport, IotDevice


@admin.register(IotDevice)
class IotDeviceAdmin(admin.ModelAdmin):
    list_display = ("id", "device_name", "calibration_status", "is_active", "paired_officer")
    list_filter = ("calibration_status", "is_active", "is_registered")
    search_fields = ("device_name", "calibration_certificate_no")


@admin.register(EmissionReport)
class EmissionReportAdmin(admin.ModelAdmin):
    list_display = ("id", "device", "sound_level_dba", "test_datetime")
    list_filter = ("device",)
    readonly_fields = ("digital_signature",)
    date_hierarchy = "test_datetime"
