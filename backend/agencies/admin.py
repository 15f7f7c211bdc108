from django.contrib import admin

from .models import Court, CourtType, Judge, PoliceOfficer, PoliceStation


@admin.register(PoliceStation)
class PoliceStationAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "code", "district", "province")
    search_fields = ("name", "code")


@admin.register(PoliceOfficer)
class PoliceOfficerAdmin(admin.ModelAdmin):
    list_display = ("id", "badge_number", "user", "station", "rank", "is_investigation_officer")
    list_filter = ("station", "is_investigation_officer")
    search_fields = ("badge_number", "cnic", "user__username")


@admin.register(CourtType)
class CourtTypeAdmin(admin.ModelAdmin):
    list_display = ("id", "name")


@admin.register(Court)
class CourtAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "court_type", "location", "district")
    list_filter = ("court_type",)


@admin.register(Judge)
class JudgeAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "court", "rank", "service_status")
    list_filter = ("court", "service_status")
