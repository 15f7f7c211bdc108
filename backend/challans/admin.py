from django.contrib import admin

from .models import Challan, Violation


@admin.register(Violation)
class ViolationAdmin(admin.ModelAdmin):
    list_display = ("id", "violation_type", "penalty_amount", "is_cognizable")
    list_filter = ("is_cognizable",)


@admin.register(Challan)
class ChallanAdmin(admin.ModelAdmin):
    list_display = ("id", "vehicle", "accused", "violation", "status", "issue_datetime", "due_datetime")
    list_filter = ("status", "violation")
    search_fields = ("vehicle__plate_number", "accused__cnic")
    readonly_fields = ("digital_signature",)
