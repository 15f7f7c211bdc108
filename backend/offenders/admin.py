from django.contrib import admin

from .models import Accused, Vehicle


@admin.register(Accused)
class AccusedAdmin(admin.ModelAdmin):
    list_display = ("id", "cnic", "full_name", "city", "contact")
    search_fields = ("cnic", "full_name")


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = ("id", "plate_number", "make", "color", "owner")
    search_fields = ("plate_number", "owner__cnic")
