from django.contrib import admin

from .models import Fir


@admin.register(Fir)
class FirAdmin(admin.ModelAdmin):
    list_display = ("id", "fir_no", "station", "challan", "status", "date_filed")
    list_filter = ("status", "station", "year")
    search_fields = ("fir_no",)
    readonly_fields = ("fir_no", "year", "sequence")
