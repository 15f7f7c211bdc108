from django.contrib import admin

from .models import Case, CaseStatement


class CaseStatementInline(admin.TabularInline):
    model = CaseStatement
    extra = 0


@admin.register(Case)
class CaseAdmin(admin.ModelAdmin):
    list_display = ("id", "case_no", "fir", "judge", "court", "case_status", "hearing_date")
    list_filter = ("case_status", "court")
    search_fields = ("case_no", "fir__fir_no")
    readonly_fields = ("case_no", "year", "sequence")
    inlines = [CaseStatementInline]
