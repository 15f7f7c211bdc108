from django.contrib import admin

from .models import PublicStatusOtp


@admin.register(PublicStatusOtp)
class PublicStatusOtpAdmin(admin.ModelAdmin):
    list_display = ("id", "cnic", "vehicle_no", "email", "is_verified", "expires_at")
    list_filter = ("is_verified",)
    exclude = ("otp_code", "access_token")
