"""
Public app URL configuration (included under ``/api/public/``).
"""

from django.urls import path

from .views import RequestOtpView, StatusView, VerifyOtpView

app_name = "public"

urlpatterns = [
    path("status/request-otp/", RequestOtpView.as_view(), name="status-request-otp"),
    path("status/verify-otp/", VerifyOtpView.as_view(), name="status-verify-otp"),
    path("status/", StatusView.as_view(), name="status"),
]
