"""
Public (unauthenticated) status lookup views.

- ``POST /api/public/status/request-otp/``
- ``POST /api/public/status/verify-otp/``
- ``GET  /api/public/status/``  (``X-Access-Token`` header or ``?token=``)
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import (
    RequestOtpResponseSerializer,
    RequestOtpSerializer,
    StatusSnapshotSerializer,
    VerifyOtpResponseSerializer,
    VerifyOtpSerializer,
)
from .services import PublicStatusService

ACCESS_TOKEN_HEADER = "X-Access-Token"


class _PublicView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []


class RequestOtpView(_PublicView):

    @extend_schema(summary="Request a status-lookup OTP", request=RequestOtpSerializer,
                   responses={200: RequestOtpResponseSerializer}, tags=["Public"])
    def post(self, request: Request) -> Response:
        serializer = RequestOtpSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = PublicStatusService.request_otp(**serializer.validated_data)
        return Response(RequestOtpResponseSerializer(result).data)


class VerifyOtpView(_PublicView):

    @extend_schema(summary="Verify OTP and obtain an access token", request=VerifyOtpSerializer,
                   responses={200: VerifyOtpResponseSerializer}, tags=["Public"])
    def post(self, request: Request) -> Response:
        serializer = VerifyOtpSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        record = PublicStatusService.verify_otp(**serializer.validated_data)
        return Response(VerifyOtpResponseSerializer(record).data)


class StatusView(_PublicView):

    @extend_schema(
        summary="Challan / FIR / case status snapshot",
        parameters=[
            OpenApiParameter(ACCESS_TOKEN_HEADER, str, location=OpenApiParameter.HEADER, required=False),
            OpenApiParameter("token", str, required=False),
        ],
        responses={200: StatusSnapshotSerializer},
        tags=["Public"],
    )
    def get(self, request: Request) -> Response:
        token = request.headers.get(ACCESS_TOKEN_HEADER) or request.query_params.get("token")
        snapshot = PublicStatusService.get_status(token)
        return Response(StatusSnapshotSerializer(snapshot).data)
