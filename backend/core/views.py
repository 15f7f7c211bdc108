"""
Core app views — **Thin Views**.

Each view delegates to the corresponding service in ``core.services``
and serialises the result.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import DashboardStatsSerializer, SystemConstantsSerializer
from .services import DashboardAggregationService, SystemConstantsService


class DashboardStatsView(APIView):
    """
    **GET /api/core/dashboard/**

    System-wide counts of readings, violations, challans, FIRs and cases.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Dashboard statistics",
        responses={200: OpenApiResponse(response=DashboardStatsSerializer, description="Dashboard stats.")},
        tags=["Dashboard"],
    )
    def get(self, request: Request) -> Response:
        stats = DashboardAggregationService.get_stats()
        return Response(DashboardStatsSerializer(stats).data)


class SystemConstantsView(APIView):
    """
    **GET /api/core/constants/**

    Public: choice enumerations and business constants for clients.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="System constants",
        responses={200: SystemConstantsSerializer},
        tags=["System"],
    )
    def get(self, request: Request) -> Response:
        return Response(SystemConstantsSerializer(SystemConstantsService.get_constants()).data)
