"""
FIRs app ViewSet.

- ``FirViewSet`` — /firs/ (+ ``eligible-challans``)
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from challans.serializers import ChallanSerializer

from .serializers import FirCreateSerializer, FirSerializer, FirUpdateSerializer
from .services import FirService


class FirViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List FIRs",
        parameters=[
            OpenApiParameter("status", str),
            OpenApiParameter("station", int),
            OpenApiParameter("year", int),
        ],
        responses={200: FirSerializer(many=True)},
        tags=["FIRs"],
    )
    def list(self, request: Request) -> Response:
        params = request.query_params
        filters = {
            "status": params.get("status"),
            "station": params.get("station"),
            "year": params.get("year"),
        }
        return Response(FirSerializer(FirService.list_firs(filters), many=True).data)

    @extend_schema(summary="Retrieve FIR", responses={200: FirSerializer}, tags=["FIRs"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        return Response(FirSerializer(FirService.get_fir(int(pk))).data)

    @extend_schema(summary="File FIR from a cognizable challan", request=FirCreateSerializer,
                   responses={201: FirSerializer}, tags=["FIRs"])
    def create(self, request: Request) -> Response:
        serializer = FirCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        fir = FirService.create_fir(request.user, serializer.validated_data)
        return Response(FirSerializer(fir).data, status=status.HTTP_201_CREATED)

    @extend_schema(summary="Update FIR status / investigation report", request=FirUpdateSerializer,
                   responses={200: FirSerializer}, tags=["FIRs"])
    def partial_update(self, request: Request, pk: str = None) -> Response:
        serializer = FirUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        fir = FirService.update_fir(request.user, int(pk), serializer.validated_data)
        return Response(FirSerializer(fir).data)

    @extend_schema(summary="Challans eligible for an FIR", responses={200: ChallanSerializer(many=True)},
                   tags=["FIRs"])
    @action(detail=False, methods=["get"], url_path="eligible-challans")
    def eligible_challans(self, request: Request) -> Response:
        return Response(ChallanSerializer(FirService.eligible_challans(), many=True).data)
