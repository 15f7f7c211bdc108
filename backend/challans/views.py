"""
Challans app ViewSets.

- ``ViolationViewSet`` — /violations/
- ``ChallanViewSet``   — /challans/ (+ ``search``)
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from .serializers import (
    ChallanCreateSerializer,
    ChallanFilterSerializer,
    ChallanSerializer,
    ViolationSerializer,
    ViolationUpdateSerializer,
)
from .services import ChallanService, ViolationService


class ViolationViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List violations",
        parameters=[OpenApiParameter("cognizable", bool)],
        responses={200: ViolationSerializer(many=True)},
        tags=["Challans"],
    )
    def list(self, request: Request) -> Response:
        raw = request.query_params.get("cognizable")
        cognizable = None if raw is None else raw.lower() in {"1", "true", "yes"}
        return Response(ViolationSerializer(ViolationService.list_violations(cognizable), many=True).data)

    @extend_schema(summary="Create violation", request=ViolationSerializer,
                   responses={201: ViolationSerializer}, tags=["Challans"])
    def create(self, request: Request) -> Response:
        serializer = ViolationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        violation = ViolationService.create_violation(request.user, serializer.validated_data)
        return Response(ViolationSerializer(violation).data, status=status.HTTP_201_CREATED)

    @extend_schema(summary="Update violation", request=ViolationUpdateSerializer,
                   responses={200: ViolationSerializer}, tags=["Challans"])
    def partial_update(self, request: Request, pk: str = None) -> Response:
        serializer = ViolationUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        violation = ViolationService.update_violation(request.user, int(pk), serializer.validated_data)
        return Response(ViolationSerializer(violation).data)


class ChallanViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    @extend_schema(
        summary="List challans",
        parameters=[ChallanFilterSerializer],
        responses={200: ChallanSerializer(many=True)},
        tags=["Challans"],
    )
    def list(self, request: Request) -> Response:
        filters = ChallanFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        queryset = ChallanService.list_challans(filters.validated_data)
        return Response(ChallanSerializer(queryset, many=True).data)

    @extend_schema(summary="Retrieve challan", responses={200: ChallanSerializer}, tags=["Challans"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        return Response(ChallanSerializer(ChallanService.get_challan(int(pk))).data)

    @extend_schema(summary="Issue challan", request=ChallanCreateSerializer,
                   responses={201: ChallanSerializer}, tags=["Challans"])
    def create(self, request: Request) -> Response:
        serializer = ChallanCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        challan = ChallanService.create_challan(request.user, serializer.validated_data)
        return Response(ChallanSerializer(challan).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Search challans by plate or CNIC",
        parameters=[OpenApiParameter("plate", str), OpenApiParameter("cnic", str)],
        responses={200: ChallanSerializer(many=True)},
        tags=["Challans"],
    )
    @action(detail=False, methods=["get"], url_path="search")
    def search(self, request: Request) -> Response:
        queryset = ChallanService.search(
            plate=request.query_params.get("plate"),
            cnic=request.query_params.get("cnic"),
        )
        return Response(ChallanSerializer(queryset, many=True).data)
