"""
Offenders app ViewSets.

- ``AccusedViewSet``  — /accused/   (+ ``by-cnic``)
- ``VehicleViewSet``  — /vehicles/  (+ ``by-plate``)
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from core.domain.exceptions import DomainError

from .serializers import AccusedSerializer, AccusedUpdateSerializer, VehicleSerializer
from .services import AccusedService, VehicleService


class AccusedViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List / search accused persons",
        parameters=[OpenApiParameter("search", str, description="Name or CNIC fragment.")],
        responses={200: AccusedSerializer(many=True)},
        tags=["Offenders"],
    )
    def list(self, request: Request) -> Response:
        queryset = AccusedService.list_accused(request.query_params.get("search"))
        return Response(AccusedSerializer(queryset, many=True).data)

    @extend_schema(summary="Retrieve accused", responses={200: AccusedSerializer}, tags=["Offenders"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        return Response(AccusedSerializer(AccusedService.get_accused(int(pk))).data)

    @extend_schema(summary="Register accused", request=AccusedSerializer,
                   responses={201: AccusedSerializer}, tags=["Offenders"])
    def create(self, request: Request) -> Response:
        serializer = AccusedSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        accused = AccusedService.create_accused(request.user, serializer.validated_data)
        return Response(AccusedSerializer(accused).data, status=status.HTTP_201_CREATED)

    @extend_schema(summary="Update accused contact details", request=AccusedUpdateSerializer,
                   responses={200: AccusedSerializer}, tags=["Offenders"])
    def partial_update(self, request: Request, pk: str = None) -> Response:
        serializer = AccusedUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        accused = AccusedService.update_accused(request.user, int(pk), serializer.validated_data)
        return Response(AccusedSerializer(accused).data)

    @extend_schema(
        summary="Look up accused by CNIC",
        parameters=[OpenApiParameter("cnic", str, required=True)],
        responses={200: AccusedSerializer},
        tags=["Offenders"],
    )
    @action(detail=False, methods=["get"], url_path="by-cnic")
    def by_cnic(self, request: Request) -> Response:
        cnic = request.query_params.get("cnic")
        if not cnic:
            raise DomainError("Query parameter 'cnic' is required.")
        return Response(AccusedSerializer(AccusedService.get_by_cnic(cnic)).data)


class VehicleViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List vehicles",
        parameters=[OpenApiParameter("owner", int, description="Filter by owner (accused) id.")],
        responses={200: VehicleSerializer(many=True)},
        tags=["Offenders"],
    )
    def list(self, request: Request) -> Response:
        owner = request.query_params.get("owner")
        queryset = VehicleService.list_vehicles(int(owner) if owner and owner.isdigit() else None)
        return Response(VehicleSerializer(queryset, many=True).data)

    @extend_schema(summary="Retrieve vehicle", responses={200: VehicleSerializer}, tags=["Offenders"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        return Response(VehicleSerializer(VehicleService.get_vehicle(int(pk))).data)

    @extend_schema(
        summary="Look up vehicle by plate",
        parameters=[OpenApiParameter("plate", str, required=True)],
        responses={200: VehicleSerializer},
        tags=["Offenders"],
    )
    @action(detail=False, methods=["get"], url_path="by-plate")
    def by_plate(self, request: Request) -> Response:
        plate = request.query_params.get("plate")
        if not plate:
            raise DomainError("Query parameter 'plate' is required.")
        return Response(VehicleSerializer(VehicleService.get_by_plate(plate)).data)
