"""
Evidence app ViewSets.

ViewSets
--------
- ``IotDeviceViewSet``       — /iot-devices/  (+ ``pair`` / ``unpair``)
- ``EmissionReportViewSet``  — /emission-reports/ (+ ``verify``)

Emission reports are append-only; there is no update or delete route.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from .serializers import (
    EmissionReportCreateSerializer,
    EmissionReportSerializer,
    IotDeviceSerializer,
    IotDeviceUpdateSerializer,
    PairDeviceSerializer,
    SignatureVerificationSerializer,
)
from .services import EmissionReportService, IotDeviceService

_TRUTHY = {"1", "true", "yes"}


def _flag(request: Request, name: str) -> bool:
    return request.query_params.get(name, "").lower() in _TRUTHY


class IotDeviceViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List IoT devices",
        parameters=[
            OpenApiParameter("available", bool, description="Only registered, active and calibrated devices."),
            OpenApiParameter("paired_officer", int, description="Filter by paired officer id."),
        ],
        responses={200: IotDeviceSerializer(many=True)},
        tags=["Evidence"],
    )
    def list(self, request: Request) -> Response:
        filters = {
            "available": _flag(request, "available"),
            "paired_officer": request.query_params.get("paired_officer"),
        }
        return Response(IotDeviceSerializer(IotDeviceService.list_devices(filters), many=True).data)

    @extend_schema(summary="Retrieve IoT device", responses={200: IotDeviceSerializer}, tags=["Evidence"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        return Response(IotDeviceSerializer(IotDeviceService.get_device(int(pk))).data)

    @extend_schema(summary="Register IoT device", request=IotDeviceSerializer,
                   responses={201: IotDeviceSerializer}, tags=["Evidence"])
    def create(self, request: Request) -> Response:
        serializer = IotDeviceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        device = IotDeviceService.register_device(request.user, serializer.validated_data)
        return Response(IotDeviceSerializer(device).data, status=status.HTTP_201_CREATED)

    @extend_schema(summary="Update calibration / firmware", request=IotDeviceUpdateSerializer,
                   responses={200: IotDeviceSerializer}, tags=["Evidence"])
    def partial_update(self, request: Request, pk: str = None) -> Response:
        serializer = IotDeviceUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        device = IotDeviceService.update_device(request.user, int(pk), serializer.validated_data)
        return Response(IotDeviceSerializer(device).data)

    @extend_schema(summary="Pair device with an officer", request=PairDeviceSerializer,
                   responses={200: IotDeviceSerializer}, tags=["Evidence"])
    @action(detail=True, methods=["post"], url_path="pair")
    def pair(self, request: Request, pk: str = None) -> Response:
        serializer = PairDeviceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        device = IotDeviceService.pair_device(request.user, int(pk), serializer.validated_data["officer"])
        return Response(IotDeviceSerializer(device).data)

    @extend_schema(summary="Unpair device", request=None, responses={200: IotDeviceSerializer}, tags=["Evidence"])
    @action(detail=True, methods=["post"], url_path="unpair")
    def unpair(self, request: Request, pk: str = None) -> Response:
        device = IotDeviceService.unpair_device(request.user, int(pk))
        return Response(IotDeviceSerializer(device).data)


class EmissionReportViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List emission reports",
        parameters=[
            OpenApiParameter("device", int, description="Filter by device id."),
            OpenApiParameter("violations_only", bool, description="Only readings above the legal limit."),
            OpenApiParameter("without_challan", bool, description="Only readings not yet used by a challan."),
            OpenApiParameter("date_from", str, description="YYYY-MM-DD (inclusive)."),
            OpenApiParameter("date_to", str, description="YYYY-MM-DD (inclusive)."),
        ],
        responses={200: EmissionReportSerializer(many=True)},
        tags=["Evidence"],
    )
    def list(self, request: Request) -> Response:
        params = request.query_params
        filters = {
            "device": params.get("device"),
            "violations_only": _flag(request, "violations_only"),
            "without_challan": _flag(request, "without_challan"),
            "date_from": params.get("date_from"),
            "date_to": params.get("date_to"),
        }
        queryset = EmissionReportService.list_reports(filters)
        return Response(EmissionReportSerializer(queryset, many=True).data)

    @extend_schema(summary="Retrieve emission report", responses={200: EmissionReportSerializer}, tags=["Evidence"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        return Response(EmissionReportSerializer(EmissionReportService.get_report(int(pk))).data)

    @extend_schema(summary="Record emission report", request=EmissionReportCreateSerializer,
                   responses={201: EmissionReportSerializer}, tags=["Evidence"])
    def create(self, request: Request) -> Response:
        serializer = EmissionReportCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        report = EmissionReportService.create_report(request.user, serializer.validated_data)
        return Response(EmissionReportSerializer(report).data, status=status.HTTP_201_CREATED)

    @extend_schema(summary="Verify report signature", request=None,
                   responses={200: SignatureVerificationSerializer}, tags=["Evidence"])
    @action(detail=True, methods=["get"], url_path="verify")
    def verify(self, request: Request, pk: str = None) -> Response:
        result = EmissionReportService.verify(int(pk))
        return Response(SignatureVerificationSerializer(result.as_dict()).data)
