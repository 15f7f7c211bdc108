"""
Agencies app ViewSets.

Thin views: validate with a serializer, delegate to the service, return
the serialized result.  Write permissions are enforced in the services.

ViewSets
--------
- ``PoliceStationViewSet`` — /stations/
- ``CourtTypeViewSet``     — /court-types/
- ``CourtViewSet``         — /courts/
- ``PoliceOfficerViewSet`` — /officers/  (create = enrol account + profile)
- ``JudgeViewSet``         — /judges/    (create = enrol account + profile)
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from .serializers import (
    CourtSerializer,
    CourtTypeSerializer,
    JudgeEnrolSerializer,
    JudgeSerializer,
    PoliceOfficerEnrolSerializer,
    PoliceOfficerSerializer,
    PoliceStationSerializer,
)
from .services import CourtService, PersonnelService, StationService


class PoliceStationViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="List police stations", responses={200: PoliceStationSerializer(many=True)}, tags=["Agencies"])
    def list(self, request: Request) -> Response:
        return Response(PoliceStationSerializer(StationService.list_stations(), many=True).data)

    @extend_schema(summary="Retrieve police station", responses={200: PoliceStationSerializer}, tags=["Agencies"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        return Response(PoliceStationSerializer(StationService.get_station(int(pk))).data)

    @extend_schema(summary="Register police station", request=PoliceStationSerializer,
                   responses={201: PoliceStationSerializer}, tags=["Agencies"])
    def create(self, request: Request) -> Response:
        serializer = PoliceStationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        station = StationService.create_station(request.user, serializer.validated_data)
        return Response(PoliceStationSerializer(station).data, status=status.HTTP_201_CREATED)


class CourtTypeViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="List court types", responses={200: CourtTypeSerializer(many=True)}, tags=["Agencies"])
    def list(self, request: Request) -> Response:
        return Response(CourtTypeSerializer(CourtService.list_court_types(), many=True).data)

    @extend_schema(summary="Create court type", request=CourtTypeSerializer,
                   responses={201: CourtTypeSerializer}, tags=["Agencies"])
    def create(self, request: Request) -> Response:
        serializer = CourtTypeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        court_type = CourtService.create_court_type(request.user, serializer.validated_data)
        return Response(CourtTypeSerializer(court_type).data, status=status.HTTP_201_CREATED)


class CourtViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="List courts", responses={200: CourtSerializer(many=True)}, tags=["Agencies"])
    def list(self, request: Request) -> Response:
        return Response(CourtSerializer(CourtService.list_courts(), many=True).data)

    @extend_schema(summary="Retrieve court", responses={200: CourtSerializer}, tags=["Agencies"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        return Response(CourtSerializer(CourtService.get_court(int(pk))).data)

    @extend_schema(summary="Register court", request=CourtSerializer,
                   responses={201: CourtSerializer}, tags=["Agencies"])
    def create(self, request: Request) -> Response:
        serializer = CourtSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        court = CourtService.create_court(request.user, serializer.validated_data)
        return Response(CourtSerializer(court).data, status=status.HTTP_201_CREATED)


class PoliceOfficerViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List police officers",
        parameters=[OpenApiParameter("station", int, description="Filter by station id.")],
        responses={200: PoliceOfficerSerializer(many=True)},
        tags=["Agencies"],
    )
    def list(self, request: Request) -> Response:
        station = request.query_params.get("station")
        queryset = PersonnelService.list_officers(int(station) if station and station.isdigit() else None)
        return Response(PoliceOfficerSerializer(queryset, many=True).data)

    @extend_schema(summary="Retrieve police officer", responses={200: PoliceOfficerSerializer}, tags=["Agencies"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        return Response(PoliceOfficerSerializer(PersonnelService.get_officer(int(pk))).data)

    @extend_schema(summary="Enrol police officer", request=PoliceOfficerEnrolSerializer,
                   responses={201: PoliceOfficerSerializer}, tags=["Agencies"])
    def create(self, request: Request) -> Response:
        serializer = PoliceOfficerEnrolSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        officer = PersonnelService.enrol_police_officer(request.user, serializer.validated_data)
        return Response(PoliceOfficerSerializer(officer).data, status=status.HTTP_201_CREATED)


class JudgeViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List judges",
        parameters=[OpenApiParameter("court", int, description="Filter by court id.")],
        responses={200: JudgeSerializer(many=True)},
        tags=["Agencies"],
    )
    def list(self, request: Request) -> Response:
        court = request.query_params.get("court")
        queryset = PersonnelService.list_judges(int(court) if court and court.isdigit() else None)
        return Response(JudgeSerializer(queryset, many=True).data)

    @extend_schema(summary="Retrieve judge", responses={200: JudgeSerializer}, tags=["Agencies"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        return Response(JudgeSerializer(PersonnelService.get_judge(int(pk))).data)

    @extend_schema(summary="Enrol judge", request=JudgeEnrolSerializer,
                   responses={201: JudgeSerializer}, tags=["Agencies"])
    def create(self, request: Request) -> Response:
        serializer = JudgeEnrolSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        judge = PersonnelService.enrol_judge(request.user, serializer.validated_data)
        return Response(JudgeSerializer(judge).data, status=status.HTTP_201_CREATED)
