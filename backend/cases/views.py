"""
Cases app ViewSets.

ViewSets
--------
- ``CaseViewSet``           — /cases/ (+ ``eligible-firs``, ``assign-judge``)
- ``CaseStatementViewSet``  — /cases/{case_pk}/statements/
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from firs.serializers import FirSerializer

from .serializers import (
    AssignJudgeSerializer,
    CaseCreateSerializer,
    CaseDetailSerializer,
    CaseListSerializer,
    CaseStatementCreateSerializer,
    CaseStatementSerializer,
    CaseUpdateSerializer,
)
from .services import CaseService, CaseStatementService


class CaseViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List cases",
        parameters=[
            OpenApiParameter("status", str),
            OpenApiParameter("judge", int),
            OpenApiParameter("court", int),
            OpenApiParameter("hearing_from", str, description="YYYY-MM-DD"),
            OpenApiParameter("hearing_to", str, description="YYYY-MM-DD"),
            OpenApiParameter("mine", bool, description="Only cases assigned to the requesting judge."),
        ],
        responses={200: CaseListSerializer(many=True)},
        tags=["Cases"],
    )
    def list(self, request: Request) -> Response:
        params = request.query_params
        filters = {key: params.get(key) for key in ("status", "judge", "court", "hearing_from", "hearing_to")}
        judge = getattr(request.user, "judge", None)
        if params.get("mine", "").lower() in {"1", "true", "yes"} and judge is not None:
            filters["judge"] = judge.pk
        return Response(CaseListSerializer(CaseService.list_cases(filters), many=True).data)

    @extend_schema(summary="Retrieve case", responses={200: CaseDetailSerializer}, tags=["Cases"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        return Response(CaseDetailSerializer(CaseService.get_case(int(pk))).data)

    @extend_schema(summary="Open case from an FIR", request=CaseCreateSerializer,
                   responses={201: CaseDetailSerializer}, tags=["Cases"])
    def create(self, request: Request) -> Response:
        serializer = CaseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        case = CaseService.create_case(request.user, serializer.validated_data)
        return Response(CaseDetailSerializer(CaseService.get_case(case.pk)).data, status=status.HTTP_201_CREATED)

    @extend_schema(summary="Update status / hearing date / verdict", request=CaseUpdateSerializer,
                   responses={200: CaseDetailSerializer}, tags=["Cases"])
    def partial_update(self, request: Request, pk: str = None) -> Response:
        serializer = CaseUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        case = CaseService.update_case(request.user, int(pk), serializer.validated_data)
        return Response(CaseDetailSerializer(CaseService.get_case(case.pk)).data)

    @extend_schema(summary="Assign presiding judge", request=AssignJudgeSerializer,
                   responses={200: CaseDetailSerializer}, tags=["Cases"])
    @action(detail=True, methods=["patch", "post"], url_path="assign-judge")
    def assign_judge(self, request: Request, pk: str = None) -> Response:
        serializer = AssignJudgeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        case = CaseService.assign_judge(request.user, int(pk), serializer.validated_data["judge"])
        return Response(CaseDetailSerializer(CaseService.get_case(case.pk)).data)

    @extend_schema(summary="FIRs without a case", responses={200: FirSerializer(many=True)}, tags=["Cases"])
    @action(detail=False, methods=["get"], url_path="eligible-firs")
    def eligible_firs(self, request: Request) -> Response:
        return Response(FirSerializer(CaseService.eligible_firs(), many=True).data)


class CaseStatementViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="List case statements", responses={200: CaseStatementSerializer(many=True)},
                   tags=["Cases"])
    def list(self, request: Request, case_pk: str = None) -> Response:
        queryset = CaseStatementService.list_statements(int(case_pk))
        return Response(CaseStatementSerializer(queryset, many=True).data)

    @extend_schema(summary="Record case statement", request=CaseStatementCreateSerializer,
                   responses={201: CaseStatementSerializer}, tags=["Cases"])
    def create(self, request: Request, case_pk: str = None) -> Response:
        serializer = CaseStatementCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        statement = CaseStatementService.add_statement(request.user, int(case_pk), serializer.validated_data)
        return Response(CaseStatementSerializer(statement).data, status=status.HTTP_201_CREATED)
