"""
Accounts app views.

All views follow the **Thin View** pattern: validate input via
serializers, delegate to the service layer, and return the result
wrapped in a DRF ``Response``.  **No business logic** resides here.

View Map
--------
- ``LoginView``    — POST /auth/login/
- ``MeView``       — GET /me/
- ``UserViewSet``  — /users/  (list, retrieve, create, assign-role,
                     activate, deactivate)
- ``RoleViewSet``  — GET /roles/
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import RoleName
from .serializers import (
    AssignRoleSerializer,
    CustomTokenObtainPairSerializer,
    RoleSerializer,
    StaffUserCreateSerializer,
    UserDetailSerializer,
    UserListSerializer,
)
from .services import RoleService, UserManagementService


# ═══════════════════════════════════════════════════════════════════
#  Authentication
# ═══════════════════════════════════════════════════════════════════


class LoginView(APIView):
    """
    POST /api/accounts/auth/login/

    Public endpoint.  Authenticates a staff user by username or email
    plus password and returns a JWT pair with the user profile.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Log in",
        request=CustomTokenObtainPairSerializer,
        responses={
            200: OpenApiResponse(description="JWT access/refresh pair plus user profile."),
            400: OpenApiResponse(description="Invalid credentials."),
        },
        tags=["Accounts"],
    )
    def post(self, request: Request) -> Response:
        serializer = CustomTokenObtainPairSerializer(
            data=request.data,
            context={"request": request},
        )
        serializer.is_valid(raise_exception=True)

        payload = serializer.validated_data
        payload["user"] = UserDetailSerializer(serializer.user).data
        return Response(payload, status=status.HTTP_200_OK)


class MeView(APIView):
    """GET /api/accounts/me/ — the authenticated user's profile."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Current user",
        responses={200: UserDetailSerializer},
        tags=["Accounts"],
    )
    def get(self, request: Request) -> Response:
        return Response(UserDetailSerializer(request.user).data, status=status.HTTP_200_OK)


# ═══════════════════════════════════════════════════════════════════
#  User Management
# ═══════════════════════════════════════════════════════════════════


class UserViewSet(viewsets.ViewSet):
    """
    /api/accounts/users/

    Administrative staff-account management.  Every action requires
    ``accounts.can_manage_users`` (checked in ``UserManagementService``).
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List users",
        parameters=[
            OpenApiParameter("role", str, enum=RoleName.values, description="Filter by role."),
            OpenApiParameter("is_active", bool, description="Filter by active flag."),
            OpenApiParameter("search", str, description="Match username, e-mail or name."),
        ],
        responses={200: UserListSerializer(many=True)},
        tags=["Accounts"],
    )
    def list(self, request: Request) -> Response:
        params = request.query_params
        filters = {"role": params.get("role"), "search": params.get("search")}
        if "is_active" in params:
            filters["is_active"] = params["is_active"].lower() in ("1", "true", "yes")
        queryset = UserManagementService.list_users(request.user, filters)
        return Response(UserListSerializer(queryset, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(summary="Retrieve user", responses={200: UserDetailSerializer}, tags=["Accounts"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        user = UserManagementService.get_user(request.user, int(pk))
        return Response(UserDetailSerializer(user).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Create staff user",
        request=StaffUserCreateSerializer,
        responses={201: UserDetailSerializer, 409: OpenApiResponse(description="Duplicate username/e-mail.")},
        tags=["Accounts"],
    )
    def create(self, request: Request) -> Response:
        serializer = StaffUserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserManagementService.create_staff_user(request.user, serializer.validated_data)
        return Response(UserDetailSerializer(user).data, status=status.HTTP_201_CREATED)

    @extend_schema(summary="Assign role", request=AssignRoleSerializer, responses={200: UserDetailSerializer}, tags=["Accounts"])
    @action(detail=True, methods=["patch"], url_path="assign-role")
    def assign_role(self, request: Request, pk: str = None) -> Response:
        serializer = AssignRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserManagementService.assign_role(request.user, int(pk), serializer.validated_data["role"])
        return Response(UserDetailSerializer(user).data, status=status.HTTP_200_OK)

    @extend_schema(summary="Activate user", request=None, responses={200: UserDetailSerializer}, tags=["Accounts"])
    @action(detail=True, methods=["patch"])
    def activate(self, request: Request, pk: str = None) -> Response:
        user = UserManagementService.set_active(request.user, int(pk), True)
        return Response(UserDetailSerializer(user).data, status=status.HTTP_200_OK)

    @extend_schema(summary="Deactivate user", request=None, responses={200: UserDetailSerializer}, tags=["Accounts"])
    @action(detail=True, methods=["patch"])
    def deactivate(self, request: Request, pk: str = None) -> Response:
        user = UserManagementService.set_active(request.user, int(pk), False)
        return Response(UserDetailSerializer(user).data, status=status.HTTP_200_OK)


class RoleViewSet(viewsets.ViewSet):
    """GET /api/accounts/roles/ — the closed role set with capabilities."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="List roles", responses={200: RoleSerializer(many=True)}, tags=["Accounts"])
    def list(self, request: Request) -> Response:
        return Response(RoleSerializer(RoleService.list_roles(), many=True).data, status=status.HTTP_200_OK)
