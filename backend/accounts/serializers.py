"""
Accounts app serializers.

Contains the Request and Response serializers for the accounts API.
Serializers handle field definitions, read/write constraints, and
basic validation.  **No business logic** lives here — all domain
rules are delegated to ``services.py``.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth import authenticate, get_user_model
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from .models import Role, RoleName

User = get_user_model()


# ═══════════════════════════════════════════════════════════════════
#  Authentication Serializers
# ═══════════════════════════════════════════════════════════════════


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    SimpleJWT serializer that:

    1. Accepts ``identifier`` (username, email or staff CNIC) + ``password`` instead
       of ``username`` + ``password``.
    2. Resolves the user via ``MultiFieldAuthBackend``.
    3. Adds the ``role`` claim to the token payload.
    """

    username_field = "identifier"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields.pop(self.username_field, None)
        self.fields["identifier"] = serializers.CharField(
            help_text="Username, email address or police officer / judge CNIC.",
        )

    @classmethod
    def get_token(cls, user) -> Any:
        token = super().get_token(user)
        token["role"] = user.role.name if user.role else None
        return token

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        user = authenticate(
            request=self.context.get("request"),
            identifier=attrs.get("identifier"),
            password=attrs.get("password"),
        )

        if user is None:
            raise serializers.ValidationError(
                {"detail": "Invalid credentials."},
                code="authentication",
            )

        if not user.is_active:
            raise serializers.ValidationError(
                {"detail": "User account is disabled."},
                code="authentication",
            )

        refresh = self.get_token(user)
        self.user = user
        return {
            "access": str(refresh.access_token),
            "refresh": str(refresh),
        }


# ═══════════════════════════════════════════════════════════════════
#  Role Serializers
# ═══════════════════════════════════════════════════════════════════


class RoleSerializer(serializers.ModelSerializer):
    """Role with its display label and flat permission list."""

    label = serializers.CharField(source="get_name_display", read_only=True)
    permissions_display = serializers.SerializerMethodField()

    class Meta:
        model = Role
        fields = ["id", "name", "label", "description", "permissions_display"]
        read_only_fields = fields

    def get_permissions_display(self, obj: Role) -> list[str]:
        perms = obj.permissions.select_related("content_type").all()
        return sorted(f"{p.content_type.app_label}.{p.codename}" for p in perms)


# ═══════════════════════════════════════════════════════════════════
#  User Serializers
# ═══════════════════════════════════════════════════════════════════


class UserListSerializer(serializers.ModelSerializer):
    """Compact user row for admin listings."""

    role_name = serializers.CharField(source="role.name", read_only=True, default=None)

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "is_active",
            "role",
            "role_name",
        ]
        read_only_fields = fields


class UserDetailSerializer(serializers.ModelSerializer):
    """
    Full user representation (retrieve, me, login response).

    ``permissions`` is the flat list of ``app_label.codename`` strings
    granted through the user's role.
    """

    role_name = serializers.CharField(source="role.name", read_only=True, default=None)
    role_label = serializers.CharField(source="role.get_name_display", read_only=True, default=None)
    permissions = serializers.ListField(
        child=serializers.CharField(),
        source="permissions_list",
        read_only=True,
    )

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "phone_number",
            "first_name",
            "last_name",
            "is_active",
            "date_joined",
            "role",
            "role_name",
            "role_label",
            "permissions",
        ]
        read_only_fields = fields


class StaffUserCreateSerializer(serializers.ModelSerializer):
    """
    Validates an administrator-created staff account.

    ``role`` is a ``RoleName`` value; the service resolves it to the
    seeded ``Role`` row.
    """

    password = serializers.CharField(
        write_only=True,
        min_length=8,
        style={"input_type": "password"},
    )
    role = serializers.ChoiceField(choices=RoleName.choices)

    class Meta:
        model = User
        fields = [
            "username",
            "password",
            "email",
            "phone_number",
            "first_name",
            "last_name",
            "role",
        ]
        extra_kwargs = {
            "email": {"required": True},
            "first_name": {"required": True},
            "last_name": {"required": True},
        }


class AssignRoleSerializer(serializers.Serializer):
    """Accepts the ``RoleName`` value to assign to a user."""

    role = serializers.ChoiceField(choices=RoleName.choices)
