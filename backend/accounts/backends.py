"""
Custom authentication backend for multi-field login.

Staff users may authenticate with their ``username``, their ``email``
or the CNIC recorded on their police-officer / judge profile, together
with their ``password``.

This backend is registered in ``settings.AUTHENTICATION_BACKENDS``
so that Django's ``authenticate()`` call dispatches to it.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend
from django.db.models import Q

User = get_user_model()


class MultiFieldAuthBackend(ModelBackend):
    """
    Authenticate against ``username``, ``email`` (case-insensitive) or
    profile CNIC.

    When ``django.contrib.auth.authenticate(identifier=..., password=...)``
    is called, this backend resolves the user from the ``identifier``
    keyword argument.
    """

    def authenticate(self, request, identifier=None, password=None, **kwargs):
        if identifier is None or password is None:
            return None

        identifier = identifier.strip()
        lookup = (
            Q(username=identifier)
            | Q(email__iexact=identifier)
            | Q(police_officer__cnic=identifier)
            | Q(judge__cnic=identifier)
        )
        try:
            user = User.objects.select_related("role").distinct().get(lookup)
        except User.DoesNotExist:
            # Run the default password hasher to mitigate timing attacks
            User().set_password(password)
            return None
        except User.MultipleObjectsReturned:
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
