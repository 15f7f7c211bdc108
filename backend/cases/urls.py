"""
Cases app URL configuration (included under ``/api/``).

    /api/cases/                              → list / open
    /api/cases/{id}/                         → retrieve / patch
    /api/cases/{id}/assign-judge/            → PATCH
    /api/cases/eligible-firs/                → GET
    /api/cases/{case_pk}/statements/         → list / record
"""

from rest_framework.routers import DefaultRouter
from rest_framework_nested import routers as nested_routers

from .views import CaseStatementViewSet, CaseViewSet

router = DefaultRouter()
router.register(prefix=r"cases", viewset=CaseViewSet, basename="case")

# ── Nested router: statements ───────────────────────────────────────
statements_router = nested_routers.NestedDefaultRouter(
    parent_router=router,
    parent_prefix=r"cases",
    lookup="case",  # produces kwarg ``case_pk``
)
statements_router.register(
    prefix=r"statements",
    viewset=CaseStatementViewSet,
    basename="case-statement",
)

urlpatterns = [
    *router.urls,
    *statements_router.urls,
]
