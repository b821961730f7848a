# backend/vx_core/vaccinations/api/views.py
from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.filters import OrderingFilter
from rest_framework.permissions import AllowAny

from vx_core.common.api.responses import success
from vx_core.vaccinations.api.filters import GuidelineFilter
from vx_core.vaccinations.api.serializers import GuidelineSerializer
from vx_core.vaccinations.selectors import active_guidelines


@extend_schema_view(
    list=extend_schema(tags=["Vaccinations"], responses={200: GuidelineSerializer(many=True)}),
    retrieve=extend_schema(tags=["Vaccinations"], responses={200: GuidelineSerializer}),
)
class GuidelineViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Public reference data: the guideline table per country/region.
    """
    authentication_classes = []
    permission_classes = [AllowAny]

    serializer_class = GuidelineSerializer
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = GuidelineFilter
    ordering_fields = ["recommended_age_months", "vaccine_code", "dose_number"]

    def get_queryset(self):
        return active_guidelines()

    def retrieve(self, request, *args, **kwargs):
        return success(self.get_serializer(self.get_object()).data)
