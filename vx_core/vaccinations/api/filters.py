# backend/vx_core/vaccinations/api/filters.py
import django_filters

from vx_core.vaccinations.models import VaccinationGuideline


class GuidelineFilter(django_filters.FilterSet):
    country_code = django_filters.CharFilter(field_name="country_code", lookup_expr="iexact")
    region_code = django_filters.CharFilter(method="filter_region")
    vaccine_code = django_filters.CharFilter(field_name="vaccine_code", lookup_expr="iexact")
    is_mandatory = django_filters.BooleanFilter(field_name="is_mandatory")

    class Meta:
        model = VaccinationGuideline
        fields = ["country_code", "region_code", "vaccine_code", "is_mandatory"]

    def filter_region(self, queryset, name, value):
        # all-region rows always apply
        return queryset.filter(region_code__in=["", value.upper()])
