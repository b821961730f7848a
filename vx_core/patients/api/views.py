# backend/vx_core/patients/api/views.py
from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import status, viewsets

from vx_core.common.api.pagination import paginate
from vx_core.common.api.params import parse_uuid
from vx_core.common.api.responses import success
from vx_core.common.permissions import (
    PatientPermission,
    PatientVaccinationPermission,
    TenantResourcePermission,
)
from vx_core.patients.api.serializers import (
    PatientCreateSerializer,
    PatientSerializer,
    PatientUpdateSerializer,
    PatientVaccinationCreateSerializer,
    PatientVaccinationSerializer,
)
from vx_core.patients.models import Patient, PatientVaccination
from vx_core.patients.selectors import get_patient, get_vaccination, list_vaccinations, search_patients
from vx_core.patients.services import PatientService, PatientVaccinationService


@extend_schema_view(
    list=extend_schema(
        tags=["Patients"],
        parameters=[OpenApiParameter("search", str, required=False)],
        responses={200: PatientSerializer(many=True)},
    ),
    retrieve=extend_schema(tags=["Patients"], responses={200: PatientSerializer}),
    create=extend_schema(tags=["Patients"], request=PatientCreateSerializer, responses={201: PatientSerializer}),
    update=extend_schema(tags=["Patients"], request=PatientUpdateSerializer, responses={200: PatientSerializer}),
    partial_update=extend_schema(tags=["Patients"], request=PatientUpdateSerializer, responses={200: PatientSerializer}),
    destroy=extend_schema(tags=["Patients"], responses={200: None}),
)
class PatientViewSet(viewsets.ViewSet):
    # role gate first, then cross-tenant guard on detail routes
    permission_classes = [PatientPermission, TenantResourcePermission]

    # ✅ these two lines fix spectacular + path param typing
    serializer_class = PatientSerializer
    queryset = Patient.objects.none()

    def list(self, request):
        q = request.query_params.get("search") or request.query_params.get("q") or ""
        qs = search_patients(tenant_id=request.auth.tenant_id, q=q)
        return paginate(request, qs, PatientSerializer)

    def retrieve(self, request, pk=None):
        patient = get_patient(tenant_id=request.auth.tenant_id, patient_id=pk)
        data = PatientSerializer(patient).data
        data["vaccinations"] = PatientVaccinationSerializer(
            list_vaccinations(tenant_id=request.auth.tenant_id, patient_id=patient.id), many=True
        ).data
        return success(data)

    def create(self, request):
        ser = PatientCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        patient = PatientService.create_patient(
            tenant_id=request.auth.tenant_id,
            actor_user_id=request.auth.user.id,
            **ser.validated_data,
        )
        return success(PatientSerializer(patient).data, status_code=status.HTTP_201_CREATED)

    def update(self, request, pk=None):
        ser = PatientUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        patient = PatientService.update_patient(
            tenant_id=request.auth.tenant_id,
            actor_user_id=request.auth.user.id,
            patient_id=pk,
            data=ser.validated_data,
        )
        return success(PatientSerializer(patient).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        PatientService.delete_patient(
            tenant_id=request.auth.tenant_id,
            actor_user_id=request.auth.user.id,
            patient_id=pk,
        )
        return success(message="Patient deleted successfully")


@extend_schema_view(
    list=extend_schema(
        tags=["Vaccinations"],
        parameters=[OpenApiParameter("patient_id", str, required=False)],
        responses={200: PatientVaccinationSerializer(many=True)},
    ),
    retrieve=extend_schema(tags=["Vaccinations"], responses={200: PatientVaccinationSerializer}),
    create=extend_schema(
        tags=["Vaccinations"],
        request=PatientVaccinationCreateSerializer,
        responses={201: PatientVaccinationSerializer},
    ),
)
class PatientVaccinationViewSet(viewsets.ViewSet):
    permission_classes = [PatientVaccinationPermission, TenantResourcePermission]

    serializer_class = PatientVaccinationSerializer
    queryset = PatientVaccination.objects.none()

    def list(self, request):
        patient_raw = request.query_params.get("patient_id")
        patient_id = parse_uuid(patient_raw, "patient_id") if patient_raw else None
        qs = list_vaccinations(tenant_id=request.auth.tenant_id, patient_id=patient_id)
        return paginate(request, qs, PatientVaccinationSerializer)

    def retrieve(self, request, pk=None):
        dose = get_vaccination(tenant_id=request.auth.tenant_id, vaccination_id=pk)
        return success(PatientVaccinationSerializer(dose).data)

    def create(self, request):
        ser = PatientVaccinationCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        dose = PatientVaccinationService.record_dose(
            tenant_id=request.auth.tenant_id,
            actor_user_id=request.auth.user.id,
            **ser.validated_data,
        )
        return success(PatientVaccinationSerializer(dose).data, status_code=status.HTTP_201_CREATED)
