# backend/vx_core/parents/api/views.py
from __future__ import annotations

import logging
from datetime import timedelta

from django.utils import timezone
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from vx_core.audit.api.serializers import ActivitySerializer
from vx_core.audit.selectors import activity_for, entity_activity
from vx_core.common.api.params import int_param, route_uuid
from vx_core.common.api.responses import success
from vx_core.parents.api.serializers import (
    ChildCreateSerializer,
    ChildSerializer,
    ChildUpdateSerializer,
    NotificationPreferenceSerializer,
    NotificationPreferenceUpdateSerializer,
    ParentLoginSerializer,
    ParentProfileUpdateSerializer,
    ParentRegisterSerializer,
    ParentSerializer,
    ReminderCompleteSerializer,
    ReminderSerializer,
)
from vx_core.parents.auth import IsParent, ParentTokenAuthentication
from vx_core.parents.models import Child
from vx_core.parents.reminders import ReminderService, build_reminder, build_reminders
from vx_core.parents.selectors import (
    children_for_parent,
    get_child_for_parent_or_none,
    get_entry_for_parent_or_none,
    open_entries_for_parent,
)
from vx_core.parents.services import ChildService, NotificationPreferenceService, ParentService
from vx_core.parents.tokens import issue_parent_token
from vx_core.vaccinations.api.serializers import (
    CatchUpRequestSerializer,
    ScheduleEntrySerializer,
    ScheduleItemSerializer,
    ScheduleOptionsSerializer,
    VaccinationRecordCreateSerializer,
    VaccinationRecordSerializer,
)
from vx_core.vaccinations.generator import ScheduleGenerationError, ScheduleOptions, schedule_generator
from vx_core.vaccinations.selectors import records_for_child, schedule_for_child
from vx_core.vaccinations.services import VaccinationRecordService

logger = logging.getLogger(__name__)

CHILD_NOT_FOUND_MSG = "Child not found"
REMINDER_NOT_FOUND_MSG = "Reminder not found"
OVERVIEW_UPCOMING_LIMIT = 5


class ParentRegisterView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(request=ParentRegisterSerializer, responses={201: ParentSerializer}, tags=["Parent Portal"])
    def post(self, request):
        ser = ParentRegisterSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        parent = ParentService.register(**ser.validated_data)
        return success(
            {"parent": ParentSerializer(parent).data, "token": issue_parent_token(parent)},
            message="Registration successful",
            status_code=status.HTTP_201_CREATED,
        )


class ParentLoginView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(request=ParentLoginSerializer, responses={200: dict}, tags=["Parent Portal"])
    def post(self, request):
        ser = ParentLoginSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        parent = ParentService.authenticate(**ser.validated_data)
        return success({"parent": ParentSerializer(parent).data, "token": issue_parent_token(parent)})


class ParentProfileView(APIView):
    authentication_classes = [ParentTokenAuthentication]
    permission_classes = [IsParent]

    @extend_schema(responses={200: ParentSerializer}, tags=["Parent Portal"])
    def get(self, request):
        return success(ParentSerializer(request.auth).data)

    @extend_schema(request=ParentProfileUpdateSerializer, responses={200: ParentSerializer}, tags=["Parent Portal"])
    def put(self, request):
        ser = ParentProfileUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        parent = ParentService.update_profile(parent=request.auth, data=ser.validated_data)
        return success(ParentSerializer(parent).data)


def _options_from(child, validated: dict) -> ScheduleOptions:
    overrides = {
        "country_code": validated.get("country_code"),
        "include_optional": validated.get("include_optional", False),
        "exclude_vaccines": validated.get("exclude_vaccines") or (),
    }
    if validated.get("region_code"):
        overrides["region_code"] = validated["region_code"].upper()
    return ScheduleOptions.for_child(child, **overrides)


@extend_schema_view(
    list=extend_schema(tags=["Parent Portal"], responses={200: ChildSerializer(many=True)}),
    retrieve=extend_schema(tags=["Parent Portal"], responses={200: ChildSerializer}),
    create=extend_schema(tags=["Parent Portal"], request=ChildCreateSerializer, responses={201: ChildSerializer}),
    partial_update=extend_schema(tags=["Parent Portal"], request=ChildUpdateSerializer, responses={200: ChildSerializer}),
    update=extend_schema(tags=["Parent Portal"], request=ChildUpdateSerializer, responses={200: ChildSerializer}),
    destroy=extend_schema(tags=["Parent Portal"], responses={200: None}),
    generate_schedule=extend_schema(
        tags=["Parent Portal"], request=ScheduleOptionsSerializer, responses={200: ScheduleItemSerializer(many=True)}
    ),
    catch_up_schedule=extend_schema(
        tags=["Parent Portal"], request=CatchUpRequestSerializer, responses={200: ScheduleItemSerializer(many=True)}
    ),
    schedule=extend_schema(tags=["Parent Portal"], responses={200: ScheduleEntrySerializer(many=True)}),
    upcoming=extend_schema(
        tags=["Parent Portal"],
        parameters=[OpenApiParameter("days", int, required=False)],
        responses={200: ScheduleEntrySerializer(many=True)},
    ),
    records=extend_schema(
        tags=["Parent Portal"], request=VaccinationRecordCreateSerializer, responses={200: VaccinationRecordSerializer(many=True)}
    ),
    activity=extend_schema(tags=["Parent Portal"], responses={200: ActivitySerializer(many=True)}),
    reminders=extend_schema(tags=["Parent Portal"], responses={200: ReminderSerializer(many=True)}),
)
class ChildViewSet(viewsets.ViewSet):
    """
    A parent's children and their vaccination schedules.
    Only the owning parent can see a child; everyone else gets 404.
    """
    authentication_classes = [ParentTokenAuthentication]
    permission_classes = [IsParent]

    serializer_class = ChildSerializer
    queryset = Child.objects.none()

    def _child(self, request, pk) -> Child:
        child = get_child_for_parent_or_none(parent_id=request.auth.id, child_id=route_uuid(pk, CHILD_NOT_FOUND_MSG))
        if child is None:
            raise NotFound(CHILD_NOT_FOUND_MSG)
        return child

    def list(self, request):
        children = children_for_parent(parent_id=request.auth.id)
        return success(ChildSerializer(children, many=True).data)

    def create(self, request):
        ser = ChildCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        parent = request.auth
        child = ChildService.create_child(parent=parent, **ser.validated_data)

        # the child exists either way; a schedule can be regenerated later
        schedule_generated = True
        try:
            items = schedule_generator.generate_schedule(child)
            schedule_generator.save_schedule(child, items, actor_user_id=parent.user_id)
        except ScheduleGenerationError:
            logger.warning("Initial schedule not generated for child=%s", child.id)
            schedule_generated = False

        data = ChildSerializer(child).data
        data["schedule_generated"] = schedule_generated
        return success(data, message="Child added successfully", status_code=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        child = self._child(request, pk)
        data = ChildSerializer(child).data
        data["schedule"] = ScheduleEntrySerializer(schedule_for_child(child_id=child.id), many=True).data
        data["records"] = VaccinationRecordSerializer(records_for_child(child_id=child.id), many=True).data
        return success(data)

    def partial_update(self, request, pk=None):
        child = self._child(request, pk)
        ser = ChildUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        child = ChildService.update_child(child=child, data=ser.validated_data)
        return success(ChildSerializer(child).data)

    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    def destroy(self, request, pk=None):
        ChildService.deactivate_child(child=self._child(request, pk))
        return success(message="Child removed successfully")

    @action(detail=True, methods=["post"], url_path="generate-schedule")
    def generate_schedule(self, request, pk=None):
        child = self._child(request, pk)
        ser = ScheduleOptionsSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        items = schedule_generator.generate_schedule(child, _options_from(child, ser.validated_data))
        schedule_generator.save_schedule(child, items, actor_user_id=request.auth.user_id)
        return success([i.as_dict() for i in items], message="Schedule generated successfully")

    @action(detail=True, methods=["post"], url_path="catch-up-schedule")
    def catch_up_schedule(self, request, pk=None):
        child = self._child(request, pk)
        ser = CatchUpRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        items = schedule_generator.generate_catch_up_schedule(
            child,
            ser.validated_data["missed_vaccines"],
            _options_from(child, ser.validated_data),
        )
        schedule_generator.save_schedule(child, items, actor_user_id=request.auth.user_id)
        return success([i.as_dict() for i in items], message="Catch-up schedule generated")

    @action(detail=True, methods=["get"])
    def schedule(self, request, pk=None):
        child = self._child(request, pk)
        return success(ScheduleEntrySerializer(schedule_for_child(child_id=child.id), many=True).data)

    @action(detail=True, methods=["get"])
    def upcoming(self, request, pk=None):
        child = self._child(request, pk)
        days = int_param(request.query_params.get("days"), default=30, minimum=1, maximum=365)
        entries = schedule_generator.upcoming_vaccinations(child, days_ahead=days)
        return success(ScheduleEntrySerializer(entries, many=True).data)

    @action(detail=True, methods=["get", "post"])
    def records(self, request, pk=None):
        child = self._child(request, pk)
        if request.method == "GET":
            return success(VaccinationRecordSerializer(records_for_child(child_id=child.id), many=True).data)

        ser = VaccinationRecordCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        record = VaccinationRecordService.record(child=child, actor_user_id=request.auth.user_id, **ser.validated_data)
        return success(VaccinationRecordSerializer(record).data, status_code=status.HTTP_201_CREATED)

    @action(detail=True, methods=["get"])
    def activity(self, request, pk=None):
        child = self._child(request, pk)
        events = entity_activity(entity_type="Child", entity_ids=[child.id])
        return success(ActivitySerializer(events, many=True).data)

    @action(detail=True, methods=["get"])
    def reminders(self, request, pk=None):
        child = self._child(request, pk)
        entries = open_entries_for_parent(parent_id=request.auth.id).filter(child_id=child.id)
        days_before = NotificationPreferenceService.get_for(request.auth).reminder_days_before
        return success(ReminderSerializer(build_reminders(entries, days_before=days_before), many=True).data)


class ParentNotificationPreferencesView(APIView):
    authentication_classes = [ParentTokenAuthentication]
    permission_classes = [IsParent]

    @extend_schema(responses={200: NotificationPreferenceSerializer}, tags=["Parent Portal"])
    def get(self, request):
        return success(NotificationPreferenceSerializer(NotificationPreferenceService.get_for(request.auth)).data)

    @extend_schema(
        request=NotificationPreferenceUpdateSerializer,
        responses={200: NotificationPreferenceSerializer},
        tags=["Parent Portal"],
    )
    def put(self, request):
        ser = NotificationPreferenceUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        prefs = NotificationPreferenceService.update(parent=request.auth, data=ser.validated_data)
        return success(NotificationPreferenceSerializer(prefs).data, message="Preferences updated")


class ReminderCompleteView(APIView):
    """Marks a reminder done by recording the dose it was about."""
    authentication_classes = [ParentTokenAuthentication]
    permission_classes = [IsParent]

    @extend_schema(request=ReminderCompleteSerializer, responses={201: dict}, tags=["Parent Portal"])
    def post(self, request, entry_id=None):
        parent = request.auth
        entry = get_entry_for_parent_or_none(
            parent_id=parent.id, entry_id=route_uuid(entry_id, REMINDER_NOT_FOUND_MSG)
        )
        if entry is None:
            raise NotFound(REMINDER_NOT_FOUND_MSG)

        ser = ReminderCompleteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        record = ReminderService.complete(entry=entry, actor_user_id=parent.user_id, **ser.validated_data)
        entry.refresh_from_db()

        days_before = NotificationPreferenceService.get_for(parent).reminder_days_before
        return success(
            {
                "reminder": ReminderSerializer(
                    build_reminder(entry, days_before=days_before, today=timezone.localdate())
                ).data,
                "record": VaccinationRecordSerializer(record).data,
            },
            message="Reminder completed",
            status_code=status.HTTP_201_CREATED,
        )


class ParentOverviewView(APIView):
    """Dashboard landing data for the parent portal."""
    authentication_classes = [ParentTokenAuthentication]
    permission_classes = [IsParent]

    @extend_schema(responses={200: dict}, tags=["Parent Portal"])
    def get(self, request):
        parent = request.auth
        today = timezone.localdate()
        prefs = NotificationPreferenceService.get_for(parent)

        child_ids = list(children_for_parent(parent_id=parent.id).values_list("id", flat=True))
        open_entries = open_entries_for_parent(parent_id=parent.id)
        upcoming = open_entries.filter(due_date__gte=today)[:OVERVIEW_UPCOMING_LIMIT]
        overdue_before = today - timedelta(days=schedule_generator.grace_days)
        overdue_count = open_entries.filter(due_date__lt=overdue_before).count()

        events = activity_for(entities=[("Parent", parent.id), *[("Child", cid) for cid in child_ids]])
        return success(
            {
                "children_count": len(child_ids),
                "upcoming_reminders": ReminderSerializer(
                    build_reminders(upcoming, days_before=prefs.reminder_days_before, today=today), many=True
                ).data,
                "overdue_count": overdue_count,
                "recent_activity": ActivitySerializer(events, many=True).data,
                "notification_preferences": NotificationPreferenceSerializer(prefs).data,
            }
        )
