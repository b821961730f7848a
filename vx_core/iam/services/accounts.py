# backend/vx_core/iam/services/accounts.py
from __future__ import annotations

import logging
from typing import Any

from django.contrib.auth import authenticate, get_user_model
from django.db import IntegrityError, transaction
from rest_framework.exceptions import AuthenticationFailed, PermissionDenied
from rest_framework_simplejwt.tokens import RefreshToken

from vx_core.common.api.exceptions import ConflictError
from vx_core.iam.models import SuperAdmin, TenantRole, TenantUser
from vx_core.iam.services.membership import is_active_super_admin, is_member_of_tenant, super_admin_exists

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MSG = "Invalid credentials"


def _split_name(full_name: str) -> tuple[str, str]:
    first, _, last = (full_name or "").strip().partition(" ")
    return first[:150], last.strip()[:150]


def issue_tokens(user) -> dict[str, str]:
    refresh = RefreshToken.for_user(user)
    return {"access": str(refresh.access_token), "refresh": str(refresh)}


def create_login_user(*, email: str, password: str, full_name: str = ""):
    """
    Creates the django.contrib.auth identity (username == email).
    Callers wrap this in their own transaction.
    """
    User = get_user_model()
    email = email.strip().lower()
    if User.objects.filter(username=email).exists():
        raise ConflictError("A user with this email already exists.")

    first_name, last_name = _split_name(full_name)
    try:
        with transaction.atomic():
            return User.objects.create_user(
                username=email,
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
            )
    except IntegrityError:
        raise ConflictError("A user with this email already exists.")


class AccountService:
    """
    Tenant users + super admins (write-model boundary).
    """

    @staticmethod
    @transaction.atomic
    def register_tenant_user(
        *,
        tenant,
        email: str,
        password: str,
        full_name: str,
        role: str = TenantRole.PATIENT,
    ) -> TenantUser:
        email = email.strip().lower()
        if is_member_of_tenant(email=email, tenant_id=tenant.id):
            raise ConflictError("User already exists in this tenant")

        user = create_login_user(email=email, password=password, full_name=full_name)
        membership = TenantUser.objects.create(
            user=user,
            tenant=tenant,
            role=role,
            full_name=full_name.strip(),
        )
        logger.info("Tenant user registered tenant=%s role=%s user_id=%s", tenant.subdomain, role, user.id)
        return membership

    @staticmethod
    def authenticate_tenant_user(*, tenant, email: str, password: str) -> TenantUser:
        user = authenticate(username=email.strip().lower(), password=password)
        if user is None:
            raise AuthenticationFailed(INVALID_CREDENTIALS_MSG)

        membership = (
            TenantUser.objects.select_related("tenant", "user")
            .filter(user=user, tenant=tenant, is_active=True)
            .first()
        )
        if membership is None:
            raise AuthenticationFailed(INVALID_CREDENTIALS_MSG)
        return membership

    @staticmethod
    @transaction.atomic
    def init_super_admin(*, email: str, password: str, full_name: str = "") -> SuperAdmin:
        if super_admin_exists():
            raise ConflictError("System already initialized")

        user = create_login_user(email=email, password=password, full_name=full_name)
        admin = SuperAdmin.objects.create(user=user)
        logger.info("Super admin initialized user_id=%s", user.id)
        return admin

    @staticmethod
    def authenticate_super_admin(*, email: str, password: str) -> Any:
        user = authenticate(username=email.strip().lower(), password=password)
        if user is None:
            raise AuthenticationFailed(INVALID_CREDENTIALS_MSG)
        if not is_active_super_admin(user_id=user.id):
            raise PermissionDenied("Super admin access required")
        return user
