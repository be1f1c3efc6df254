"""
Account Services: Customer, Chef and Admin.

CLEAN-ARCH: Handles account business logic including:
- Email uniqueness per restaurant
- Password hashing (bcrypt) on create and on password change
- Email + password login returning the sanitized record
- Role-prefixed admin ids (Manager-1, Chef-2)

Usage:
    from rest_api.services.domain import CustomerService

    service = CustomerService(db)
    customer = service.create(payload, "restro-1")
    customer = service.login("restro-1", email, password)
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import Admin, Chef, Customer
from rest_api.repositories import AdminRepository, ChefRepository, CustomerRepository
from rest_api.schemas.accounts import AdminOutput, AdminSummary, ChefOutput, CustomerOutput
from rest_api.services.base_service import BaseCRUDService
from shared.config.constants import AdminRole
from shared.config.logging import audit_auth_event, get_logger, mask_email
from shared.security.password import hash_password, verify_password
from shared.utils.exceptions import AuthenticationError, ConflictError, ValidationError

logger = get_logger(__name__)


class AccountService(BaseCRUDService):
    """
    Shared behaviour for restaurant-scoped credential holders.

    Subclasses set `required_fields` and `missing_message`.
    """

    required_fields: tuple[str, ...] = ("email", "password")
    missing_message: str = "Email and password are required"
    invalid_login_message: str = "Invalid email or password"

    # =========================================================================
    # Authentication
    # =========================================================================

    def login(self, restaurant_id: str, email: str | None, password: str | None):
        """
        Check email + password against the stored bcrypt hash.

        Raises:
            ValidationError: Email or password missing.
            AuthenticationError: Unknown email or wrong password.
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        account = self._repo.find_by_email(restaurant_id, email)
        if account is None or not verify_password(password, account.password):
            audit_auth_event(
                f"{self._entity_name.upper()}_LOGIN",
                email=email,
                success=False,
                reason="invalid_credentials",
                restaurant_id=restaurant_id,
            )
            raise AuthenticationError(self.invalid_login_message, email=mask_email(email))

        audit_auth_event(
            f"{self._entity_name.upper()}_LOGIN",
            account_id=getattr(account, self._repo.id_column.key),
            email=email,
            restaurant_id=restaurant_id,
        )
        return self.to_output(account)

    # =========================================================================
    # Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any], restaurant_id: str | None) -> None:
        if any(not data.get(name) for name in self.required_fields):
            raise ValidationError(self.missing_message)
        self._ensure_email_free(restaurant_id, data["email"])

    def _validate_update(self, entity: Any, data: dict[str, Any], restaurant_id: str | None) -> None:
        # Credentials can be changed but never cleared
        for name in ("email", "password"):
            value = data.get(name)
            if value is not None and not str(value).strip():
                raise ValidationError(f"{name.capitalize()} cannot be empty")
        new_email = data.get("email")
        if new_email and new_email.lower() != entity.email.lower():
            self._ensure_email_free(restaurant_id, new_email)

    def _prepare_create(self, data: dict[str, Any], restaurant_id: str | None) -> dict[str, Any]:
        data = super()._prepare_create(data, restaurant_id)
        data["password"] = hash_password(data["password"])
        return data

    def _prepare_update(self, entity: Any, data: dict[str, Any]) -> dict[str, Any]:
        data = {k: v for k, v in data.items() if v is not None}
        if data.get("password"):
            data["password"] = hash_password(data["password"])
        return data

    def _ensure_email_free(self, restaurant_id: str | None, email: str) -> None:
        if self._repo.find_by_email(restaurant_id, email) is not None:
            raise ConflictError("Email already in use", email=mask_email(email))


class CustomerService(AccountService):
    """Service for restaurant customers (CUSTOMER-N)."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            repo=CustomerRepository(db),
            output_schema=CustomerOutput,
            entity_name="Customer",
        )

    def _prepare_create(self, data: dict[str, Any], restaurant_id: str | None) -> dict[str, Any]:
        data = super()._prepare_create(data, restaurant_id)
        data["customer_id"] = self._repo.allocate_id()
        data["images"] = data.get("images") or []
        return data

    def _after_create(self, entity: Customer) -> None:
        logger.info(
            "Customer created",
            customer_id=entity.customer_id,
            restaurant_id=entity.restaurant_id,
            email=mask_email(entity.email),
        )


class ChefService(AccountService):
    """Service for kitchen chefs (CHEF-N)."""

    required_fields = ("name", "email", "password")
    missing_message = "Name, email and password are required"

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            repo=ChefRepository(db),
            output_schema=ChefOutput,
            entity_name="Chef",
        )

    def _prepare_create(self, data: dict[str, Any], restaurant_id: str | None) -> dict[str, Any]:
        data = super()._prepare_create(data, restaurant_id)
        data["chef_id"] = self._repo.allocate_id()
        return data

    def _after_create(self, entity: Chef) -> None:
        logger.info("Chef created", chef_id=entity.chef_id, restaurant_id=entity.restaurant_id)


class AdminService(AccountService):
    """
    Service for restaurant admins.

    Business rules:
    - Role is Manager or Chef
    - Id is "{Role}-{number of admins with that role in the restaurant + 1}"
    - Passwords are bcrypt-hashed like every other account
    """

    required_fields = ("email", "password", "role")
    missing_message = "Email, password and role are required"
    invalid_login_message = "Invalid credentials"

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            repo=AdminRepository(db),
            output_schema=AdminOutput,
            entity_name="Admin",
        )

    def list_chefs(self, restaurant_id: str) -> list[AdminOutput]:
        return self.to_outputs(self._repo.find_by(restaurant_id, role=AdminRole.CHEF.value))

    def login(self, restaurant_id: str, email: str | None, password: str | None) -> AdminSummary:
        admin = super().login(restaurant_id, email, password)
        return AdminSummary.model_validate(admin.model_dump())

    def _validate_create(self, data: dict[str, Any], restaurant_id: str | None) -> None:
        super()._validate_create(data, restaurant_id)
        self._check_role(data["role"])

    def _validate_update(self, entity: Admin, data: dict[str, Any], restaurant_id: str | None) -> None:
        super()._validate_update(entity, data, restaurant_id)
        if data.get("role"):
            self._check_role(data["role"])

    def _prepare_create(self, data: dict[str, Any], restaurant_id: str | None) -> dict[str, Any]:
        data = super()._prepare_create(data, restaurant_id)
        data["admin_id"] = self._repo.allocate_role_id(restaurant_id, data["role"])
        data["images"] = data.get("images") or []
        return data

    def _after_create(self, entity: Admin) -> None:
        logger.info(
            "Admin created",
            admin_id=entity.admin_id,
            role=entity.role,
            restaurant_id=entity.restaurant_id,
        )

    @staticmethod
    def _check_role(role: str) -> None:
        allowed = [r.value for r in AdminRole]
        if role not in allowed:
            raise ValidationError(f"Role must be one of: {', '.join(allowed)}")
