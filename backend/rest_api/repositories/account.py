"""
Account repositories: Customer, Chef, Admin.
All three look accounts up by email inside one restaurant.
"""

from sqlalchemy import select, func
from sqlalchemy.orm import Session, InstrumentedAttribute

from rest_api.models import Admin, Chef, Customer
from shared.config.constants import IdPrefix
from .base import BaseRepository


class _EmailLookupMixin:
    def find_by_email(self, restaurant_id: str, email: str):
        query = select(self.model).where(
            self.model.restaurant_id == restaurant_id,
            func.lower(self.model.email) == email.strip().lower(),
        )
        return self._db.scalar(query.limit(1))


class CustomerRepository(_EmailLookupMixin, BaseRepository[Customer]):
    id_prefix = IdPrefix.CUSTOMER

    @property
    def model(self) -> type[Customer]:
        return Customer

    @property
    def id_column(self) -> InstrumentedAttribute:
        return Customer.customer_id


class ChefRepository(_EmailLookupMixin, BaseRepository[Chef]):
    id_prefix = IdPrefix.CHEF

    @property
    def model(self) -> type[Chef]:
        return Chef

    @property
    def id_column(self) -> InstrumentedAttribute:
        return Chef.chef_id


class AdminRepository(_EmailLookupMixin, BaseRepository[Admin]):
    """Admin ids depend on the role, so allocate_role_id() replaces allocate_id()."""

    @property
    def model(self) -> type[Admin]:
        return Admin

    @property
    def id_column(self) -> InstrumentedAttribute:
        return Admin.admin_id

    def count_by_role(self, restaurant_id: str, role: str) -> int:
        query = select(func.count()).select_from(Admin).where(
            Admin.restaurant_id == restaurant_id, Admin.role == role
        )
        return self._db.scalar(query) or 0

    def allocate_role_id(self, restaurant_id: str, role: str) -> str:
        """
        "{Role}-{count + 1}", stepping past ids left by deleted admins.
        """
        number = self.count_by_role(restaurant_id, role) + 1
        while self.exists(f"{role}-{number}", restaurant_id):
            number += 1
        return f"{role}-{number}"


def get_customer_repository(db: Session) -> CustomerRepository:
    return CustomerRepository(db)


def get_chef_repository(db: Session) -> ChefRepository:
    return ChefRepository(db)


def get_admin_repository(db: Session) -> AdminRepository:
    return AdminRepository(db)
