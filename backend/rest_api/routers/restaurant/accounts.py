"""
Customer, Chef and Admin endpoints.

All three are scoped by the restaurant id in the path and share the
list / get / create / update / delete / login shape.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rest_api.schemas.accounts import (
    AdminCreate,
    AdminCreated,
    AdminLoginResponse,
    AdminOutput,
    AdminUpdate,
    ChefCreate,
    ChefOutput,
    ChefUpdate,
    CustomerCreate,
    CustomerOutput,
    CustomerUpdate,
    LoginRequest,
)
from rest_api.schemas.common import MessageResponse
from rest_api.services.domain import AdminService, ChefService, CustomerService
from shared.infrastructure.db import get_db

customer_router = APIRouter(prefix="/Customer/{restaurant_id}", tags=["customer"])
chef_router = APIRouter(prefix="/Chef/{restaurant_id}", tags=["chef"])
admin_router = APIRouter(prefix="/Admin/{restaurant_id}", tags=["admin"])


# =============================================================================
# Customer
# =============================================================================


@customer_router.get("", response_model=list[CustomerOutput])
def list_customers(restaurant_id: str, db: Session = Depends(get_db)) -> list[CustomerOutput]:
    return CustomerService(db).list_all(restaurant_id)


@customer_router.post("/login", response_model=CustomerOutput)
def login_customer(restaurant_id: str, body: LoginRequest, db: Session = Depends(get_db)) -> CustomerOutput:
    return CustomerService(db).login(restaurant_id, body.email, body.password)


@customer_router.get("/{customer_id}", response_model=CustomerOutput)
def get_customer(restaurant_id: str, customer_id: str, db: Session = Depends(get_db)) -> CustomerOutput:
    return CustomerService(db).get_by_id(customer_id, restaurant_id)


@customer_router.post("", response_model=CustomerOutput, status_code=status.HTTP_201_CREATED)
def create_customer(restaurant_id: str, body: CustomerCreate, db: Session = Depends(get_db)) -> CustomerOutput:
    return CustomerService(db).create(body.model_dump(exclude_none=True), restaurant_id)


@customer_router.put("/{customer_id}", response_model=CustomerOutput)
def update_customer(
    restaurant_id: str,
    customer_id: str,
    body: CustomerUpdate,
    db: Session = Depends(get_db),
) -> CustomerOutput:
    return CustomerService(db).update(customer_id, body.model_dump(exclude_unset=True), restaurant_id)


@customer_router.delete("/{customer_id}", response_model=MessageResponse)
def delete_customer(restaurant_id: str, customer_id: str, db: Session = Depends(get_db)) -> MessageResponse:
    CustomerService(db).delete(customer_id, restaurant_id)
    return MessageResponse(message="Customer deleted successfully")


# =============================================================================
# Chef
# =============================================================================


@chef_router.get("", response_model=list[ChefOutput])
def list_chefs(restaurant_id: str, db: Session = Depends(get_db)) -> list[ChefOutput]:
    return ChefService(db).list_all(restaurant_id)


@chef_router.post("/login", response_model=ChefOutput)
def login_chef(restaurant_id: str, body: LoginRequest, db: Session = Depends(get_db)) -> ChefOutput:
    return ChefService(db).login(restaurant_id, body.email, body.password)


@chef_router.get("/{chef_id}", response_model=ChefOutput)
def get_chef(restaurant_id: str, chef_id: str, db: Session = Depends(get_db)) -> ChefOutput:
    return ChefService(db).get_by_id(chef_id, restaurant_id)


@chef_router.post("", response_model=ChefOutput, status_code=status.HTTP_201_CREATED)
def create_chef(restaurant_id: str, body: ChefCreate, db: Session = Depends(get_db)) -> ChefOutput:
    return ChefService(db).create(body.model_dump(exclude_none=True), restaurant_id)


@chef_router.put("/{chef_id}", response_model=ChefOutput)
def update_chef(
    restaurant_id: str,
    chef_id: str,
    body: ChefUpdate,
    db: Session = Depends(get_db),
) -> ChefOutput:
    return ChefService(db).update(chef_id, body.model_dump(exclude_unset=True), restaurant_id)


@chef_router.delete("/{chef_id}", response_model=MessageResponse)
def delete_chef(restaurant_id: str, chef_id: str, db: Session = Depends(get_db)) -> MessageResponse:
    ChefService(db).delete(chef_id, restaurant_id)
    return MessageResponse(message="Chef deleted successfully")


# =============================================================================
# Admin
# =============================================================================


@admin_router.get("", response_model=list[AdminOutput])
def list_admins(restaurant_id: str, db: Session = Depends(get_db)) -> list[AdminOutput]:
    return AdminService(db).list_all(restaurant_id)


@admin_router.get("/chefs", response_model=list[AdminOutput])
def list_chef_admins(restaurant_id: str, db: Session = Depends(get_db)) -> list[AdminOutput]:
    """Admins holding the Chef role."""
    return AdminService(db).list_chefs(restaurant_id)


@admin_router.post("/login", response_model=AdminLoginResponse)
def login_admin(restaurant_id: str, body: LoginRequest, db: Session = Depends(get_db)) -> AdminLoginResponse:
    return AdminLoginResponse(admin=AdminService(db).login(restaurant_id, body.email, body.password))


@admin_router.get("/{admin_id}", response_model=AdminOutput)
def get_admin(restaurant_id: str, admin_id: str, db: Session = Depends(get_db)) -> AdminOutput:
    return AdminService(db).get_by_id(admin_id, restaurant_id)


@admin_router.post("", response_model=AdminCreated, status_code=status.HTTP_201_CREATED)
def create_admin(restaurant_id: str, body: AdminCreate, db: Session = Depends(get_db)) -> AdminCreated:
    admin = AdminService(db).create(body.model_dump(exclude_none=True), restaurant_id)
    return AdminCreated(adminId=admin.admin_id)


@admin_router.put("/{admin_id}", response_model=AdminOutput)
def update_admin(
    restaurant_id: str,
    admin_id: str,
    body: AdminUpdate,
    db: Session = Depends(get_db),
) -> AdminOutput:
    return AdminService(db).update(admin_id, body.model_dump(exclude_unset=True), restaurant_id)


@admin_router.delete("/{admin_id}", response_model=MessageResponse)
def delete_admin(restaurant_id: str, admin_id: str, db: Session = Depends(get_db)) -> MessageResponse:
    AdminService(db).delete(admin_id, restaurant_id)
    return MessageResponse(message="Admin deleted successfully")
