"""
Services module for business logic.

CLEAN ARCHITECTURE:
- domain/: Application services (business logic) - USE THESE
- external/: Outbound HTTP clients (Gemini, Google Search, robot dispatch)
- storage/: Dish image storage (local filesystem or S3)
- scheduler.py: Daily current-affairs generation task

Usage:
    from rest_api.services.domain import DishService
    service = DishService(db)
    dishes = service.list_all("restro-1")
"""

# CLEAN ARCHITECTURE: Domain Services
from .domain import (
    RestaurantService,
    AdminService,
    ChefService,
    CustomerService,
    DishService,
    OrderService,
    TableService,
    RobotService,
    RobotCallService,
    FeedbackService,
    OrderReportService,
    BusinessInsightsService,
    CurrentAffairsService,
    DailyGeneratorService,
    AppUserService,
    UserPreferencesService,
    UserStatsService,
)

# Base service classes for creating new domain services
from .base_service import (
    BaseService,
    BaseCRUDService,
)

__all__ = [
    # Domain services
    "RestaurantService",
    "AdminService",
    "ChefService",
    "CustomerService",
    "DishService",
    "OrderService",
    "TableService",
    "RobotService",
    "RobotCallService",
    "FeedbackService",
    "OrderReportService",
    "BusinessInsightsService",
    "CurrentAffairsService",
    "DailyGeneratorService",
    "AppUserService",
    "UserPreferencesService",
    "UserStatsService",
    # Base service classes
    "BaseService",
    "BaseCRUDService",
]
