"""
Domain Services - Clean Architecture Application Layer.

CLEAN-ARCH: Services contain business logic and orchestrate operations.
They use Repositories for data access and raise AppException subclasses.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from rest_api.services.domain import OrderService

    # In router
    service = OrderService(db)
    order = service.create(body.model_dump(exclude_none=True), restaurant_id)
"""

from .restaurant_service import RestaurantService
from .account_service import AdminService, ChefService, CustomerService
from .dish_service import DishService
from .order_service import OrderService
from .table_service import TableService
from .robot_service import RobotService
from .robot_call_service import RobotCallService
from .feedback_service import FeedbackService

# Analytics
from .order_report_service import OrderReportService
from .business_insights_service import BusinessInsightsService

# Study app content and accounts
from .current_affairs_service import CurrentAffairsService
from .daily_generator_service import DailyGeneratorService
from .app_user_service import AppUserService
from .user_preferences_service import UserPreferencesService
from .user_stats_service import UserStatsService

__all__ = [
    # Restaurant operations
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
    # Analytics
    "OrderReportService",
    "BusinessInsightsService",
    # Study app
    "CurrentAffairsService",
    "DailyGeneratorService",
    "AppUserService",
    "UserPreferencesService",
    "UserStatsService",
]
