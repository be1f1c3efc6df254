"""
SQLAlchemy ORM Models Package.

All models are organized into domain-specific modules:
- base: Base class and TimestampMixin
- restaurant: Restaurant (tenant root)
- customer: Customer, Chef
- admin: Admin
- dish: Dish
- order: Order
- dining_table: DiningTable
- robot: Robot, RobotCallRequest
- feedback: Feedback
- current_affairs: CurrentAffair, TrendingTopic, CurrentAffairsQuiz
- app_user: AppUser, UserPreferences, UserStats
"""

from .base import Base, TimestampMixin
from .restaurant import Restaurant
from .customer import Customer, Chef
from .admin import Admin
from .dish import Dish
from .order import Order
from .dining_table import DiningTable
from .robot import Robot, RobotCallRequest
from .feedback import Feedback
from .current_affairs import CurrentAffair, TrendingTopic, CurrentAffairsQuiz
from .app_user import AppUser, UserPreferences, UserStats

__all__ = [
    "Base",
    "TimestampMixin",
    "Restaurant",
    "Customer",
    "Chef",
    "Admin",
    "Dish",
    "Order",
    "DiningTable",
    "Robot",
    "RobotCallRequest",
    "Feedback",
    "CurrentAffair",
    "TrendingTopic",
    "CurrentAffairsQuiz",
    "AppUser",
    "UserPreferences",
    "UserStats",
]
