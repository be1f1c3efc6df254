"""
Repository Pattern implementation.
Centralizes data access; services never build queries themselves.

Usage:
    from rest_api.repositories import get_order_repository

    repo = get_order_repository(db)
    orders = repo.find_all("restro-1", OrderFilters(customer_id="CUSTOMER-3"))
    order = repo.find_by_id("ORDER-12", "restro-1")
"""

from .base import BaseRepository, RepositoryFilters
from .restaurant import RestaurantRepository, get_restaurant_repository
from .account import (
    AdminRepository,
    ChefRepository,
    CustomerRepository,
    get_admin_repository,
    get_chef_repository,
    get_customer_repository,
)
from .dish import DishRepository, get_dish_repository
from .order import OrderRepository, OrderFilters, get_order_repository
from .dining_table import DiningTableRepository, get_dining_table_repository
from .robot import (
    RobotRepository,
    RobotCallRepository,
    get_robot_repository,
    get_robot_call_repository,
)
from .feedback import FeedbackRepository, get_feedback_repository
from .current_affairs import (
    CurrentAffairRepository,
    QuizRepository,
    TrendingTopicRepository,
    get_current_affair_repository,
    get_quiz_repository,
    get_trending_topic_repository,
)
from .app_user import (
    AppUserRepository,
    UserPreferencesRepository,
    UserStatsRepository,
    get_app_user_repository,
    get_user_preferences_repository,
    get_user_stats_repository,
)

__all__ = [
    # Base
    "BaseRepository",
    "RepositoryFilters",
    # Restaurant
    "RestaurantRepository",
    "get_restaurant_repository",
    # Accounts
    "AdminRepository",
    "ChefRepository",
    "CustomerRepository",
    "get_admin_repository",
    "get_chef_repository",
    "get_customer_repository",
    # Dish
    "DishRepository",
    "get_dish_repository",
    # Order
    "OrderRepository",
    "OrderFilters",
    "get_order_repository",
    # Table
    "DiningTableRepository",
    "get_dining_table_repository",
    # Robot
    "RobotRepository",
    "RobotCallRepository",
    "get_robot_repository",
    "get_robot_call_repository",
    # Feedback
    "FeedbackRepository",
    "get_feedback_repository",
    # Current affairs
    "CurrentAffairRepository",
    "QuizRepository",
    "TrendingTopicRepository",
    "get_current_affair_repository",
    "get_quiz_repository",
    "get_trending_topic_repository",
    # App users
    "AppUserRepository",
    "UserPreferencesRepository",
    "UserStatsRepository",
    "get_app_user_repository",
    "get_user_preferences_repository",
    "get_user_stats_repository",
]
