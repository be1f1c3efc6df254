"""
Order Report Service.

JSON statistics over a date window of orders: revenue, status split,
per-day and per-hour volume, busiest tables, dish popularity, repeat
customers, plus rule-based insight text.

Aggregation is done in Python over the window's orders so the same code
runs on PostgreSQL and SQLite.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from datetime import date, timedelta
from typing import Any, Iterable, Sequence

from sqlalchemy import select, text
from sqlalchemy.orm import Session

from rest_api.models import Customer, Dish, Order
from rest_api.repositories import OrderRepository
from shared.config.constants import Limits, PaymentStatus, ServingStatus
from shared.config.logging import get_logger
from shared.utils.exceptions import ValidationError

logger = get_logger(__name__)

COMPLETED = ServingStatus.SERVED.value
PAID = PaymentStatus.PAID.value


# =============================================================================
# Pure aggregation
# =============================================================================


def order_statistics(orders: Sequence[Any]) -> dict[str, Any]:
    """Headline numbers and breakdowns for a list of orders."""
    total = len(orders)
    paid = [o for o in orders if o.payment_status == PAID]
    completed = sum(1 for o in orders if o.serving_status == COMPLETED)
    pending = sum(1 for o in orders if o.serving_status in (ServingStatus.PENDING.value, ServingStatus.PREPARING.value))
    amounts = [o.amount or 0 for o in orders]

    by_day: dict[date, dict[str, float]] = defaultdict(lambda: {"order_count": 0, "daily_revenue": 0.0})
    by_hour: Counter = Counter()
    by_table: dict[int, dict[str, float]] = defaultdict(lambda: {"order_count": 0, "table_revenue": 0.0})
    for order in orders:
        day = by_day[order.order_date]
        day["order_count"] += 1
        day["daily_revenue"] += order.amount or 0
        if order.order_time is not None:
            by_hour[order.order_time.hour] += 1
        if order.table_no is not None:
            table = by_table[order.table_no]
            table["order_count"] += 1
            table["table_revenue"] += order.amount or 0

    orders_by_day = [
        {"order_date": d.isoformat(), "order_count": v["order_count"], "daily_revenue": round(v["daily_revenue"], 2)}
        for d, v in sorted(by_day.items(), reverse=True)
    ][:30]
    orders_by_time = [{"hour": h, "order_count": c} for h, c in sorted(by_hour.items())]
    top_tables = sorted(
        (
            {"Table No": t, "order_count": v["order_count"], "table_revenue": round(v["table_revenue"], 2)}
            for t, v in by_table.items()
        ),
        key=lambda row: (-row["order_count"], -row["table_revenue"], row["Table No"]),
    )[:10]

    return {
        "totalOrders": total,
        "totalRevenue": round(sum(o.amount or 0 for o in paid), 2),
        "avgOrderValue": round(sum(amounts) / total, 2) if total else 0.0,
        "completedOrders": completed,
        "pendingOrders": pending,
        "paidOrders": len(paid),
        "unpaidOrders": total - len(paid),
        "ordersByDay": orders_by_day,
        "ordersByTime": orders_by_time,
        "topTables": top_tables,
    }


def dish_popularity(orders: Iterable[Any], dishes: dict[str, Any], limit: int = 10) -> list[dict[str, Any]]:
    """Dishes ranked by how many orders include them, then by quantity sold."""
    frequency: Counter = Counter()
    quantity: Counter = Counter()
    for order in orders:
        seen = set()
        for line in order.dishes or []:
            dish_id = line.get("DishId") if isinstance(line, dict) else None
            if not dish_id:
                continue
            quantity[dish_id] += line.get("Quantity") or 0
            if dish_id not in seen:
                frequency[dish_id] += 1
                seen.add(dish_id)

    ranked = sorted(frequency, key=lambda d: (-frequency[d], -quantity[d], d))[:limit]
    result = []
    for dish_id in ranked:
        dish = dishes.get(dish_id)
        result.append(
            {
                "dish_id": dish_id,
                "dish_name": dish.name if dish else None,
                "dish_price": dish.price if dish else None,
                "dish_rating": dish.rating if dish else None,
                "order_frequency": frequency[dish_id],
                "quantity_sold": quantity[dish_id],
            }
        )
    return result


def customer_insights(orders: Iterable[Any], names: dict[str, str | None], limit: int = 10) -> dict[str, Any]:
    counts: Counter = Counter()
    spent: dict[str, float] = defaultdict(float)
    for order in orders:
        if not order.customer_id:
            continue
        counts[order.customer_id] += 1
        spent[order.customer_id] += order.amount or 0

    top = sorted(counts, key=lambda c: (-counts[c], -spent[c], c))[:limit]
    return {
        "totalCustomers": len(counts),
        "avgOrdersPerCustomer": round(sum(counts.values()) / len(counts), 2) if counts else 0.0,
        "topCustomers": [
            {
                "customer_id": c,
                "customer_name": names.get(c),
                "order_count": counts[c],
                "total_spent": round(spent[c], 2),
            }
            for c in top
        ],
    }


def report_insights(stats: dict[str, Any], dishes: list[dict], customers: dict[str, Any]) -> list[dict[str, str]]:
    """Rule-based commentary on the statistics."""
    total = stats["totalOrders"]
    completion_rate = round(stats["completedOrders"] / total * 100, 1) if total else 0.0
    payment_rate = round(stats["paidOrders"] / total * 100, 1) if total else 0.0
    avg = stats["avgOrderValue"]

    if payment_rate > 90:
        payment_word = "excellent"
    elif payment_rate > 75:
        payment_word = "good"
    else:
        payment_word = "room for improvement"

    if avg > 400:
        positioning = "premium positioning"
    elif avg > 250:
        positioning = "mid-range appeal"
    else:
        positioning = "value-focused strategy"

    insights = [
        {
            "title": "Business Performance",
            "content": (
                f"Your restaurant has processed {total} orders with a {completion_rate}% completion rate. "
                f"Payment collection stands at {payment_rate}%, showing {payment_word} financial performance."
            ),
        },
        {
            "title": "Revenue Analysis",
            "content": (
                f"Total revenue: {stats['totalRevenue']:,.2f}. "
                f"Average order value of {avg:.2f} indicates {positioning}."
            ),
        },
    ]

    if stats["ordersByTime"]:
        peak = max(stats["ordersByTime"], key=lambda row: row["order_count"])
        insights.append(
            {
                "title": "Peak Performance",
                "content": (
                    f"Peak ordering time is {peak['hour']}:00 with {peak['order_count']} orders. "
                    "Consider optimizing staff allocation during this period."
                ),
            }
        )

    if stats["topTables"]:
        top_table = stats["topTables"][0]
        insights.append(
            {
                "title": "Table Analytics",
                "content": (
                    f"Table {top_table['Table No']} leads with {top_table['order_count']} orders "
                    f"generating {top_table['table_revenue']:,.2f}."
                ),
            }
        )

    if dishes and dishes[0]["dish_name"]:
        insights.append(
            {
                "title": "Menu Intelligence",
                "content": (
                    f"\"{dishes[0]['dish_name']}\" is the most ordered dish. "
                    "Consider featuring similar items or creating combo offers."
                ),
            }
        )

    insights.append(
        {
            "title": "Customer Insights",
            "content": (
                f"{customers['totalCustomers']} unique customers with an average of "
                f"{customers['avgOrdersPerCustomer']:.1f} orders each."
            ),
        }
    )

    recommendations = []
    if total:
        if stats["pendingOrders"] > total * 0.2:
            recommendations.append("Optimize kitchen workflow to reduce completion time")
        if stats["unpaidOrders"] > total * 0.1:
            recommendations.append("Implement automated payment reminders")
        if avg < 300:
            recommendations.append("Introduce upselling strategies and combo meals")
    if recommendations:
        insights.append({"title": "Strategic Recommendations", "content": ". ".join(recommendations) + "."})

    return insights


# =============================================================================
# Service
# =============================================================================


class OrderReportService:
    """Service for order report data."""

    def __init__(self, db: Session):
        self._db = db
        self._orders = OrderRepository(db)

    @staticmethod
    def resolve_window(start_date: date | None, end_date: date | None) -> tuple[date, date]:
        """
        Default window is the last DEFAULT_REPORT_DAYS days.

        Raises:
            ValidationError: start after end.
        """
        end = end_date or date.today()
        start = start_date or end - timedelta(days=Limits.DEFAULT_REPORT_DAYS)
        if start > end:
            raise ValidationError("startDate must be before or equal to endDate")
        return start, end

    def statistics(
        self,
        restaurant_id: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> dict[str, Any]:
        start, end = self.resolve_window(start_date, end_date)
        orders = self._orders.find_in_range(start, end, restaurant_id)

        stats = order_statistics(orders)
        dishes = dish_popularity(orders, self._dish_index(orders))
        customers = customer_insights(orders, self._customer_names(orders))
        logger.info("Order statistics computed", restaurant_id=restaurant_id, orders=len(orders))
        return {
            "dateRange": {"startDate": start.isoformat(), "endDate": end.isoformat()},
            **stats,
            "dishPopularity": dishes,
            "customerInsights": customers,
            "insights": report_insights(stats, dishes, customers),
        }

    def preview(self, restaurant_id: str | None = None) -> dict[str, Any]:
        start, end = self.resolve_window(None, None)
        orders = self._orders.find_in_range(start, end, restaurant_id)
        stats = order_statistics(orders)
        total = stats["totalOrders"]
        recent = self._orders.find_recent(10, restaurant_id)
        return {
            "summary": {
                "totalOrders": total,
                "totalRevenue": stats["totalRevenue"],
                "avgOrderValue": stats["avgOrderValue"],
                "completionRate": round(stats["completedOrders"] / total * 100, 1) if total else 0.0,
                "paymentRate": round(stats["paidOrders"] / total * 100, 1) if total else 0.0,
            },
            "recentOrders": [
                {
                    "Order Id": o.order_id,
                    "Customer Id": o.customer_id,
                    "Table No": o.table_no,
                    "Amount": o.amount,
                    "Date": o.order_date.isoformat(),
                    "Payment Status": o.payment_status,
                    "Serving Status": o.serving_status,
                }
                for o in recent
            ],
            "topDishes": dish_popularity(orders, self._dish_index(orders), limit=5),
            "ordersByDay": stats["ordersByDay"][:7],
            "ordersByTime": stats["ordersByTime"],
            "topTables": stats["topTables"][:5],
        }

    def health(self, restaurant_id: str | None = None) -> dict[str, Any]:
        """Raises SQLAlchemyError when the database is unreachable."""
        self._db.execute(text("SELECT 1"))
        return {"database": "connected", "totalOrders": self._orders.count(restaurant_id)}

    def _dish_index(self, orders: Sequence[Order]) -> dict[str, Dish]:
        ids = {line.get("DishId") for o in orders for line in (o.dishes or []) if isinstance(line, dict)}
        ids.discard(None)
        if not ids:
            return {}
        rows = self._db.execute(select(Dish).where(Dish.dish_id.in_(ids))).scalars()
        return {d.dish_id: d for d in rows}

    def _customer_names(self, orders: Sequence[Order]) -> dict[str, str | None]:
        ids = {o.customer_id for o in orders if o.customer_id}
        if not ids:
            return {}
        rows = self._db.execute(select(Customer.customer_id, Customer.name).where(Customer.customer_id.in_(ids)))
        return {cid: name for cid, name in rows}
