"""
Business Insights Service.

CLEAN-ARCH: Analytics over a date range of orders:
- Metrics, revenue by day, customers, tables, hours, feedback
- Rule-based quick recommendations and a 0-100 health score
- Gemini analysis, trend commentary and executive summary

AI failures surface as ExternalServiceError (502, or 503 when no key is
configured); every other endpoint works without the AI provider.
"""

from __future__ import annotations

import json
import math
from collections import Counter, defaultdict
from datetime import date, datetime, timedelta, timezone
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import Customer, Dish, Feedback, Order
from rest_api.repositories import OrderRepository
from rest_api.services.external.gemini_client import (
    AINotConfiguredError,
    AIProviderError,
    GeminiClient,
    gemini_client,
)
from shared.config.constants import Limits, PaymentStatus
from shared.config.logging import get_logger
from shared.utils.exceptions import ExternalServiceError, ValidationError
from shared.utils.validators import parse_iso_date

logger = get_logger(__name__)

RECOMMENDATION_TYPES = ("immediate", "shortTerm", "longTerm")


# =============================================================================
# Date range
# =============================================================================


def parse_date_range(start: str | None, end: str | None) -> tuple[date, date]:
    """
    Validate a startDate/endDate query pair.

    Raises:
        ValidationError: Missing, malformed, reversed or longer than a year.
    """
    if not start or not end:
        raise ValidationError("Start date and end date are required")
    start_date, end_date = parse_iso_date(start), parse_iso_date(end)
    if start_date is None or end_date is None:
        raise ValidationError("Invalid date format. Use YYYY-MM-DD format")
    if start_date > end_date:
        raise ValidationError("Start date must be before end date")
    if (end_date - start_date).days > Limits.MAX_INSIGHT_RANGE_DAYS:
        raise ValidationError(f"Date range cannot exceed {Limits.MAX_INSIGHT_RANGE_DAYS} days")
    return start_date, end_date


def default_range(start: str | None, end: str | None, days: int = Limits.DEFAULT_REPORT_DAYS) -> tuple[date, date]:
    """Like parse_date_range, defaulting to the last `days` days when both are absent."""
    if not start and not end:
        today = date.today()
        return today - timedelta(days=days), today
    return parse_date_range(start, end)


# =============================================================================
# Pure analytics
# =============================================================================


def overall_metrics(orders: Sequence[Any]) -> dict[str, Any]:
    paid = [o for o in orders if o.payment_status == PaymentStatus.PAID.value]
    return {
        "total_orders": len(orders),
        "total_revenue": round(sum(o.amount or 0 for o in paid), 2),
        "avg_order_value": round(sum(o.amount or 0 for o in paid) / len(paid), 2) if paid else 0.0,
        "unique_customers": len({o.customer_id for o in orders if o.customer_id}),
        "tables_used": len({o.table_no for o in orders if o.table_no is not None}),
        "successful_orders": len(paid),
        "pending_orders": len(orders) - len(paid),
    }


def revenue_by_day(orders: Sequence[Any]) -> list[dict[str, Any]]:
    """Paid revenue and order count per day, oldest first."""
    days: dict[date, dict[str, float]] = defaultdict(lambda: {"order_count": 0, "daily_revenue": 0.0})
    for order in orders:
        bucket = days[order.order_date]
        bucket["order_count"] += 1
        if order.payment_status == PaymentStatus.PAID.value:
            bucket["daily_revenue"] += order.amount or 0
    return [
        {"order_date": d.isoformat(), "order_count": v["order_count"], "daily_revenue": round(v["daily_revenue"], 2)}
        for d, v in sorted(days.items())
    ]


def customer_analytics(orders: Sequence[Any], names: dict[str, str | None]) -> list[dict[str, Any]]:
    """Per-customer order count and spend, biggest spenders first."""
    counts: Counter = Counter()
    spent: dict[str, float] = defaultdict(float)
    last_seen: dict[str, date] = {}
    for order in orders:
        if not order.customer_id:
            continue
        counts[order.customer_id] += 1
        spent[order.customer_id] += order.amount or 0
        if order.customer_id not in last_seen or order.order_date > last_seen[order.customer_id]:
            last_seen[order.customer_id] = order.order_date
    rows = [
        {
            "customer_id": cid,
            "customer_name": names.get(cid),
            "order_count": counts[cid],
            "total_spent": round(spent[cid], 2),
            "avg_order_value": round(spent[cid] / counts[cid], 2),
            "last_order_date": last_seen[cid].isoformat(),
        }
        for cid in counts
    ]
    return sorted(rows, key=lambda r: (-r["total_spent"], r["customer_id"]))


def table_analytics(orders: Sequence[Any]) -> list[dict[str, Any]]:
    tables: dict[int, dict[str, float]] = defaultdict(lambda: {"order_count": 0, "revenue": 0.0})
    for order in orders:
        if order.table_no is None:
            continue
        tables[order.table_no]["order_count"] += 1
        tables[order.table_no]["revenue"] += order.amount or 0
    rows = [
        {
            "table_no": t,
            "order_count": v["order_count"],
            "revenue": round(v["revenue"], 2),
            "avg_order_value": round(v["revenue"] / v["order_count"], 2),
        }
        for t, v in tables.items()
    ]
    return sorted(rows, key=lambda r: (-r["order_count"], r["table_no"]))


def time_analytics(orders: Sequence[Any]) -> list[dict[str, Any]]:
    hours: dict[int, dict[str, float]] = defaultdict(lambda: {"order_count": 0, "revenue": 0.0})
    for order in orders:
        if order.order_time is None:
            continue
        hours[order.order_time.hour]["order_count"] += 1
        hours[order.order_time.hour]["revenue"] += order.amount or 0
    return [
        {"hour": h, "order_count": v["order_count"], "revenue": round(v["revenue"], 2)}
        for h, v in sorted(hours.items())
    ]


def popular_dishes(orders: Sequence[Any], dishes: dict[str, Any], limit: int = 10) -> list[dict[str, Any]]:
    quantity: Counter = Counter()
    for order in orders:
        for line in order.dishes or []:
            if isinstance(line, dict) and line.get("DishId"):
                quantity[line["DishId"]] += line.get("Quantity") or 0
    rows = []
    for dish_id, sold in sorted(quantity.items(), key=lambda kv: (-kv[1], kv[0]))[:limit]:
        dish = dishes.get(dish_id)
        rows.append(
            {
                "dish_id": dish_id,
                "dish_name": dish.name if dish else None,
                "price": dish.price if dish else None,
                "quantity": sold,
                "revenue": round(sold * dish.price, 2) if dish else None,
            }
        )
    return rows


def standard_deviation(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    return math.sqrt(sum((v - mean) ** 2 for v in values) / len(values))


def health_score(metrics: dict[str, Any], daily_revenue: Sequence[float]) -> dict[str, Any]:
    """
    0-100 score from five weighted factors:
    revenue consistency 30, order success 25, average order value 20,
    customer diversity 15, table utilisation 10.
    """
    score = 0
    factors = []
    total = metrics["total_orders"]

    mean_revenue = sum(daily_revenue) / len(daily_revenue) if daily_revenue else 0.0
    variation = standard_deviation(daily_revenue) / mean_revenue if mean_revenue else math.inf
    if variation < 0.3:
        score += 30
        factors.append("Consistent revenue stream")
    elif variation < 0.5:
        score += 20
        factors.append("Moderately consistent revenue")
    else:
        score += 10
        factors.append("Inconsistent revenue pattern")

    success_rate = metrics["successful_orders"] / total * 100 if total else 0.0
    if success_rate >= 95:
        score += 25
        factors.append("Excellent order success rate")
    elif success_rate >= 90:
        score += 20
        factors.append("Good order success rate")
    elif success_rate >= 85:
        score += 15
        factors.append("Average order success rate")
    else:
        score += 5
        factors.append("Poor order success rate")

    aov = metrics["avg_order_value"]
    if aov >= 800:
        score += 20
        factors.append("High average order value")
    elif aov >= 600:
        score += 15
        factors.append("Good average order value")
    elif aov >= 400:
        score += 10
        factors.append("Average order value")
    else:
        score += 5
        factors.append("Low average order value")

    diversity = metrics["unique_customers"] / total if total else 0.0
    if diversity >= 0.8:
        score += 15
        factors.append("High customer diversity")
    elif diversity >= 0.6:
        score += 12
        factors.append("Good customer diversity")
    elif diversity >= 0.4:
        score += 8
        factors.append("Average customer diversity")
    else:
        score += 3
        factors.append("Low customer diversity")

    if metrics["tables_used"] >= 10:
        score += 10
        factors.append("Good table utilization")
    elif metrics["tables_used"] >= 7:
        score += 7
        factors.append("Average table utilization")
    else:
        score += 3
        factors.append("Low table utilization")

    return {"healthScore": score, "healthStatus": health_status(score), "factors": factors}


def health_status(score: int) -> str:
    if score >= 85:
        return "Excellent"
    if score >= 70:
        return "Good"
    if score >= 55:
        return "Average"
    return "Poor"


def quick_recommendations(metrics: dict[str, Any], dishes: list[dict[str, Any]]) -> list[dict[str, str]]:
    recommendations = []
    total = metrics["total_orders"]

    if metrics["avg_order_value"] < 500:
        recommendations.append(
            {
                "type": "revenue",
                "priority": "high",
                "title": "Increase Average Order Value",
                "description": "Average order value is below 500. Consider upselling, combo meals or premium options.",
                "action": "Implement menu engineering and staff training for upselling",
            }
        )

    success_rate = metrics["successful_orders"] / total * 100 if total else 0.0
    if total and success_rate < 95:
        recommendations.append(
            {
                "type": "operational",
                "priority": "high",
                "title": "Improve Order Success Rate",
                "description": f"Current success rate is {success_rate:.1f}%. Focus on reducing unpaid and cancelled orders.",
                "action": "Review order processing workflow and payment collection",
            }
        )

    if dishes and dishes[0]["dish_name"]:
        recommendations.append(
            {
                "type": "menu",
                "priority": "medium",
                "title": "Capitalize on Popular Items",
                "description": f"{dishes[0]['dish_name']} is performing well. Consider variations or promoting similar items.",
                "action": "Develop menu items similar to top performers",
            }
        )

    if total and metrics["unique_customers"] < total * 0.7:
        recommendations.append(
            {
                "type": "customer",
                "priority": "medium",
                "title": "Improve Customer Retention",
                "description": "Low repeat customer rate detected. Implement loyalty programs and follow-up strategies.",
                "action": "Launch customer loyalty program and personalized marketing",
            }
        )
    return recommendations


def revenue_summary(daily: list[dict[str, Any]]) -> dict[str, Any]:
    """Totals, peak day and growth (second half average vs first half)."""
    if not daily:
        return {
            "totalRevenue": 0.0,
            "avgDailyRevenue": 0.0,
            "peakRevenueDay": None,
            "peakRevenueAmount": 0.0,
            "growthRate": 0.0,
            "totalDays": 0,
        }
    revenues = [d["daily_revenue"] for d in daily]
    total = sum(revenues)
    peak = max(daily, key=lambda d: d["daily_revenue"])

    growth = 0.0
    if len(daily) >= 2:
        half = len(daily) // 2
        first = sum(revenues[:half]) / half
        second = sum(revenues[half:]) / (len(revenues) - half)
        growth = (second - first) / first * 100 if first else 0.0

    return {
        "totalRevenue": round(total, 2),
        "avgDailyRevenue": round(total / len(daily), 2),
        "peakRevenueDay": peak["order_date"],
        "peakRevenueAmount": peak["daily_revenue"],
        "growthRate": round(growth, 2),
        "totalDays": len(daily),
    }


def customer_segments(customers: list[dict[str, Any]]) -> dict[str, Any]:
    """High value (>1.5x average spend), regular, low value (<0.5x)."""
    if not customers:
        empty = {"count": 0, "percentage": 0.0, "avgSpent": 0.0}
        return {"highValue": dict(empty), "regular": dict(empty), "lowValue": dict(empty)}

    average = sum(c["total_spent"] for c in customers) / len(customers)
    groups = {
        "highValue": [c for c in customers if c["total_spent"] > average * 1.5],
        "regular": [c for c in customers if average * 0.5 <= c["total_spent"] <= average * 1.5],
        "lowValue": [c for c in customers if c["total_spent"] < average * 0.5],
    }
    return {
        name: {
            "count": len(members),
            "percentage": round(len(members) / len(customers) * 100, 1),
            "avgSpent": round(sum(c["total_spent"] for c in members) / len(members), 2) if members else 0.0,
        }
        for name, members in groups.items()
    }


# =============================================================================
# Service
# =============================================================================


class BusinessInsightsService:
    """Service for analytics and AI business insights."""

    def __init__(self, db: Session, ai_client: GeminiClient | None = None):
        self._db = db
        self._orders = OrderRepository(db)
        self._ai = ai_client or gemini_client

    # =========================================================================
    # Data gathering
    # =========================================================================

    def gather(self, start: date, end: date, restaurant_id: str | None = None) -> dict[str, Any]:
        orders = self._orders.find_in_range(start, end, restaurant_id)
        return {
            "overallMetrics": overall_metrics(orders),
            "revenueAnalytics": revenue_by_day(orders),
            "popularDishes": popular_dishes(orders, self._dish_index(orders)),
            "customerAnalytics": customer_analytics(orders, self._customer_names(orders)),
            "tableAnalytics": table_analytics(orders),
            "timeBasedAnalytics": time_analytics(orders),
            "feedbackAnalytics": self._feedback(orders),
        }

    # =========================================================================
    # Rule-based endpoints
    # =========================================================================

    def quick(self, start: date, end: date, restaurant_id: str | None = None) -> dict[str, Any]:
        data = self.gather(start, end, restaurant_id)
        return {
            "metrics": data["overallMetrics"],
            "topDishes": data["popularDishes"][:5],
            "recentTrends": data["revenueAnalytics"][-7:],
            "quickRecommendations": quick_recommendations(data["overallMetrics"], data["popularDishes"]),
        }

    def health(self, start: date, end: date, restaurant_id: str | None = None) -> dict[str, Any]:
        data = self.gather(start, end, restaurant_id)
        result = health_score(
            data["overallMetrics"], [d["daily_revenue"] for d in data["revenueAnalytics"]]
        )
        result["metrics"] = data["overallMetrics"]
        result["assessmentDate"] = datetime.now(timezone.utc).isoformat()
        return result

    def revenue(self, start: date, end: date, restaurant_id: str | None = None) -> dict[str, Any]:
        data = self.gather(start, end, restaurant_id)
        return {
            "dailyRevenue": data["revenueAnalytics"],
            "summary": revenue_summary(data["revenueAnalytics"]),
            "overallMetrics": data["overallMetrics"],
        }

    def customers(self, start: date, end: date, restaurant_id: str | None = None) -> dict[str, Any]:
        customers = self.gather(start, end, restaurant_id)["customerAnalytics"]
        total_spending = sum(c["total_spent"] for c in customers)
        return {
            "customers": customers,
            "topCustomers": customers[:10],
            "segments": customer_segments(customers),
            "summary": {
                "totalCustomers": len(customers),
                "avgCustomerValue": round(total_spending / len(customers), 2) if customers else 0.0,
                "totalCustomerSpending": round(total_spending, 2),
            },
        }

    def operations(self, start: date, end: date, restaurant_id: str | None = None) -> dict[str, Any]:
        data = self.gather(start, end, restaurant_id)
        hours = data["timeBasedAnalytics"]
        tables = data["tableAnalytics"]
        metrics = data["overallMetrics"]
        return {
            "peakHour": max(hours, key=lambda h: h["order_count"]) if hours else None,
            "hourlyDistribution": hours,
            "tablePerformance": tables,
            "mostUsedTable": tables[0] if tables else None,
            "efficiency": {
                "orderSuccessRate": round(metrics["successful_orders"] / metrics["total_orders"] * 100, 1)
                if metrics["total_orders"]
                else 0.0,
                "tablesUsed": metrics["tables_used"],
                "avgOrdersPerTable": round(metrics["total_orders"] / len(tables), 2) if tables else 0.0,
            },
            "feedback": data["feedbackAnalytics"],
        }

    # =========================================================================
    # AI endpoints
    # =========================================================================

    async def full_insights(self, start: date, end: date, restaurant_id: str | None = None) -> dict[str, Any]:
        """
        Raises:
            ExternalServiceError: AI provider not configured (503) or failing (502).
        """
        data = self.gather(start, end, restaurant_id)
        try:
            analysis = await self._ai.generate_json(self._analysis_prompt(data))
            if not isinstance(analysis, dict):
                raise AIProviderError("AI analysis was not a JSON object")
            trends = await self._ai.generate(self._trends_prompt(data))
            summary = await self._ai.generate(self._summary_prompt(analysis, data))
        except AINotConfiguredError:
            raise ExternalServiceError("AI insights", is_unavailable=True)
        except AIProviderError as e:
            raise ExternalServiceError("AI insights", error=str(e))

        return {
            "insights": analysis,
            "trends": trends,
            "summary": summary,
            "analyticsData": data,
            "generatedAt": datetime.now(timezone.utc).isoformat(),
            "period": {"startDate": start.isoformat(), "endDate": end.isoformat()},
        }

    async def recommendations(
        self,
        start: date,
        end: date,
        restaurant_id: str | None = None,
        rec_type: str | None = None,
    ) -> dict[str, Any]:
        result = await self.full_insights(start, end, restaurant_id)
        insights = result["insights"]
        recommendations = insights.get("recommendations") or {}
        if not isinstance(recommendations, dict):
            recommendations = {"immediate": recommendations}
        if rec_type in RECOMMENDATION_TYPES:
            recommendations = {rec_type: recommendations.get(rec_type, [])}
        return {
            "recommendations": recommendations,
            "executiveSummary": insights.get("executiveSummary"),
            "marketingInsights": insights.get("marketingInsights"),
            "riskAnalysis": insights.get("riskAnalysis"),
            "totalRecommendations": sum(len(v) for v in recommendations.values() if isinstance(v, list)),
        }

    @property
    def ai_configured(self) -> bool:
        return self._ai.configured

    # =========================================================================
    # Prompts
    # =========================================================================

    @staticmethod
    def _analysis_prompt(data: dict[str, Any]) -> str:
        return (
            "You are an expert restaurant business analyst. Analyze the restaurant data below and "
            "answer with JSON only, no markdown, using this structure:\n"
            '{"executiveSummary": {"keyFindings": [], "businessHealth": "Excellent/Good/Average/Poor", '
            '"overallRating": "x/10", "criticalIssues": []}, '
            '"revenueInsights": {"trends": "", "peakDays": [], "revenueGrowth": "", "seasonality": ""}, '
            '"menuInsights": {"topPerformers": [], "underPerformers": [], "pricingOpportunities": []}, '
            '"customerInsights": {"behaviour": "", "retention": "", "segments": []}, '
            '"marketingInsights": {"opportunities": [], "campaigns": []}, '
            '"riskAnalysis": {"risks": [], "mitigations": []}, '
            '"recommendations": {"immediate": [], "shortTerm": [], "longTerm": []}}\n\n'
            f"DATA:\n{json.dumps(data, default=str)}"
        )

    @staticmethod
    def _trends_prompt(data: dict[str, Any]) -> str:
        return (
            "Analyze this restaurant revenue and hourly data. Identify revenue trends, seasonal "
            "patterns, peak periods, growth opportunities and concerns, with data-backed advice.\n\n"
            f"REVENUE:\n{json.dumps(data['revenueAnalytics'])}\n\n"
            f"HOURLY:\n{json.dumps(data['timeBasedAnalytics'])}"
        )

    @staticmethod
    def _summary_prompt(analysis: dict[str, Any], data: dict[str, Any]) -> str:
        return (
            "Write a concise executive summary for restaurant management covering performance, "
            "achievements, challenges, strategic recommendations, financial performance, customer "
            "satisfaction and operational efficiency.\n\n"
            f"INSIGHTS:\n{json.dumps(analysis, default=str)}\n\n"
            f"METRICS:\n{json.dumps(data['overallMetrics'])}"
        )

    # =========================================================================
    # Lookups
    # =========================================================================

    def _dish_index(self, orders: Sequence[Order]) -> dict[str, Dish]:
        ids = {line.get("DishId") for o in orders for line in (o.dishes or []) if isinstance(line, dict)}
        ids.discard(None)
        if not ids:
            return {}
        return {d.dish_id: d for d in self._db.execute(select(Dish).where(Dish.dish_id.in_(ids))).scalars()}

    def _customer_names(self, orders: Sequence[Order]) -> dict[str, str | None]:
        ids = {o.customer_id for o in orders if o.customer_id}
        if not ids:
            return {}
        rows = self._db.execute(select(Customer.customer_id, Customer.name).where(Customer.customer_id.in_(ids)))
        return {cid: name for cid, name in rows}

    def _feedback(self, orders: Sequence[Order]) -> list[dict[str, Any]]:
        order_ids = {o.order_id for o in orders}
        if not order_ids:
            return []
        rows = self._db.execute(select(Feedback).where(Feedback.order_id.in_(order_ids))).scalars()
        return [
            {
                "feedback_id": f.feedback_id,
                "order_id": f.order_id,
                "customer_id": f.customer_id,
                "feedback": f.feedback,
            }
            for f in rows
        ]
