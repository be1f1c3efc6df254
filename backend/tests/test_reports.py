"""
Tests for order report statistics and business insights.

Tests cover:
- Order report headline numbers and rankings
- Date window validation
- Rule-based insights (quick, health score, revenue, customers, operations)
- AI insights with a fake provider, and 503 when none is configured
"""

from datetime import date, time, timedelta

import pytest

from rest_api.models import Customer, Order
from rest_api.services.domain.business_insights_service import (
    customer_segments,
    health_score,
    health_status,
    parse_date_range,
    revenue_summary,
    standard_deviation,
)
from shared.utils.exceptions import ValidationError
from tests.conftest import RESTAURANT_ID


@pytest.fixture
def orders(db_session, seed_dishes, seed_customer):
    """Three orders placed today; two paid, one served."""
    today = date.today()
    db_session.add(
        Customer(
            customer_id="CUSTOMER-2",
            restaurant_id=RESTAURANT_ID,
            name="Vikram",
            email="vikram@test.com",
            password="x",
            images=[],
        )
    )
    rows = [
        Order(
            order_id="ORDER-1",
            customer_id="CUSTOMER-1",
            restaurant_id=RESTAURANT_ID,
            table_no=1,
            amount=300,
            dishes=[{"DishId": "DISH-1", "Quantity": 3}],
            order_date=today,
            order_time=time(12, 30),
            payment_status="PAID",
            serving_status="SERVED",
        ),
        Order(
            order_id="ORDER-2",
            customer_id="CUSTOMER-1",
            restaurant_id=RESTAURANT_ID,
            table_no=1,
            amount=80,
            dishes=[{"DishId": "DISH-2", "Quantity": 1}],
            order_date=today,
            order_time=time(13, 15),
        ),
        Order(
            order_id="ORDER-3",
            customer_id="CUSTOMER-2",
            restaurant_id=RESTAURANT_ID,
            table_no=2,
            amount=180,
            dishes=[{"DishId": "DISH-1", "Quantity": 1}, {"DishId": "DISH-2", "Quantity": 1}],
            order_date=today,
            order_time=time(12, 5),
            payment_status="PAID",
            serving_status="PREPARING",
        ),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows


def window() -> dict:
    today = date.today()
    return {
        "startDate": (today - timedelta(days=7)).isoformat(),
        "endDate": today.isoformat(),
        "restaurantId": RESTAURANT_ID,
    }


class TestOrderReport:
    def test_statistics(self, client, orders):
        response = client.get("/orderReport/statistics", params=window())

        assert response.status_code == 200
        stats = response.json()
        assert stats["totalOrders"] == 3
        assert stats["totalRevenue"] == 480
        assert stats["avgOrderValue"] == 186.67
        assert stats["completedOrders"] == 1
        assert stats["pendingOrders"] == 2
        assert stats["paidOrders"] == 2
        assert stats["unpaidOrders"] == 1
        assert stats["ordersByTime"] == [{"hour": 12, "order_count": 2}, {"hour": 13, "order_count": 1}]
        assert stats["topTables"][0] == {"Table No": 1, "order_count": 2, "table_revenue": 380}

    def test_rankings(self, client, orders):
        stats = client.get("/orderReport/statistics", params=window()).json()

        top_dish = stats["dishPopularity"][0]
        assert top_dish["dish_id"] == "DISH-1"
        assert top_dish["dish_name"] == "Masala Dosa"
        assert top_dish["order_frequency"] == 2
        assert top_dish["quantity_sold"] == 4

        customers = stats["customerInsights"]
        assert customers["totalCustomers"] == 2
        assert customers["avgOrdersPerCustomer"] == 1.5
        assert customers["topCustomers"][0]["customer_name"] == "Asha"

        titles = [i["title"] for i in stats["insights"]]
        assert titles[:2] == ["Business Performance", "Revenue Analysis"]
        assert "Menu Intelligence" in titles

    def test_empty_window(self, client, db_session):
        stats = client.get("/orderReport/statistics").json()

        assert stats["totalOrders"] == 0
        assert stats["avgOrderValue"] == 0.0
        assert stats["dishPopularity"] == []

    def test_reversed_window_is_400(self, client, db_session):
        response = client.get("/orderReport/statistics", params={"startDate": "2024-02-01", "endDate": "2024-01-01"})
        assert response.status_code == 400

    def test_preview_and_health(self, client, orders):
        preview = client.get("/orderReport/preview", params={"restaurantId": RESTAURANT_ID}).json()
        assert preview["summary"]["totalOrders"] == 3
        assert preview["summary"]["paymentRate"] == 66.7
        assert len(preview["recentOrders"]) == 3

        assert client.get("/orderReport/health").json() == {
            "status": "healthy",
            "database": "connected",
            "totalOrders": 3,
        }


class TestRuleBasedInsights:
    def test_quick(self, client, orders):
        response = client.get("/api/insights/quick", params={"restaurantId": RESTAURANT_ID})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["metrics"]["total_revenue"] == 480
        assert data["metrics"]["avg_order_value"] == 240
        assert data["metrics"]["unique_customers"] == 2
        assert [r["type"] for r in data["quickRecommendations"]] == ["revenue", "operational", "menu", "customer"]

    def test_health_score(self, client, orders):
        data = client.get("/api/insights/health-score").json()["data"]

        assert 0 <= data["healthScore"] <= 100
        assert data["healthStatus"] == health_status(data["healthScore"])
        assert len(data["factors"]) == 5

    def test_revenue_customers_operations(self, client, orders):
        revenue = client.get("/api/insights/revenue", params=window()).json()["data"]
        assert revenue["summary"]["totalRevenue"] == 480
        assert revenue["summary"]["totalDays"] == 1

        customers = client.get("/api/insights/customers", params=window()).json()["data"]
        assert customers["summary"]["totalCustomers"] == 2
        assert customers["customers"][0]["customer_id"] == "CUSTOMER-1"

        operations = client.get("/api/insights/operations", params=window()).json()["data"]
        assert operations["peakHour"]["hour"] == 12
        assert operations["mostUsedTable"]["table_no"] == 1

    @pytest.mark.parametrize(
        "params",
        [
            {},
            {"startDate": "2024-01-01"},
            {"startDate": "01/01/2024", "endDate": "2024-01-02"},
            {"startDate": "2024-03-01", "endDate": "2024-01-01"},
            {"startDate": "2023-01-01", "endDate": "2024-01-02"},
        ],
    )
    def test_range_is_validated(self, client, db_session, params):
        assert client.get("/api/insights/revenue", params=params).status_code == 400


class TestAIInsights:
    ANALYSIS = {
        "executiveSummary": {"keyFindings": ["Dosa sells"], "businessHealth": "Good"},
        "recommendations": {"immediate": ["Add combos"], "shortTerm": ["Loyalty card", "Lunch menu"]},
    }

    def test_full_insights(self, client, orders, fake_ai):
        fake_ai.json_answer = self.ANALYSIS

        response = client.get("/api/insights", params=window())

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["insights"] == self.ANALYSIS
        assert data["summary"] == "Summary text"
        assert data["analyticsData"]["overallMetrics"]["total_orders"] == 3
        assert len(fake_ai.prompts) == 3

    def test_recommendations_filtered_by_type(self, client, orders, fake_ai):
        fake_ai.json_answer = self.ANALYSIS

        data = client.get("/api/insights/recommendations", params={**window(), "type": "shortTerm"}).json()["data"]

        assert data["recommendations"] == {"shortTerm": ["Loyalty card", "Lunch menu"]}
        assert data["totalRecommendations"] == 2

    def test_non_object_analysis_is_502(self, client, orders, fake_ai):
        fake_ai.json_answer = ["not", "an", "object"]
        assert client.get("/api/insights", params=window()).status_code == 502

    def test_unconfigured_provider_is_503(self, client, orders, fake_ai):
        fake_ai.configured = False

        assert client.get("/api/insights", params=window()).status_code == 503
        assert client.get("/api/insights/health-check").json()["aiConfigured"] is False
        assert client.get("/api/insights/quick").status_code == 200


class TestInsightFormulas:
    def test_perfect_health_score(self):
        metrics = {
            "total_orders": 10,
            "successful_orders": 10,
            "avg_order_value": 900,
            "unique_customers": 9,
            "tables_used": 12,
        }
        result = health_score(metrics, [100.0, 100.0, 100.0])
        assert result["healthScore"] == 100
        assert result["healthStatus"] == "Excellent"

    def test_empty_health_score(self):
        metrics = {
            "total_orders": 0,
            "successful_orders": 0,
            "avg_order_value": 0.0,
            "unique_customers": 0,
            "tables_used": 0,
        }
        result = health_score(metrics, [])
        assert result["healthScore"] == 26
        assert result["healthStatus"] == "Poor"

    @pytest.mark.parametrize("score,status", [(85, "Excellent"), (70, "Good"), (55, "Average"), (54, "Poor")])
    def test_health_status_bands(self, score, status):
        assert health_status(score) == status

    def test_revenue_growth_compares_halves(self):
        daily = [
            {"order_date": "2024-01-01", "daily_revenue": 100.0},
            {"order_date": "2024-01-02", "daily_revenue": 200.0},
        ]
        summary = revenue_summary(daily)
        assert summary["growthRate"] == 100.0
        assert summary["peakRevenueDay"] == "2024-01-02"
        assert summary["avgDailyRevenue"] == 150.0

    def test_customer_segments(self):
        customers = [{"total_spent": 400.0}, {"total_spent": 100.0}, {"total_spent": 100.0}]
        segments = customer_segments(customers)
        assert segments["highValue"]["count"] == 1
        assert segments["regular"]["count"] == 2
        assert segments["lowValue"]["count"] == 0

    def test_standard_deviation(self):
        assert standard_deviation([]) == 0.0
        assert standard_deviation([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]) == 2.0

    def test_parse_date_range_errors(self):
        with pytest.raises(ValidationError):
            parse_date_range("2024-01-10", "2024-01-01")
        assert parse_date_range("2024-01-01", "2024-01-31") == (date(2024, 1, 1), date(2024, 1, 31))
