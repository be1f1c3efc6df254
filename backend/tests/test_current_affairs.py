"""
Tests for current affairs content.

Tests cover:
- Daily items fall back to the bundled samples without provider keys
- Stored items are served again without refetching
- Exam filtering by category and relevance
- Search, quiz, trending, refresh, statistics and cleanup
- Search + AI enrichment with fake providers
"""

from contextlib import nullcontext
from datetime import date, timedelta

import pytest

from rest_api.models import CurrentAffair
from rest_api.services.domain import CurrentAffairsService, DailyGeneratorService
from rest_api.services.domain import current_affairs_rules as rules
from rest_api.services import scheduler
from rest_api.services.external import SearchError
from shared.config.constants import SEARCH_QUERIES
from tests.conftest import FakeAI

BASE = "/api/current-affairs"


class FakeSearch:
    """Custom Search stand-in returning one result per query."""

    def __init__(self, configured: bool = True, failing: set | None = None):
        self.configured = configured
        self.failing = failing or set()
        self.queries: list[str] = []

    async def search_news(self, query: str, num_results: int = 3, days: int = 7):
        self.queries.append(query)
        if query in self.failing:
            raise SearchError("quota exceeded")
        return [
            {
                "title": f"Headline about {query}",
                "snippet": "Parliament passed the bill today. It changes several rules for the states.",
                "link": "https://news.test/story",
                "displayLink": "news.test",
            }
        ]


class TestDailyCurrentAffairs:
    def test_sample_fallback_without_keys(self, client, db_session):
        response = client.get(f"{BASE}/daily")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["totalItems"] == 5
        assert data["date"] == date.today().isoformat()
        assert data["apiStatus"] == {"geminiAI": False, "geminiModel": "Not Available", "searchAPI": False}
        assert set(data["categories"]) == {"economics", "politics", "science", "environment", "government schemes"}

        ids = sorted(item["id"] for item in data["currentAffairs"])
        assert ids == [f"CA-{date.today():%Y%m%d}-{n}" for n in range(1, 6)]

    def test_stored_items_are_reused(self, client, db_session):
        client.get(f"{BASE}/daily")
        client.get(f"{BASE}/daily")

        assert db_session.query(CurrentAffair).count() == 5

    def test_invalid_date_is_400(self, client, db_session):
        response = client.get(f"{BASE}/daily", params={"date": "17-01-2025"})
        assert response.status_code == 400

    def test_items_are_ranked_by_relevance(self):
        ranked = rules.sort_by_relevance(rules.sample_items())
        assert ranked[0]["category"] == "economics"
        assert ranked[-1]["category"] == "science"


class TestExamAndQueries:
    @pytest.fixture(autouse=True)
    def stored(self, client, db_session):
        client.get(f"{BASE}/daily")

    def test_upsc_items(self, client):
        data = client.get(f"{BASE}/exam/upsc").json()["data"]

        assert data["examType"] == "UPSC"
        assert data["totalItems"] == 4
        categories = [item["category"] for item in data["currentAffairs"]]
        assert "government schemes" not in categories
        assert all(item["examRelevance"]["upsc"] >= 5 for item in data["currentAffairs"])

    def test_unknown_exam_is_400(self, client):
        assert client.get(f"{BASE}/exam/xyz").status_code == 400

    def test_search(self, client):
        data = client.get(f"{BASE}/search", params={"q": "isro"}).json()["data"]
        assert data["totalResults"] == 1
        assert data["results"][0]["category"] == "science"

        assert client.get(f"{BASE}/search").status_code == 400

    def test_category_and_range(self, client):
        data = client.get(f"{BASE}/category/Economics").json()["data"]
        assert data["totalItems"] == 1

        today = date.today().isoformat()
        data = client.get(f"{BASE}/range", params={"startDate": today, "endDate": today}).json()["data"]
        assert data["totalItems"] == 5
        assert client.get(f"{BASE}/range", params={"startDate": today}).status_code == 400

    def test_fallback_quiz(self, client):
        response = client.get(f"{BASE}/quiz", params={"count": 3, "difficulty": "easy"})

        assert response.status_code == 200
        quiz = response.json()["data"]
        assert quiz["totalQuestions"] == 3
        assert quiz["difficulty"] == "Easy"
        assert quiz["examType"] == "UPSC"
        assert quiz["generatedWith"] == "Fallback"
        assert quiz["id"].startswith("QUIZ-")

        assert client.get(f"{BASE}/quiz", params={"difficulty": "insane"}).status_code == 400

    def test_trending(self, client):
        data = client.get(f"{BASE}/trending").json()["data"]

        assert data["examType"] == "UPSC"
        assert data["totalTopics"] == 4
        assert all(t["frequency"] == 1 for t in data["trendingTopics"])

    def test_refresh(self, client, db_session):
        data = client.post(f"{BASE}/refresh", json={}).json()["data"]
        assert data["message"] == "Data is already up to date"

        data = client.post(f"{BASE}/refresh", json={"forceUpdate": True}).json()["data"]
        assert data["message"] == "Current affairs data refreshed successfully"
        assert db_session.query(CurrentAffair).count() == 10

    def test_health_and_statistics(self, client):
        health = client.get(f"{BASE}/health").json()["data"]
        assert health["status"] == "healthy"
        assert health["todayCount"] == 5
        assert health["features"]["sampleData"] == "Available"

        client.get(f"{BASE}/quiz")
        stats = client.get(f"{BASE}/statistics").json()["data"]
        assert stats["totalItems"] == 5
        assert stats["byCategory"]["economics"] == 1
        assert stats["quizzesByExam"] == {"UPSC": 1}


class TestProviders:
    @pytest.mark.asyncio
    async def test_search_results_are_enriched_by_ai(self, db_session):
        fake_ai = FakeAI(
            json_answer={
                "summary": "AI summary",
                "examRelevance": {"upsc": 12, "pcs": "7"},
                "importance": 9,
                "mcqQuestion": {"question": "Q?", "options": {"A": "1"}, "correctAnswer": "A"},
            }
        )
        search = FakeSearch()
        service = CurrentAffairsService(db_session, ai_client=fake_ai, search=search)

        items = await service.fetch_and_store(date(2025, 1, 17))

        assert len(items) == len(SEARCH_QUERIES)
        assert len(search.queries) == len(SEARCH_QUERIES)
        item = items[0]
        assert item.summary == "AI summary"
        assert item.exam_relevance["upsc"] == 10
        assert item.exam_relevance["pcs"] == 7
        assert item.exam_relevance["ssc"] == 5
        assert item.source == "news.test"

    @pytest.mark.asyncio
    async def test_rules_used_when_ai_is_off(self, db_session):
        service = CurrentAffairsService(db_session, ai_client=FakeAI(configured=False), search=FakeSearch())

        items = await service.fetch_and_store(date(2025, 1, 17))

        assert items[0].summary == "Parliament passed the bill today. It changes several rules for the states."
        assert items[0].mcq_question["correctAnswer"] == "D"

    @pytest.mark.asyncio
    async def test_failed_searches_fall_back_to_ai(self, db_session):
        fake_ai = FakeAI(json_answer={"title": "Generated item", "content": "Body", "importance": 6})
        search = FakeSearch(failing=set(SEARCH_QUERIES.values()))
        service = CurrentAffairsService(db_session, ai_client=fake_ai, search=search)

        items = await service.fetch_and_store(date(2025, 1, 17))

        # Every category answers with the same title; duplicates collapse
        assert len(items) == 1
        assert items[0].title == "Generated item"
        assert items[0].url == "#ai-generated"
        assert items[0].mcq_question["question"]

    @pytest.mark.asyncio
    async def test_ai_quiz(self, db_session):
        questions = [{"id": 1, "question": "Q1", "options": {"A": "x"}, "correctAnswer": "A"}]
        fake_ai = FakeAI(json_answer={"quizTitle": "Daily Quiz", "questions": questions})
        service = CurrentAffairsService(db_session, ai_client=fake_ai, search=FakeSearch(configured=False))

        quiz = await service.quiz(date(2025, 1, 17), "ssc", "hard", 5)

        assert quiz["quizTitle"] == "Daily Quiz"
        assert quiz["questions"] == questions
        assert quiz["generatedWith"] == "AI (fake-model)"
        assert quiz["examType"] == "SSC"


class TestDailyGenerator:
    @pytest.mark.asyncio
    async def test_generate_once_per_day(self, db_session):
        content = CurrentAffairsService(db_session, ai_client=FakeAI(configured=False), search=FakeSearch(False))
        generator = DailyGeneratorService(db_session, content_service=content)
        day = date(2025, 1, 17)

        first = await generator.generate_daily(day)
        second = await generator.generate_daily(day)

        assert first["generated"] is True
        assert first["count"] == 5
        assert second["generated"] is False
        assert second["count"] == 5

    def test_cleanup_removes_old_items(self, db_session):
        old = date.today() - timedelta(days=40)
        db_session.add(CurrentAffair(id=f"CA-{old:%Y%m%d}-1", title="Old news", date=old))
        db_session.add(CurrentAffair(id=f"CA-{date.today():%Y%m%d}-1", title="Fresh news", date=date.today()))
        db_session.commit()

        removed = CurrentAffairsService(db_session).cleanup(30)

        assert removed == 1
        assert [i.title for i in db_session.query(CurrentAffair).all()] == ["Fresh news"]


class TestDailyScheduler:
    @pytest.mark.asyncio
    async def test_unexpected_error_is_reported_not_raised(self, db_session, monkeypatch):
        async def broken(self, day):
            raise RuntimeError("generator crashed")

        monkeypatch.setattr(scheduler.DailyGeneratorService, "generate_daily", broken)
        monkeypatch.setattr(scheduler, "get_db_context", lambda: nullcontext(db_session))

        result = await scheduler.DailyContentScheduler(hour=3, timezone="UTC").run_once()

        assert result["success"] is False
        assert result["generated"] is False
        assert result["error"] == "generator crashed"

    @pytest.mark.asyncio
    async def test_loop_survives_a_failed_day(self, monkeypatch):
        runs = []
        job = scheduler.DailyContentScheduler(hour=3, timezone="UTC")

        async def run_once():
            runs.append(len(runs))
            if len(runs) == 1:
                raise RuntimeError("first day failed")
            job._running = False
            return {"success": True}

        async def no_wait(delay):
            return None

        monkeypatch.setattr(job, "run_once", run_once)
        monkeypatch.setattr(scheduler.asyncio, "sleep", no_wait)
        job._running = True

        await job._run_loop()

        assert runs == [0, 1]
