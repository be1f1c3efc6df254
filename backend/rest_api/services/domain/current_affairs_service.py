"""
Current Affairs Service.

CLEAN-ARCH: Daily exam-oriented news items:
1. Stored items for the date are served as-is
2. Otherwise news is searched per category and enriched (AI, then rules)
3. Without search results, items are generated by the AI provider
4. Without either, the bundled sample items are stored

Quizzes, trending topics, exam filters, search and statistics read the
stored items. Provider failures never fail a request; they only change
which source the items come from.
"""

from __future__ import annotations

import time
from datetime import date, datetime, timedelta, timezone
from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import CurrentAffair, CurrentAffairsQuiz
from rest_api.repositories import (
    CurrentAffairRepository,
    QuizRepository,
    TrendingTopicRepository,
)
from rest_api.schemas.common import dump
from rest_api.schemas.content import CurrentAffairOutput, QuizOutput, TrendingTopicOutput
from rest_api.services.base_service import BaseService
from rest_api.services.external.gemini_client import AIProviderError, GeminiClient, gemini_client
from rest_api.services.external.search_client import GoogleSearchClient, SearchError, search_client
from shared.config.constants import EXAM_CATEGORIES, SEARCH_QUERIES, ExamType, Limits
from shared.config.logging import content_logger as logger
from shared.config.settings import settings
from shared.utils.exceptions import ValidationError
from shared.utils.identifiers import next_id
from shared.utils.validators import sanitize_search_term

from . import current_affairs_rules as rules

DIFFICULTIES = ("easy", "medium", "hard")


def exam_type_or_400(exam_type: str | None, default: str | None = None) -> str:
    """
    Raises:
        ValidationError: Unknown exam type.
    """
    value = (exam_type or default or "").lower()
    allowed = [e.value for e in ExamType]
    if value not in allowed:
        raise ValidationError(f"Unsupported exam type: {exam_type}. Must be one of: {', '.join(allowed)}")
    return value


class CurrentAffairsService(BaseService[CurrentAffair]):
    """Service for current affairs content."""

    def __init__(
        self,
        db: Session,
        ai_client: GeminiClient | None = None,
        search: GoogleSearchClient | None = None,
    ):
        super().__init__(db, CurrentAffairRepository(db))
        self._trending = TrendingTopicRepository(db)
        self._quizzes = QuizRepository(db)
        self._ai = ai_client or gemini_client
        self._search = search or search_client

    @staticmethod
    def to_output(item: CurrentAffair) -> dict[str, Any]:
        return dump(CurrentAffairOutput.model_validate(item))

    def to_outputs(self, items) -> list[dict[str, Any]]:
        return [self.to_output(i) for i in items]

    @property
    def api_status(self) -> dict[str, Any]:
        return {
            "geminiAI": self._ai.configured,
            "geminiModel": self._ai.model if self._ai.configured else "Not Available",
            "searchAPI": self._search.configured,
        }

    # =========================================================================
    # Daily content
    # =========================================================================

    async def daily(self, day: date | None = None) -> dict[str, Any]:
        day = day or date.today()
        items = self._repo.find_by_date(day)
        if not items:
            logger.info("No stored current affairs, fetching", date=day.isoformat())
            items = await self.fetch_and_store(day)
        else:
            logger.debug("Serving stored current affairs", date=day.isoformat(), count=len(items))

        return {
            "date": day.isoformat(),
            "totalItems": len(items),
            "currentAffairs": self.to_outputs(items),
            "categories": rules.category_counts(items),
            "examRelevance": rules.exam_relevance_totals(items),
            "apiStatus": self.api_status,
        }

    async def fetch_and_store(self, day: date) -> list[CurrentAffair]:
        """Fetch, enrich, dedupe, rank and persist the items for a date."""
        drafts = await self._from_search(day) if self._search.configured else []
        if not drafts and self._ai.configured:
            drafts = await self._from_ai(day)
        if not drafts:
            logger.info("Using bundled sample current affairs", date=day.isoformat())
            drafts = rules.sample_items()

        drafts = rules.sort_by_relevance(rules.dedupe_by_title(drafts))
        stored = self._store(drafts, day)
        logger.info("Current affairs stored", date=day.isoformat(), count=len(stored))
        return stored

    async def _from_search(self, day: date) -> list[dict[str, Any]]:
        drafts = []
        for category, query in SEARCH_QUERIES.items():
            try:
                results = await self._search.search_news(query, num_results=3)
            except SearchError as e:
                logger.warning("News search failed", category=category, error=str(e))
                continue
            for result in results:
                if not result.get("title"):
                    continue
                drafts.append(await self._enrich_result(result, category))
        return drafts

    async def _enrich_result(self, result: dict[str, Any], category: str) -> dict[str, Any]:
        title = result["title"]
        snippet = result.get("snippet") or ""
        enrichment = rules.enrich(title, snippet, category)
        if self._ai.configured:
            try:
                analysis = await self._ai.generate_json(self._analysis_prompt(title, snippet, category))
                if isinstance(analysis, dict):
                    ai_fields = rules.from_ai(analysis, category)
                    enrichment.update({k: v for k, v in ai_fields.items() if v})
            except AIProviderError as e:
                logger.warning("AI enrichment failed, using rules", title=title[:60], error=str(e))

        return {
            "title": title,
            "content": snippet,
            "source": result.get("displayLink") or None,
            "url": result.get("link") or None,
            "category": category,
            **enrichment,
        }

    async def _from_ai(self, day: date) -> list[dict[str, Any]]:
        drafts = []
        for category in SEARCH_QUERIES:
            try:
                generated = await self._ai.generate_json(self._generation_prompt(category, day), temperature=0.7)
            except AIProviderError as e:
                logger.warning("AI generation failed", category=category, error=str(e))
                continue
            if not isinstance(generated, dict) or not generated.get("title"):
                continue
            fields = rules.from_ai(generated, category)
            if not fields["mcq_question"]:
                fields["mcq_question"] = rules.basic_mcq(generated["title"], category)
            drafts.append(
                {
                    "title": str(generated["title"]),
                    "content": generated.get("content") or generated.get("summary") or "",
                    "source": generated.get("source") or "AI Generated",
                    "url": "#ai-generated",
                    "category": category,
                    **fields,
                }
            )
        return drafts

    def _store(self, drafts: list[dict[str, Any]], day: date) -> list[CurrentAffair]:
        prefix = f"CA-{day:%Y%m%d}"
        existing = [item.id for item in self._repo.find_by_date(day)]
        stored = []
        for draft in drafts:
            item_id = next_id(prefix, existing)
            existing.append(item_id)
            item = CurrentAffair(id=item_id, date=day, publish_date=day, **draft)
            stored.append(self._repo.upsert(item))
            self._trending.record(
                draft["title"], draft.get("category"), draft.get("importance", 5), draft.get("exam_relevance", {}), day
            )
        self._commit("store current affairs", date=day.isoformat())
        return stored

    # =========================================================================
    # Queries
    # =========================================================================

    def by_range(
        self, start: date | None, end: date | None, category: str | None = None, limit: int = 50
    ) -> list[dict[str, Any]]:
        if start is None or end is None:
            raise ValidationError("Start date and end date are required")
        if start > end:
            raise ValidationError("Start date must be before end date")
        return self.to_outputs(self._repo.find_in_range(start, end, category)[:limit])

    def by_category(self, category: str, limit: int = 20) -> list[dict[str, Any]]:
        return self.to_outputs(self._repo.find_by_category(category, limit))

    def trending(self, exam_type: str | None = "upsc", days: int = 7, limit: int = 15) -> dict[str, Any]:
        exam = exam_type_or_400(exam_type, default=ExamType.UPSC.value)
        since = date.today() - timedelta(days=days)
        topics = self._trending.find_since(since, EXAM_CATEGORIES[exam], limit)
        result = {
            "examType": exam.upper(),
            "period": f"Last {days} days",
            "totalTopics": len(topics),
            "trendingTopics": [dump(TrendingTopicOutput.model_validate(t)) for t in topics],
            "lastUpdated": datetime.now(timezone.utc).isoformat(),
        }
        if not topics:
            result["note"] = "No trending data available yet. Try refreshing current affairs first."
        return result

    def for_exam(self, exam_type: str, day: date | None = None, limit: int = 25) -> dict[str, Any]:
        """Items of the day relevant (score >= 5) to the exam and in its categories."""
        exam = exam_type_or_400(exam_type)
        day = day or date.today()
        categories = EXAM_CATEGORIES[exam]
        items = [
            item
            for item in self._repo.find_by_date(day)
            if (item.category or "").lower() in categories
            and rules.clamp_score((item.exam_relevance or {}).get(exam), default=0) >= 5
        ]
        items.sort(key=lambda i: (rules.clamp_score(i.exam_relevance.get(exam), 0), i.importance), reverse=True)
        return {
            "examType": exam.upper(),
            "date": day.isoformat(),
            "totalItems": len(items[:limit]),
            "currentAffairs": self.to_outputs(items[:limit]),
            "studyRecommendations": {
                "priorityTopics": categories[:3],
                "timeAllocation": "Focus on high-relevance items (score >= 7)",
                "revisionFrequency": "Daily review recommended for government exams",
            },
        }

    def search(self, term: str | None, limit: int = 20) -> list[dict[str, Any]]:
        cleaned = sanitize_search_term(term or "")
        if not cleaned:
            raise ValidationError("Search query is required")
        return self.to_outputs(self._repo.search(cleaned, limit))

    def statistics(self) -> dict[str, Any]:
        stats = self._repo.statistics()
        stats["quizzesByExam"] = self._quizzes.count_by_exam()
        return stats

    # =========================================================================
    # Quiz
    # =========================================================================

    async def quiz(
        self,
        day: date | None = None,
        exam_type: str | None = "upsc",
        difficulty: str = "medium",
        count: int = 10,
        category: str | None = None,
    ) -> dict[str, Any]:
        """
        Build and persist a quiz from the day's items (fetching them first if
        none are stored). AI-generated when possible.
        """
        exam = exam_type_or_400(exam_type, default=ExamType.UPSC.value)
        difficulty = (difficulty or "medium").lower()
        if difficulty not in DIFFICULTIES:
            raise ValidationError(f"Difficulty must be one of: {', '.join(DIFFICULTIES)}")
        count = max(1, min(count, Limits.MAX_QUIZ_QUESTIONS))
        day = day or date.today()

        items = list(self._repo.find_by_date(day, category))
        if not items:
            items = await self.fetch_and_store(day)
            if category:
                items = [i for i in items if (i.category or "").lower() == category.lower()]

        quiz_data = None
        if self._ai.configured and items:
            try:
                generated = await self._ai.generate_json(self._quiz_prompt(items[:count], difficulty, count))
                if isinstance(generated, dict) and isinstance(generated.get("questions"), list) and generated["questions"]:
                    quiz_data = generated
                    quiz_data["generatedWith"] = f"AI ({self._ai.model})"
            except AIProviderError as e:
                logger.warning("AI quiz generation failed, using stored questions", error=str(e))
        if quiz_data is None:
            quiz_data = rules.fallback_quiz(items, difficulty, count)

        quiz = CurrentAffairsQuiz(
            id=f"QUIZ-{int(time.time() * 1000)}-{exam.upper()}",
            quiz_title=str(quiz_data.get("quizTitle") or f"Current Affairs Quiz - {day.isoformat()}")[:500],
            date=day,
            difficulty=difficulty.capitalize(),
            exam_type=exam.upper(),
            total_questions=len(quiz_data["questions"]),
            questions=quiz_data["questions"],
            category=category,
        )
        self._db.add(quiz)
        self._commit("save quiz", quiz_id=quiz.id)
        self._db.refresh(quiz)
        logger.info("Quiz generated", quiz_id=quiz.id, questions=quiz.total_questions)

        output = dump(QuizOutput.model_validate(quiz))
        output["generatedWith"] = quiz_data.get("generatedWith")
        return output

    # =========================================================================
    # Maintenance
    # =========================================================================

    async def refresh(self, force_update: bool = False) -> dict[str, Any]:
        today = date.today()
        if not force_update:
            existing = self._repo.find_by_date(today)
            if existing:
                return {
                    "message": "Data is already up to date",
                    "count": len(existing),
                    "apiStatus": self.api_status,
                }
        items = await self.fetch_and_store(today)
        return {
            "message": "Current affairs data refreshed successfully",
            "date": today.isoformat(),
            "count": len(items),
            "categories": rules.category_counts(items),
            "apiStatus": self.api_status,
        }

    def health(self) -> dict[str, Any]:
        """Raises SQLAlchemyError when the database is unreachable."""
        recommendations = []
        if not self._ai.configured:
            recommendations.append("Configure GOOGLE_API_KEY for AI analysis features")
        if not self._search.configured:
            recommendations.append("Configure GOOGLE_SEARCH_API_KEY and GOOGLE_SEARCH_ENGINE_ID for real-time news")
        if recommendations:
            recommendations.append("System works with sample data even without API configuration")
        else:
            recommendations.append("All APIs configured correctly!")

        return {
            "status": "healthy",
            "todayCount": self._repo.count_for_date(date.today()),
            "totalCount": self._repo.count(),
            "lastUpdate": datetime.now(timezone.utc).isoformat(),
            "apiStatus": self.api_status,
            "features": {
                "newsRetrieve": "Available" if self._search.configured else "Disabled (API not configured)",
                "aiAnalysis": "Available" if self._ai.configured else "Disabled (API not configured)",
                "basicFunctionality": "Available",
                "sampleData": "Available",
            },
            "recommendations": recommendations,
        }

    def cleanup(self, retention_days: int | None = None) -> int:
        """Delete items older than the retention period. Returns the count removed."""
        days = retention_days if retention_days is not None else settings.current_affairs_retention_days
        removed = self._repo.delete_older_than(date.today() - timedelta(days=days))
        self._commit("cleanup current affairs", retention_days=days)
        logger.info("Old current affairs removed", removed=removed, retention_days=days)
        return removed

    # =========================================================================
    # Prompts
    # =========================================================================

    @staticmethod
    def _analysis_prompt(title: str, snippet: str, category: str) -> str:
        return (
            "Analyze this news for Indian government job exams (UPSC, PCS, SSC, Banking, Railway).\n\n"
            f"Title: {title}\nContent: {snippet}\nCategory: {category}\n\n"
            "Answer with JSON only:\n"
            '{"summary": "2-3 lines", "keyFacts": [], '
            '"examRelevance": {"upsc": 5, "pcs": 5, "ssc": 5, "banking": 5, "railway": 5}, '
            '"relatedTopics": [], "mcqQuestion": {"question": "", "options": {"A": "", "B": "", "C": "", "D": ""}, '
            '"correctAnswer": "A", "explanation": ""}, "tags": [], "difficulty": "Medium", "importance": 7}'
        )

    @staticmethod
    def _generation_prompt(category: str, day: date) -> str:
        return (
            "Generate a realistic current affairs news item for Indian government job exams "
            f"(UPSC, PCS, SSC, Banking, Railway) in the category: {category}. Current date: {day.isoformat()}. "
            "Include specific facts and figures.\n\n"
            "Answer with JSON only:\n"
            '{"title": "", "summary": "", "content": "", "keyFacts": [], '
            '"examRelevance": {"upsc": 5, "pcs": 5, "ssc": 5, "banking": 5, "railway": 5}, '
            '"relatedTopics": [], "mcqQuestion": {"question": "", "options": {"A": "", "B": "", "C": "", "D": ""}, '
            '"correctAnswer": "A", "explanation": ""}, "tags": [], "difficulty": "Medium", "importance": 7, '
            '"source": ""}'
        )

    @staticmethod
    def _quiz_prompt(items: list[CurrentAffair], difficulty: str, count: int) -> str:
        listing = "\n".join(
            f"{i}. {item.title}\nSummary: {item.summary}\nCategory: {item.category}\n"
            f"Key Facts: {', '.join(map(str, item.key_facts or [])) or 'N/A'}"
            for i, item in enumerate(items, start=1)
        )
        return (
            f"Create {count} multiple choice questions of {difficulty} difficulty for government job exams "
            f"from these current affairs items:\n\n{listing}\n\n"
            "Answer with JSON only:\n"
            f'{{"quizTitle": "Current Affairs Quiz - {difficulty}", "difficulty": "{difficulty}", '
            '"questions": [{"id": 1, "question": "", "options": {"A": "", "B": "", "C": "", "D": ""}, '
            '"correctAnswer": "A", "explanation": "", "category": ""}]}'
        )
