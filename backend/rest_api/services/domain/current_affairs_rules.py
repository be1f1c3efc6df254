"""
Rule-based enrichment of news items for exam preparation.

Used whenever the AI provider is unconfigured or fails, so every item
still gets an importance score, exam relevance, related topics, tags,
key facts and a basic MCQ. All functions are pure.

Items are plain dicts keyed like the CurrentAffair columns (title,
summary, key_facts, exam_relevance...).
"""

from __future__ import annotations

import copy
import re
from collections import Counter
from typing import Any, Iterable

from shared.config.constants import ExamType

EXAMS = tuple(e.value for e in ExamType)

DEFAULT_RELEVANCE = {exam: 5 for exam in EXAMS}

EXAM_RELEVANCE_BY_CATEGORY: dict[str, dict[str, int]] = {
    "politics": {"upsc": 9, "pcs": 8, "ssc": 6, "banking": 4, "railway": 5},
    "economics": {"upsc": 8, "pcs": 6, "ssc": 5, "banking": 9, "railway": 4},
    "science": {"upsc": 7, "pcs": 5, "ssc": 8, "banking": 3, "railway": 6},
    "environment": {"upsc": 8, "pcs": 6, "ssc": 6, "banking": 3, "railway": 5},
    "sports": {"upsc": 5, "pcs": 4, "ssc": 7, "banking": 2, "railway": 3},
    "international relations": {"upsc": 9, "pcs": 5, "ssc": 4, "banking": 3, "railway": 3},
    "infrastructure": {"upsc": 6, "pcs": 7, "ssc": 5, "banking": 4, "railway": 8},
    "government schemes": {"upsc": 8, "pcs": 9, "ssc": 7, "banking": 5, "railway": 6},
}

RELATED_TOPICS: dict[str, list[str]] = {
    "politics": ["Governance", "Public Policy", "Constitution", "Parliament", "Administration"],
    "economics": ["Economic Survey", "Budget", "Monetary Policy", "Inflation", "GDP"],
    "science": ["Innovation", "Research", "Technology", "ISRO", "Scientific Development"],
    "environment": ["Climate Change", "Sustainability", "Pollution Control", "Conservation", "Green Energy"],
    "infrastructure": ["Development Projects", "Transportation", "Connectivity", "Smart Cities"],
    "government schemes": ["Welfare Programs", "Social Security", "Rural Development", "Employment"],
}

HIGH_IMPORTANCE_KEYWORDS = (
    "parliament", "supreme court", "rbi", "budget", "policy", "act", "bill", "launch", "announcement",
)
MEDIUM_IMPORTANCE_KEYWORDS = ("government", "minister", "official", "report", "study")
TAG_STOPWORDS = {"india", "indian", "government", "announces", "says", "reports"}

_PERCENT = re.compile(r"\d+\.?\d*%")
_FIGURE = re.compile(r"\d{4}|\d+%|\d+\.?\d*")
_ORGANISATION = re.compile(r"RBI|ISRO|Parliament|Supreme Court|Government|Ministry", re.IGNORECASE)
_NON_WORD = re.compile(r"[^\w\s]")


def default_exam_relevance(category: str | None) -> dict[str, int]:
    return dict(EXAM_RELEVANCE_BY_CATEGORY.get((category or "").lower(), DEFAULT_RELEVANCE))


def calculate_importance(title: str, content: str, category: str | None) -> int:
    """5 by default, +2 high keyword, +1 medium keyword, +1 politics/economics, capped at 10."""
    text = f"{title} {content}".lower()
    importance = 5
    if any(keyword in text for keyword in HIGH_IMPORTANCE_KEYWORDS):
        importance += 2
    if any(keyword in text for keyword in MEDIUM_IMPORTANCE_KEYWORDS):
        importance += 1
    if (category or "").lower() in ("politics", "economics"):
        importance += 1
    return min(importance, 10)


def related_topics(category: str | None, title: str) -> list[str]:
    topics = list(RELATED_TOPICS.get((category or "").lower(), ["Current Affairs", "General Knowledge"]))
    lowered = title.lower()
    if "digital" in lowered:
        topics.append("Digital India")
    if "space" in lowered:
        topics.append("Space Technology")
    return topics[:4]


def generate_tags(category: str | None, title: str, content: str) -> list[str]:
    tags = [category or "general"]
    words = [w for w in title.lower().split() if len(w) > 4 and w not in TAG_STOPWORDS]
    tags.extend(words[:2])

    text = f"{title} {content}".lower()
    for needle, tag in (("digital", "digital"), ("economic", "economy"), ("policy", "policy"), ("space", "space")):
        if needle in text:
            tags.append(tag)
    return list(dict.fromkeys(tags))[:5]


def extract_key_facts(title: str, content: str) -> list[str]:
    facts = []
    percent = _PERCENT.search(title)
    if percent:
        facts.append(f"Percentage mentioned: {percent.group(0)}")
    figure = _FIGURE.search(title)
    if figure:
        facts.append(f"Key figure: {figure.group(0)}")
    organisation = _ORGANISATION.search(title)
    if organisation:
        facts.append(f"Organization involved: {organisation.group(0)}")
    first_sentence = content.split(".")[0].strip()
    if len(first_sentence) > 20:
        facts.append(first_sentence)
    return facts[:3]


def basic_mcq(title: str, category: str | None) -> dict[str, Any]:
    clean_title = _NON_WORD.sub("", title)
    return {
        "question": f'Which of the following statements about "{clean_title}" is most accurate?',
        "options": {
            "A": "It is primarily related to economic development",
            "B": "It has significant policy implications",
            "C": "It affects multiple sectors",
            "D": "All of the above statements are correct",
        },
        "correctAnswer": "D",
        "explanation": (
            f"This news relates to {category or 'general'} and likely has broader implications. "
            "For detailed analysis, AI processing is recommended."
        ),
    }


def summary_fallback(snippet: str | None) -> str:
    if not snippet or len(snippet) < 50:
        return "Current affairs item requiring further analysis."
    sentences = snippet.split(".")
    if len(sentences) >= 2:
        return ".".join(sentences[:2]) + "."
    return snippet[:150] + "..." if len(snippet) > 150 else snippet


def enrich(title: str, snippet: str, category: str | None) -> dict[str, Any]:
    """Enrichment fields for a search result without AI."""
    return {
        "summary": summary_fallback(snippet),
        "key_facts": extract_key_facts(title, snippet),
        "exam_relevance": default_exam_relevance(category),
        "related_topics": related_topics(category, title),
        "mcq_question": basic_mcq(title, category),
        "tags": generate_tags(category, title, snippet),
        "difficulty": "Medium",
        "importance": calculate_importance(title, snippet, category),
    }


def from_ai(analysis: dict[str, Any], category: str | None) -> dict[str, Any]:
    """
    Map a camelCase AI answer to item fields, with rule-based defaults for
    anything missing or malformed.
    """
    relevance = analysis.get("examRelevance")
    mcq = analysis.get("mcqQuestion")
    importance = analysis.get("importance")
    return {
        "summary": analysis.get("summary") or None,
        "key_facts": analysis.get("keyFacts") if isinstance(analysis.get("keyFacts"), list) else [],
        "exam_relevance": clamp_relevance(relevance) if isinstance(relevance, dict) else default_exam_relevance(category),
        "related_topics": analysis.get("relatedTopics") if isinstance(analysis.get("relatedTopics"), list) else [],
        "mcq_question": mcq if isinstance(mcq, dict) else {},
        "tags": analysis.get("tags") if isinstance(analysis.get("tags"), list) else [category or "general"],
        "difficulty": str(analysis.get("difficulty") or "Medium")[:10],
        "importance": clamp_score(importance, default=7),
    }


def clamp_score(value: Any, default: int = 5) -> int:
    """Integer score within 1..10."""
    if isinstance(value, bool):
        return default
    try:
        return max(1, min(10, int(value)))
    except (TypeError, ValueError):
        return default


def clamp_relevance(relevance: dict[str, Any]) -> dict[str, int]:
    return {exam: clamp_score(relevance.get(exam), default=5) for exam in EXAMS}


def relevance_score(item: dict[str, Any]) -> int:
    return (item.get("importance") or 0) + sum((item.get("exam_relevance") or {}).values())


def dedupe_by_title(items: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """First occurrence wins; titles compared case-insensitively."""
    seen = set()
    unique = []
    for item in items:
        key = (item.get("title") or "").strip().lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


def sort_by_relevance(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return sorted(items, key=relevance_score, reverse=True)


def category_counts(items: Iterable[Any]) -> dict[str, int]:
    return dict(Counter(_field(item, "category") or "general" for item in items))


def exam_relevance_totals(items: Iterable[Any]) -> dict[str, int]:
    totals = {exam: 0 for exam in EXAMS}
    for item in items:
        relevance = _field(item, "exam_relevance") or {}
        for exam in EXAMS:
            value = relevance.get(exam)
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                totals[exam] += int(value)
    return totals


def fallback_quiz(items: list[Any], difficulty: str, count: int) -> dict[str, Any]:
    """Quiz from stored MCQs, or a generic question built from the title and first key fact."""
    questions = []
    for index, item in enumerate(items[:count], start=1):
        category = _field(item, "category")
        relevance = _field(item, "exam_relevance") or {}
        relevant_exams = [exam for exam, score in relevance.items() if isinstance(score, (int, float)) and score >= 6]
        mcq = _field(item, "mcq_question") or {}
        if mcq.get("question"):
            question = {"id": index, **mcq}
        else:
            facts = _field(item, "key_facts") or []
            key_fact = facts[0] if facts else "Key information available"
            question = {
                "id": index,
                "question": f'What is the most significant aspect of "{_field(item, "title")}"?',
                "options": {
                    "A": key_fact,
                    "B": f"It relates to {category} sector",
                    "C": "It has implications for policy making",
                    "D": "All of the above are correct",
                },
                "correctAnswer": "D",
                "explanation": (
                    f"This current affairs item relates to {category} and has multiple implications. "
                    f"Key fact: {key_fact}"
                ),
            }
        question.update({"category": category, "difficulty": difficulty, "examRelevance": relevant_exams})
        questions.append(question)

    return {
        "quizTitle": f"Current Affairs Quiz - {difficulty.capitalize()}",
        "difficulty": difficulty,
        "totalQuestions": len(questions),
        "questions": questions,
        "generatedWith": "Fallback",
    }


def _field(item: Any, name: str) -> Any:
    return item.get(name) if isinstance(item, dict) else getattr(item, name, None)


# =============================================================================
# Bundled sample content
# =============================================================================


SAMPLE_ITEMS: tuple[dict[str, Any], ...] = (
    {
        "title": "India's Economic Growth Exceeds Expectations in Q2 2025",
        "summary": "India's GDP growth surpassed economist forecasts, driven by strong manufacturing and services sectors.",
        "content": (
            "The Indian economy demonstrated remarkable resilience in the second quarter of 2025, with GDP growth "
            "reaching 7.8% compared to the projected 7.2%. This growth was primarily fueled by robust performance "
            "in manufacturing, IT services, and domestic consumption."
        ),
        "source": "Economic Times",
        "url": "#sample-1",
        "category": "economics",
        "key_facts": [
            "GDP growth reached 7.8% in Q2 2025",
            "Manufacturing sector grew by 9.2%",
            "Services sector expanded by 8.5%",
            "Forex reserves at all-time high of $650 billion",
        ],
        "exam_relevance": {"upsc": 9, "pcs": 8, "ssc": 7, "banking": 10, "railway": 5},
        "related_topics": ["Economic Survey", "Monetary Policy", "Fiscal Policy", "Industrial Growth"],
        "mcq_question": {
            "question": "What was India's GDP growth rate in Q2 2025?",
            "options": {"A": "7.2%", "B": "7.5%", "C": "7.8%", "D": "8.1%"},
            "correctAnswer": "C",
            "explanation": "GDP growth surpassed expectations to reach 7.8% in the second quarter of 2025.",
        },
        "tags": ["economics", "GDP", "growth", "manufacturing"],
        "difficulty": "Medium",
        "importance": 9,
    },
    {
        "title": "New Education Policy Implementation Reaches Milestone",
        "summary": "The National Education Policy 2025 completes first phase of implementation with focus on digital learning.",
        "content": (
            "The government has implemented the first phase of the National Education Policy 2025, with over "
            "50,000 schools now equipped with digital classrooms and an updated curriculum."
        ),
        "source": "Education Ministry",
        "url": "#sample-2",
        "category": "politics",
        "key_facts": [
            "50,000 schools equipped with digital infrastructure",
            "New curriculum focuses on critical thinking",
            "Vocational training integrated in 25,000 schools",
        ],
        "exam_relevance": {"upsc": 8, "pcs": 9, "ssc": 6, "banking": 4, "railway": 5},
        "related_topics": ["Education Reform", "Digital India", "Skill Development", "Government Policy"],
        "mcq_question": {
            "question": "How many schools have been equipped with digital infrastructure under NEP 2025?",
            "options": {"A": "25,000", "B": "40,000", "C": "50,000", "D": "75,000"},
            "correctAnswer": "C",
            "explanation": "The first phase equipped 50,000 schools with digital classrooms.",
        },
        "tags": ["education", "policy", "digital", "government"],
        "difficulty": "Easy",
        "importance": 8,
    },
    {
        "title": "ISRO Announces New Satellite Launch for Climate Monitoring",
        "summary": "ISRO to launch an advanced climate monitoring satellite in October 2025.",
        "content": (
            "ISRO has announced the launch of INSAT-3DR, an advanced climate monitoring satellite providing "
            "real-time data on weather patterns, ocean temperatures and atmospheric conditions."
        ),
        "source": "ISRO Press Release",
        "url": "#sample-3",
        "category": "science",
        "key_facts": [
            "INSAT-3DR launch scheduled for October 2025",
            "Will provide real-time climate data",
            "Joint project with the Indian Meteorological Department",
        ],
        "exam_relevance": {"upsc": 8, "pcs": 6, "ssc": 7, "banking": 3, "railway": 6},
        "related_topics": ["Space Technology", "Climate Change", "Meteorology", "Scientific Research"],
        "mcq_question": {
            "question": "What is the name of the new climate monitoring satellite to be launched by ISRO?",
            "options": {"A": "INSAT-3D", "B": "INSAT-3DR", "C": "GSAT-20", "D": "CARTOSAT-3"},
            "correctAnswer": "B",
            "explanation": "ISRO is launching INSAT-3DR to enhance weather forecasting.",
        },
        "tags": ["science", "ISRO", "satellite", "climate"],
        "difficulty": "Medium",
        "importance": 7,
    },
    {
        "title": "Supreme Court Upholds Environmental Protection Laws",
        "summary": "Landmark judgment strengthens environmental regulations and corporate accountability.",
        "content": (
            "The Supreme Court upheld key environmental protection laws and imposed stricter penalties on "
            "corporations violating pollution norms, treating the right to a clean environment as fundamental."
        ),
        "source": "Legal News",
        "url": "#sample-4",
        "category": "environment",
        "key_facts": [
            "Increased penalties for pollution violations",
            "Corporate accountability measures enhanced",
            "Right to clean environment declared fundamental",
        ],
        "exam_relevance": {"upsc": 9, "pcs": 7, "ssc": 6, "banking": 4, "railway": 5},
        "related_topics": ["Environmental Law", "Judiciary", "Corporate Responsibility", "Sustainable Development"],
        "mcq_question": {
            "question": "What did the Supreme Court declare as a fundamental right in its recent judgment?",
            "options": {
                "A": "Right to property",
                "B": "Right to clean environment",
                "C": "Right to education",
                "D": "Right to information",
            },
            "correctAnswer": "B",
            "explanation": "The judgment treated the right to a clean environment as fundamental.",
        },
        "tags": ["environment", "supreme court", "law", "pollution"],
        "difficulty": "Medium",
        "importance": 8,
    },
    {
        "title": "Digital India Initiative Reaches Rural Connectivity Milestone",
        "summary": "Government achieves target of connecting 100,000 villages with high-speed internet.",
        "content": (
            "The Digital India initiative has connected 100,000 villages with high-speed internet "
            "infrastructure, a major step toward digital inclusion and rural empowerment."
        ),
        "source": "Government Portal",
        "url": "#sample-5",
        "category": "government schemes",
        "key_facts": [
            "100,000 villages connected with high-speed internet",
            "Digital literacy programs launched in 50,000 villages",
            "Target to connect all villages by December 2025",
        ],
        "exam_relevance": {"upsc": 8, "pcs": 9, "ssc": 7, "banking": 6, "railway": 6},
        "related_topics": ["Digital India", "Rural Development", "Infrastructure", "Technology"],
        "mcq_question": {
            "question": "How many villages have been connected with high-speed internet under Digital India?",
            "options": {"A": "50,000", "B": "75,000", "C": "100,000", "D": "125,000"},
            "correctAnswer": "C",
            "explanation": "The initiative connected 100,000 villages with high-speed internet.",
        },
        "tags": ["digital india", "internet", "rural", "technology"],
        "difficulty": "Easy",
        "importance": 8,
    },
)


def sample_items() -> list[dict[str, Any]]:
    """Fresh copies of the bundled sample items."""
    return copy.deepcopy(list(SAMPLE_ITEMS))
