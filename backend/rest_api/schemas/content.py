"""
Current affairs schemas. These keys are camelCase like the mobile app expects.
"""

import datetime as dt

from pydantic import BaseModel, Field

from .common import ALIASED


class CurrentAffairOutput(BaseModel):
    id: str
    title: str
    summary: str | None = None
    content: str | None = None
    source: str | None = None
    url: str | None = None
    category: str | None = None
    date: dt.date
    key_facts: list = Field(default_factory=list, alias="keyFacts")
    exam_relevance: dict = Field(default_factory=dict, alias="examRelevance")
    related_topics: list = Field(default_factory=list, alias="relatedTopics")
    mcq_question: dict = Field(default_factory=dict, alias="mcqQuestion")
    tags: list = Field(default_factory=list)
    difficulty: str = "Medium"
    importance: int = 5
    publish_date: dt.date | None = Field(default=None, alias="publishDate")
    created_at: dt.datetime | None = Field(default=None, alias="createdAt")

    model_config = ALIASED


class TrendingTopicOutput(BaseModel):
    id: int
    topic: str
    category: str | None = None
    frequency: int
    importance: int
    exam_relevance: dict = Field(default_factory=dict, alias="examRelevance")
    date: dt.date
    last_mentioned: dt.datetime | None = Field(default=None, alias="lastMentioned")

    model_config = ALIASED


class QuizOutput(BaseModel):
    id: str
    quiz_title: str | None = Field(default=None, alias="quizTitle")
    date: dt.date
    difficulty: str
    exam_type: str | None = Field(default=None, alias="examType")
    total_questions: int = Field(alias="totalQuestions")
    questions: list = Field(default_factory=list)
    category: str | None = None

    model_config = ALIASED


class RefreshBody(BaseModel):
    force_update: bool = Field(default=False, alias="forceUpdate")

    model_config = ALIASED
