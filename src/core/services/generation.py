"""Generation orchestrator.

This module owns the five AI operations of the learning assistant. Each one
composes a prompt, performs exactly one model call and runs the response
through the recovery pipeline. It never raises past its boundary: missing
credentials, transport errors and unrecoverable output all resolve to a
deterministic local result.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Sequence, TypeVar

from core.config import AppSettings
from core.domain.models import (
    DetailedContent,
    DomainResult,
    GradingResult,
    LearningPlan,
    QuizQuestionSet,
    ResultKind,
    TutorAnswer,
    UserProfile,
)
from core.fallbacks import (
    CONTENT_NOT_EXTRACTED,
    NO_TUTOR_RESPONSE,
    fallback_detailed_content,
    fallback_grading,
    fallback_learning_plan,
    fallback_quiz_questions,
    fallback_tutor_answer,
)
from core.interfaces.completion import CompletionClient, CompletionError
from core import prompts
from core.recovery import Recovery, recover
from core.recovery.coercion import as_score

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=DomainResult)

# Free-form grading text such as "Score: 7/10" or "8 out of 10".
_PROSE_SCORE_RE = re.compile(r"(\d{1,2}(?:\.\d+)?)\s*(?:/|out of)\s*10\b", re.IGNORECASE)


class LearningAssistant:
    """Five generation operations over an optional model client.

    `client=None` means "no credentials": every call returns its local
    fallback without touching the network.
    """

    def __init__(self, client: CompletionClient | None, settings: AppSettings | None = None) -> None:
        self._client = client
        self._settings = settings or AppSettings()

    @property
    def available(self) -> bool:
        return self._client is not None

    async def _generate(
        self,
        *,
        operation: str,
        kind: ResultKind,
        prompt: str,
        temperature: float,
        max_tokens: int,
        fallback: Callable[[], R],
        last_resort: Callable[[Recovery], R],
    ) -> R:
        if self._client is None:
            logger.warning("AI provider not configured, using local fallback for %s", operation)
            return fallback()

        try:
            response = await self._client.complete(
                [{"role": "user", "content": prompt}],
                model=self._settings.ai_model,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except CompletionError as exc:
            logger.error("Error in %s: %s", operation, exc)
            logger.warning("Falling back to local result for %s", operation)
            return fallback()
        except Exception:  # pragma: no cover
            logger.exception("Unexpected model client failure in %s", operation)
            return fallback()

        recovery = recover(response, kind)
        if not recovery.outcome.strict:
            logger.warning(
                "Could not parse %s response as JSON; salvaged fields: %s",
                operation,
                sorted(recovery.outcome.data) or "none",
            )
        return last_resort(recovery)

    async def generate_learning_plan(
        self,
        topic: str,
        duration_days: int,
        level: str,
        daily_time: str,
        profile: UserProfile | None = None,
    ) -> LearningPlan:
        prompt = prompts.personalize_prompt(
            prompts.learning_plan_prompt(
                topic=topic,
                duration_days=duration_days,
                level=level,
                daily_time=daily_time,
            ),
            profile,
        )

        def _fallback() -> LearningPlan:
            return fallback_learning_plan(topic, duration_days)

        def _last_resort(recovery: Recovery) -> LearningPlan:
            plan = recovery.result
            if isinstance(plan, LearningPlan) and plan.days:
                return plan
            return _fallback()

        return await self._generate(
            operation="generate_learning_plan",
            kind=ResultKind.LEARNING_PLAN,
            prompt=prompt,
            temperature=0.7,
            max_tokens=8000,
            fallback=_fallback,
            last_resort=_last_resort,
        )

    async def get_detailed_subtopic_content(
        self,
        topic: str,
        day_title: str,
        subtopic: str,
        level: str,
        profile: UserProfile | None = None,
    ) -> DetailedContent:
        prompt = prompts.personalize_prompt(
            prompts.detailed_content_prompt(topic=topic, day_title=day_title, subtopic=subtopic, level=level),
            profile,
        )

        def _last_resort(recovery: Recovery) -> DetailedContent:
            if recovery.outcome.usable and isinstance(recovery.result, DetailedContent):
                return recovery.result
            # A reply with no JSON at all is most likely the lesson as plain markdown.
            text = recovery.normalized
            if text and '"content"' not in text and "{" not in text:
                return DetailedContent(content=text)
            return DetailedContent(content=CONTENT_NOT_EXTRACTED)

        return await self._generate(
            operation="get_detailed_subtopic_content",
            kind=ResultKind.DETAILED_CONTENT,
            prompt=prompt,
            temperature=0.6,
            max_tokens=4000,
            fallback=lambda: fallback_detailed_content(topic, subtopic),
            last_resort=_last_resort,
        )

    async def generate_quiz_questions(
        self,
        day_title: str,
        subtopics: Sequence[str],
        explanations: Sequence[str],
        profile: UserProfile | None = None,
    ) -> QuizQuestionSet:
        prompt = prompts.personalize_prompt(
            prompts.quiz_prompt(day_title=day_title, subtopics=subtopics, explanations=explanations),
            profile,
        )

        def _fallback() -> QuizQuestionSet:
            return fallback_quiz_questions(day_title, subtopics, explanations)

        def _last_resort(recovery: Recovery) -> QuizQuestionSet:
            quiz = recovery.result
            if isinstance(quiz, QuizQuestionSet) and (quiz.mcq or quiz.theory):
                return quiz
            return _fallback()

        return await self._generate(
            operation="generate_quiz_questions",
            kind=ResultKind.QUIZ_QUESTIONS,
            prompt=prompt,
            temperature=0.5,
            max_tokens=3000,
            fallback=_fallback,
            last_resort=_last_resort,
        )

    async def grade_theory_answer(
        self,
        question: str,
        user_answer: str,
        correct_answer: str,
        key_points: Sequence[str],
    ) -> GradingResult:
        prompt = prompts.grading_prompt(
            question=question,
            user_answer=user_answer,
            correct_answer=correct_answer,
            key_points=key_points,
        )

        def _last_resort(recovery: Recovery) -> GradingResult:
            if recovery.outcome.usable and isinstance(recovery.result, GradingResult):
                return recovery.result
            match = _PROSE_SCORE_RE.search(recovery.normalized)
            if match:
                return GradingResult(score=as_score(match.group(1)), feedback=recovery.normalized)
            return fallback_grading(user_answer)

        return await self._generate(
            operation="grade_theory_answer",
            kind=ResultKind.GRADING,
            prompt=prompt,
            temperature=0.3,
            max_tokens=1000,
            fallback=lambda: fallback_grading(user_answer),
            last_resort=_last_resort,
        )

    async def ask_tutor_question(
        self,
        context: str,
        question: str,
        profile: UserProfile | None = None,
    ) -> TutorAnswer:
        prompt = prompts.personalize_prompt(prompts.tutor_prompt(context=context, question=question), profile)

        def _last_resort(recovery: Recovery) -> TutorAnswer:
            answer = recovery.result
            if isinstance(answer, TutorAnswer) and recovery.outcome.usable:
                return answer
            # Nothing parsed: the raw reply is the best answer we have.
            return TutorAnswer(answer=recovery.normalized or NO_TUTOR_RESPONSE)

        return await self._generate(
            operation="ask_tutor_question",
            kind=ResultKind.TUTOR_ANSWER,
            prompt=prompt,
            temperature=0.6,
            max_tokens=2500,
            fallback=lambda: fallback_tutor_answer(question),
            last_resort=_last_resort,
        )
