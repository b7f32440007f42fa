"""
Placeholder AI service.

Summaries, answers and question banks are canned responses returned after a
simulated model latency. This module is the single place a real model call
will plug in; callers only depend on the three coroutines below.

Simulated latency (scaled by settings.AI_STUB_DELAY_SCALE):
- summarize_content: 1.0s
- answer_question: 0.5s
- generate_question_bank: 1.5s
"""

import asyncio
from typing import Optional

from app.core.config import settings
from app.core.logging import get_logger
from app.schemas.content import (
    MCQ,
    LongAnswerQuestion,
    QuestionBank,
    ShortAnswerQuestion,
)

logger = get_logger(__name__)

SUMMARY_DELAY_SECONDS = 1.0
ANSWER_DELAY_SECONDS = 0.5
QUESTION_BANK_DELAY_SECONDS = 1.5

PREVIEW_CHARS = 100


async def _simulate_latency(seconds: float) -> None:
    delay = seconds * settings.AI_STUB_DELAY_SCALE
    if delay > 0:
        await asyncio.sleep(delay)


async def summarize_content(text: str, content_id: Optional[str] = None) -> str:
    """
    Summarize text.

    Args:
        text: The text to summarize
        content_id: Optional id of the content being summarized (logging only)

    Returns:
        Placeholder summary quoting the first 100 characters of text
    """
    logger.info("ai_summarize", content_id=content_id or "N/A", length=len(text))
    await _simulate_latency(SUMMARY_DELAY_SECONDS)
    return f'This is a placeholder summary for content starting with: "{text[:PREVIEW_CHARS]}..."'


async def answer_question(question: str, context: str, content_id: Optional[str] = None) -> str:
    """
    Answer a question about some content.

    Args:
        question: The question asked by the student
        context: The content the answer should be based on
        content_id: Optional id of the content (logging only)
    """
    logger.info("ai_answer_question", content_id=content_id or "N/A", question=question)
    await _simulate_latency(ANSWER_DELAY_SECONDS)
    return (
        f'This is a placeholder answer to: "{question}". '
        f'The context provided starts with: "{context[:PREVIEW_CHARS]}..."'
    )


async def generate_question_bank(text: str, content_id: Optional[str] = None) -> QuestionBank:
    """
    Generate a question bank (MCQs, short and long answer questions) from text.

    The bank is fixed: two MCQs, one short-answer and one long-answer question.
    """
    logger.info("ai_generate_question_bank", content_id=content_id or "N/A", length=len(text))
    await _simulate_latency(QUESTION_BANK_DELAY_SECONDS)

    return QuestionBank(
        mcqs=[
            MCQ(
                question="What is the capital of Placeholderland?",
                options=["Option A", "Option B", "Placeholder City", "Option D"],
                correct_answer="Placeholder City",
                explanation="Placeholder City is famously the capital.",
            ),
            MCQ(
                question="Which of these is a placeholder concept?",
                options=["Alpha", "Beta", "Gamma", "Placeholder"],
                correct_answer="Placeholder",
            ),
        ],
        short_answer_questions=[
            ShortAnswerQuestion(
                question="Define 'placeholder'.",
                ideal_answer="A placeholder is something used temporarily until the real thing is available.",
            ),
        ],
        long_answer_questions=[
            LongAnswerQuestion(
                question="Discuss the importance of placeholders in software development.",
                guidelines="Cover aspects like iterative development, API mocking, and UI previews.",
            ),
        ],
    )
