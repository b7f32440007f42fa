"""
Pydantic schemas for request/response validation.

Import all schemas here for easy access.
"""

from app.schemas.content import (
    MCQ,
    AnswerQuestionRequest,
    AnswerResponse,
    ErrorEnvelope,
    ErrorResponse,
    GenerateQuestionsRequest,
    LinkRequest,
    LinkResponse,
    LongAnswerQuestion,
    QuestionBank,
    QuestionBankResponse,
    ShortAnswerQuestion,
    StatusResponse,
    SummarizeRequest,
    SummaryResponse,
    UploadResponse,
)

__all__ = [
    # Requests
    "LinkRequest",
    "SummarizeRequest",
    "AnswerQuestionRequest",
    "GenerateQuestionsRequest",
    # Question bank
    "MCQ",
    "ShortAnswerQuestion",
    "LongAnswerQuestion",
    "QuestionBank",
    # Responses
    "UploadResponse",
    "LinkResponse",
    "SummaryResponse",
    "AnswerResponse",
    "QuestionBankResponse",
    "StatusResponse",
    "ErrorResponse",
    "ErrorEnvelope",
]
