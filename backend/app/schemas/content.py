"""
Pydantic schemas for the content API endpoints.

JSON bodies use camelCase keys (contentId, fileName, questionBank, ...);
the Python attributes are snake_case with aliases.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    """Base schema accepting and emitting camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True)


# ========================================
# Request Schemas
# ========================================


class LinkRequest(CamelModel):
    """Request body for POST /link/youtube and POST /link/webpage."""

    url: Optional[str] = Field(
        None,
        description="YouTube video URL or webpage URL",
        max_length=2000,
        examples=[
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://example.com/article",
        ]
    )


class SummarizeRequest(CamelModel):
    """Request body for POST /summarize. Either text or contentId is required."""

    content_id: Optional[str] = Field(None, alias="contentId")
    text: Optional[str] = Field(None, description="Text to summarize")


class AnswerQuestionRequest(CamelModel):
    """Request body for POST /answer-question. question plus context or contentId."""

    content_id: Optional[str] = Field(None, alias="contentId")
    question: Optional[str] = Field(None, description="Question asked by the student")
    context: Optional[str] = Field(None, description="Text the answer should be based on")


class GenerateQuestionsRequest(CamelModel):
    """Request body for POST /generate-questions. Either text or contentId is required."""

    content_id: Optional[str] = Field(None, alias="contentId")
    text: Optional[str] = Field(None, description="Text to generate questions from")


# ========================================
# Question Bank
# ========================================


class MCQ(CamelModel):
    """Multiple choice question."""

    question: str
    options: List[str]
    correct_answer: str = Field(..., alias="correctAnswer")
    explanation: Optional[str] = None


class ShortAnswerQuestion(CamelModel):
    question: str
    ideal_answer: str = Field(..., alias="idealAnswer")
    keywords: Optional[List[str]] = None


class LongAnswerQuestion(CamelModel):
    question: str
    guidelines: Optional[str] = Field(None, description="Points to cover, structure, etc.")


class QuestionBank(CamelModel):
    mcqs: List[MCQ] = Field(default_factory=list)
    short_answer_questions: List[ShortAnswerQuestion] = Field(
        default_factory=list, alias="shortAnswerQuestions"
    )
    long_answer_questions: List[LongAnswerQuestion] = Field(
        default_factory=list, alias="longAnswerQuestions"
    )


# ========================================
# Response Schemas
# ========================================


class UploadResponse(CamelModel):
    """Response for POST /upload."""

    id: str = Field(..., description="Stored file name, used as the content id")
    type: str = Field(..., description="MIME type of the uploaded file")
    file_name: str = Field(..., alias="fileName")
    message: str
    ocr_text: Optional[str] = Field(None, alias="ocrText", description="Always sent; null unless OCR succeeded")


class LinkResponse(CamelModel):
    """Response for POST /link/youtube and POST /link/webpage."""

    id: str
    type: str = Field(..., examples=["youtube", "webpage"])
    url: str
    title: str
    message: str


class SummaryResponse(CamelModel):
    content_id: Optional[str] = Field(None, alias="contentId")
    summary: str


class AnswerResponse(CamelModel):
    content_id: Optional[str] = Field(None, alias="contentId")
    question: str
    answer: str


class QuestionBankResponse(CamelModel):
    content_id: Optional[str] = Field(None, alias="contentId")
    question_bank: QuestionBank = Field(..., alias="questionBank")


class StatusResponse(CamelModel):
    message: str


class ErrorResponse(BaseModel):
    """Body of a 400 validation failure."""

    error: str = Field(..., description="Error message")


class ErrorEnvelope(CamelModel):
    """Body produced by the global error handler."""

    status: str = "error"
    status_code: int = Field(..., alias="statusCode")
    message: str
