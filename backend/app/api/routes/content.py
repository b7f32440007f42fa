"""
Content API endpoints.

Ingestion (file upload, YouTube link, webpage link), the status placeholder
and the AI-assisted study endpoints (summary, Q&A, question bank).

Validation failures answer 400 with ``{"error": "..."}``; everything else
that goes wrong propagates to the global error handler.
"""

import time
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.logging import get_logger
from app.db.deps import DBSession
from app.models.content import ContentSourceType, ContentStatus
from app.schemas.content import (
    AnswerQuestionRequest,
    AnswerResponse,
    ErrorEnvelope,
    ErrorResponse,
    GenerateQuestionsRequest,
    LinkRequest,
    LinkResponse,
    QuestionBankResponse,
    StatusResponse,
    SummarizeRequest,
    SummaryResponse,
    UploadResponse,
)
from app.services import ai_service
from app.services.content_store import CONTEXT_PLACEHOLDER, TEXT_PLACEHOLDER, ContentStore
from app.services.ocr_service import OCRError, OCRService, get_ocr_service
from app.services.transcript_service import TranscriptService, get_transcript_service
from app.services.upload_service import UploadError, UploadService, get_upload_service
from app.services.webpage_service import WebpageService, get_webpage_service
from app.services.youtube import YouTubeService, get_youtube_service

logger = get_logger(__name__)

router = APIRouter(prefix="/content", tags=["Content"])

UPLOAD_MESSAGE = "File uploaded successfully. Processing started."
OCR_SUCCESS_MESSAGE = "Image uploaded and OCR processing completed."
OCR_FAILURE_MESSAGE = "Image uploaded, but OCR processing failed."
YOUTUBE_MESSAGE = "YouTube video link received. Processing started."
WEBPAGE_MESSAGE = "Web page URL received. Content extraction started."

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    500: {"model": ErrorEnvelope, "description": "Server error"},
}


# ========================================
# Helper Functions
# ========================================


def bad_request(message: str) -> JSONResponse:
    """400 response with the ``{"error": message}`` body."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message},
    )


def get_content_store(db: DBSession) -> ContentStore:
    """FastAPI dependency returning a ContentStore bound to the request session."""
    return ContentStore(db)


# ========================================
# Ingestion Endpoints
# ========================================


@router.post(
    "/upload",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a document or image",
    description="Store a pdf/doc/docx/jpeg/jpg/png file (max 10MB). Images are run through OCR.",
    responses=ERROR_RESPONSES,
)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    uploads: UploadService = Depends(get_upload_service),
    ocr: OCRService = Depends(get_ocr_service),
    store: ContentStore = Depends(get_content_store),
):
    try:
        stored = await uploads.save(file)
    except UploadError as e:
        return bad_request(e.message)

    ocr_text = None
    message = UPLOAD_MESSAGE
    fields = {
        "original_name": stored["original_name"],
        "file_path": stored["path"],
        "mimetype": stored["mimetype"],
        "title": stored["original_name"],
        "source_type": ContentSourceType.UPLOAD,
        "status": ContentStatus.PENDING,
    }

    if stored["is_image"]:
        fields["source_type"] = ContentSourceType.IMAGE_OCR
        try:
            ocr_text = await ocr.extract_text(stored["path"])
        except OCRError as e:
            # The upload itself succeeded; the failure is only reported in the message
            message = OCR_FAILURE_MESSAGE
            fields.update(status=ContentStatus.FAILED, processing_error=str(e))
        else:
            message = OCR_SUCCESS_MESSAGE
            fields.update(status=ContentStatus.COMPLETED, extracted_text=ocr_text)

    await store.upsert(stored["filename"], **fields)

    return UploadResponse(
        id=stored["filename"],
        type=stored["mimetype"],
        file_name=stored["original_name"],
        message=message,
        ocr_text=ocr_text,
    )


@router.post(
    "/link/youtube",
    response_model=LinkResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Submit a YouTube video link",
    responses=ERROR_RESPONSES,
)
async def handle_youtube_link(
    payload: Optional[LinkRequest] = None,
    transcripts: TranscriptService = Depends(get_transcript_service),
    store: ContentStore = Depends(get_content_store),
):
    url = payload.url if payload else None
    if not url or not YouTubeService.validate_url(url):
        return bad_request("Invalid or missing YouTube URL.")

    url = url.strip()
    video_id = YouTubeService.extract_video_id_from_url(url)
    youtube = get_youtube_service()
    video = await youtube.get_video_details(video_id)

    transcript = None
    if settings.YOUTUBE_FETCH_TRANSCRIPTS:
        transcript = await transcripts.fetch_transcript(video_id)

    content_id = f"youtube_{video_id}"
    fields = {
        "source_type": ContentSourceType.YOUTUBE,
        "url": url,
        "title": video["title"],
        "status": ContentStatus.PENDING,
    }
    if transcript:
        text, _ = transcript
        fields.update(status=ContentStatus.COMPLETED, extracted_text=text)

    await store.upsert(content_id, **fields)

    return LinkResponse(
        id=content_id,
        type="youtube",
        url=url,
        title=video["title"],
        message=YOUTUBE_MESSAGE,
    )


@router.post(
    "/link/webpage",
    response_model=LinkResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Submit a webpage link",
    responses=ERROR_RESPONSES,
)
async def handle_webpage_link(
    payload: Optional[LinkRequest] = None,
    webpages: WebpageService = Depends(get_webpage_service),
    store: ContentStore = Depends(get_content_store),
):
    url = payload.url if payload else None
    if not url:
        return bad_request("Missing URL.")
    if not WebpageService.validate_url(url):
        return bad_request("Invalid URL format.")

    url = url.strip()
    page = await webpages.scrape(url)

    content_id = f"webpage_{int(time.time() * 1000)}"
    await store.upsert(
        content_id,
        source_type=ContentSourceType.WEBPAGE,
        url=url,
        title=page["title"],
        extracted_text=page["text"],
        status=ContentStatus.COMPLETED,
    )

    return LinkResponse(
        id=content_id,
        type="webpage",
        url=url,
        title=page["title"],
        message=WEBPAGE_MESSAGE,
    )


@router.get(
    "/status/{content_id}",
    response_model=StatusResponse,
    status_code=status.HTTP_501_NOT_IMPLEMENTED,
    summary="Processing status of a content record (not implemented)",
)
async def get_content_status(content_id: str):
    return JSONResponse(
        status_code=status.HTTP_501_NOT_IMPLEMENTED,
        content={"message": "Content status not yet implemented."},
    )


# ========================================
# AI Endpoints
# ========================================


@router.post(
    "/summarize",
    response_model=SummaryResponse,
    response_model_exclude_none=True,
    summary="Summarize content",
    responses=ERROR_RESPONSES,
)
async def summarize_content(
    payload: Optional[SummarizeRequest] = None,
    store: ContentStore = Depends(get_content_store),
):
    payload = payload or SummarizeRequest()
    if not payload.text and not payload.content_id:
        return bad_request("Missing contentId or text to summarize.")

    text = payload.text or await store.resolve_text(payload.content_id, TEXT_PLACEHOLDER)
    summary = await ai_service.summarize_content(text, payload.content_id)
    await store.save_summary(payload.content_id, summary)

    return SummaryResponse(content_id=payload.content_id, summary=summary)


@router.post(
    "/answer-question",
    response_model=AnswerResponse,
    response_model_exclude_none=True,
    summary="Answer a question about content",
    responses=ERROR_RESPONSES,
)
async def answer_question(
    payload: Optional[AnswerQuestionRequest] = None,
    store: ContentStore = Depends(get_content_store),
):
    payload = payload or AnswerQuestionRequest()
    if not payload.question or (not payload.context and not payload.content_id):
        return bad_request("Missing question, and context or contentId.")

    context = payload.context or await store.resolve_text(payload.content_id, CONTEXT_PLACEHOLDER)
    answer = await ai_service.answer_question(payload.question, context, payload.content_id)

    return AnswerResponse(
        content_id=payload.content_id,
        question=payload.question,
        answer=answer,
    )


@router.post(
    "/generate-questions",
    response_model=QuestionBankResponse,
    response_model_exclude_none=True,
    summary="Generate a question bank from content",
    responses=ERROR_RESPONSES,
)
async def generate_questions(
    payload: Optional[GenerateQuestionsRequest] = None,
    store: ContentStore = Depends(get_content_store),
):
    payload = payload or GenerateQuestionsRequest()
    if not payload.text and not payload.content_id:
        return bad_request("Missing contentId or text to generate questions from.")

    text = payload.text or await store.resolve_text(payload.content_id, TEXT_PLACEHOLDER)
    question_bank = await ai_service.generate_question_bank(text, payload.content_id)

    return QuestionBankResponse(content_id=payload.content_id, question_bank=question_bank)
