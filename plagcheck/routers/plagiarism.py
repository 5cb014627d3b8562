from fastapi import APIRouter, UploadFile, File, HTTPException
from fastapi.concurrency import run_in_threadpool
import logging

from plagcheck.config import MIN_TEXT_LENGTH
from plagcheck.schemas.plagiarism_schemas import (
    CheckTextRequest,
    CompareRequest,
    PlagiarismResult,
)
from plagcheck.utils.checker import check_plagiarism, check_sources
from plagcheck.utils.file_utils import allowed_file, extract_text_from_file

router = APIRouter(prefix="/plagiarism", tags=["plagiarism"])

logger = logging.getLogger("plagcheck.api")


def _require_length(text: str) -> str:
    if len((text or "").strip()) < MIN_TEXT_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Text is too short (minimum {MIN_TEXT_LENGTH} characters)",
        )
    return text


@router.post("/check-text", response_model=PlagiarismResult)
def check_text(body: CheckTextRequest):
    text = _require_length(body.text)
    logger.info(f"🔍 Checking {len(text.split())} words against Wikipedia")
    return check_plagiarism(text)


@router.post("/compare", response_model=PlagiarismResult)
def compare(body: CompareRequest):
    logger.info(f"Comparing text against {len(body.sources)} supplied sources")
    return check_sources(body.original_text, body.sources)


@router.post("/check-file", response_model=PlagiarismResult)
async def check_file(file: UploadFile = File(...)):
    if not allowed_file(file.filename):
        raise HTTPException(status_code=400, detail=f"Invalid file type: {file.filename}")

    raw = await file.read()
    try:
        text = await run_in_threadpool(extract_text_from_file, raw, file.filename)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    _require_length(text)
    logger.info(f"📄 Processing file: {file.filename}")
    return await run_in_threadpool(check_plagiarism, text)
