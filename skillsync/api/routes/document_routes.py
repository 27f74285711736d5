"""
Document Routes

POST /documents/upload - Store a file and queue skill extraction
POST /documents/analyze - Run skill extraction for a PROCESSING document
GET /documents - List own documents, newest first
GET /documents/{document_id} - One document with its skills
"""

import logging
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, File, HTTPException, UploadFile

from skillsync.core.auth import get_current_user
from skillsync.core.config import get_settings
from skillsync.services.extraction_service import get_document_analyzer, run_document_analysis
from skillsync.services.postgres_service import DocumentRecordService, ExtractedSkillService
from skillsync.services.storage_service import get_object_store
from skillsync.utils.file_upload import read_upload
from skillsync.schemas.schemas import (
    AnalyzeRequest, AnalyzeResponse, DocumentDetailResponse, DocumentResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["Documents"])


@router.post("/upload", response_model=DocumentResponse, status_code=201)
async def upload_document(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(...),
    user: dict = Depends(get_current_user)
):
    """
    Upload a document (any format, max 5MB).

    The file is stored and a PROCESSING document is returned right away.
    Extraction runs after the response; poll GET /documents/{id} for the
    final status.
    """
    content, filename = await read_upload(file)

    store = get_object_store()
    key = store.build_key(user["user_id"], filename)
    url = store.put(key, content)

    document = DocumentRecordService().create(user["user_id"], filename, key, url)
    logger.info("User %s uploaded document %s (%s)", user["user_id"], document["id"], filename)

    if get_settings().auto_analyze_uploads:
        background_tasks.add_task(run_document_analysis, document["id"])

    return DocumentResponse(**document)


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze_document(request: AnalyzeRequest, user: dict = Depends(get_current_user)):
    """
    Extract skills from one of your documents.

    Unsupported formats (e.g. PDF) come back as FAILED with an error message
    instead of an HTTP error.
    """
    result = get_document_analyzer().analyze(request.document_id, owner_id=user["user_id"])
    return AnalyzeResponse(**result)


@router.get("", response_model=List[DocumentResponse])
async def list_documents(user: dict = Depends(get_current_user)):
    return DocumentRecordService().list_for_owner(user["user_id"])


@router.get("/{document_id}", response_model=DocumentDetailResponse)
async def get_document(document_id: int, user: dict = Depends(get_current_user)):
    document = DocumentRecordService().get_owned(document_id, user["user_id"])
    if not document:
        raise HTTPException(status_code=404, detail="Document not found")

    skills = ExtractedSkillService().list_for_document(document_id)
    return DocumentDetailResponse(**document, skills=skills)
