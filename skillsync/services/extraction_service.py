"""
Document Analysis Service - skill extraction using DeepSeek.

Workflow for one document:
1. Load the document row (must still be PROCESSING)
2. Reject formats the model can't read (document → FAILED, no AI call)
3. Read stored bytes and extract text, truncated to max_document_chars
4. Ask DeepSeek for skills
5. Validate the JSON reply (all-or-nothing)
6. Insert skills and mark COMPLETED in one transaction
7. Append a skill snapshot

Any failure from step 3 on marks the document FAILED and raises a generic
UpstreamError. There are no retries: the user re-uploads.
"""

import logging
from typing import Optional

from skillsync.core.config import get_settings
from skillsync.core.errors import (
    MalformedAIResponse, ResourceNotFound, UpstreamError, ValidationFailed
)
from skillsync.db.postgres import get_db_session
from skillsync.services.ai_validation import validate_extracted_skills
from skillsync.services.deepseek_client import extract_json, get_deepseek_client, DeepSeekClient
from skillsync.services.postgres_service import DocumentRecordService, ExtractedSkillService
from skillsync.services.snapshot_service import SnapshotAggregator
from skillsync.services.storage_service import get_object_store
from skillsync.utils.file_upload import (
    extract_text, is_supported_format, unsupported_format_message
)

logger = logging.getLogger(__name__)

EXTRACTION_FAILED = "Failed to extract skills from document"


class DocumentAnalysisService:

    def __init__(self):
        self.settings = get_settings()
        self.ai_client: DeepSeekClient = get_deepseek_client()
        self.documents = DocumentRecordService()
        self.skills = ExtractedSkillService()
        self.snapshots = SnapshotAggregator()
        self.store = get_object_store()

    def analyze(self, document_id: int, owner_id: Optional[int] = None) -> dict:
        """
        Analyze one document.

        Args:
            document_id: documents.document_id
            owner_id: when given, the document must belong to this user

        Returns:
            {"status": "COMPLETED", "skills_count": n}
            {"status": "FAILED", "skills_count": 0, "error": "..."} for rejected formats

        Raises:
            ResourceNotFound, ValidationFailed, UpstreamError
        """
        if owner_id is None:
            document = self.documents.get(document_id)
        else:
            document = self.documents.get_owned(document_id, owner_id)

        if not document:
            raise ResourceNotFound("Document not found")

        if document["status"] != "PROCESSING":
            raise ValidationFailed(f"Document already analyzed (status {document['status']})")

        if not is_supported_format(document["filename"]):
            self.documents.mark_status(document_id, "FAILED")
            message = unsupported_format_message(document["filename"])
            logger.info("Document %s rejected: %s", document_id, message)
            return {"status": "FAILED", "skills_count": 0, "error": message}

        try:
            skills = self._extract(document)
        except Exception as e:
            # Covers API errors, bad JSON (ValueError) and MalformedAIResponse
            self._fail(document_id, f"{type(e).__name__}: {e}")
            raise UpstreamError(EXTRACTION_FAILED)

        try:
            with get_db_session() as db:
                count = self.skills.insert_many(db, document["owner_id"], document_id, skills)
                if not self.documents.mark_status(document_id, "COMPLETED", db=db):
                    raise ValidationFailed("Document was analyzed concurrently")
        except ValidationFailed:
            raise
        except Exception as e:
            self._fail(document_id, f"{type(e).__name__}: {e}")
            raise UpstreamError(EXTRACTION_FAILED)

        logger.info("Document %s analyzed: %d skills", document_id, count)

        try:
            self.snapshots.record(document["owner_id"], document_id)
        except Exception:
            logger.exception("Snapshot for document %s was not recorded", document_id)

        return {"status": "COMPLETED", "skills_count": count}

    def _extract(self, document: dict) -> list:
        """Read the document, call the model and validate its reply."""
        content = self.store.read(document["storage_key"])
        text = extract_text(content, document["filename"])
        limited = text[:self.settings.max_document_chars]

        response = self.ai_client.extract_skills(limited)
        if not response or not response.strip():
            raise MalformedAIResponse("empty reply")

        data = extract_json(response)
        return validate_extracted_skills(data)

    def _fail(self, document_id: int, reason: str):
        logger.error("Document %s analysis failed: %s", document_id, reason)
        self.documents.mark_status(document_id, "FAILED")


def get_document_analyzer() -> DocumentAnalysisService:
    return DocumentAnalysisService()


def run_document_analysis(document_id: int) -> None:
    """
    Background task entry point queued after upload.
    Errors are already reflected in the document status, so they are only logged.
    """
    try:
        result = get_document_analyzer().analyze(document_id)
        logger.info("Background analysis of document %s finished: %s", document_id, result["status"])
    except Exception as e:
        logger.error("Background analysis of document %s failed: %s", document_id, e)
