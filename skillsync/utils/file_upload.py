"""
File Upload Utility - read uploads and turn stored bytes into text.

Uploads of any type are accepted and stored; the format check happens at
analysis time so a rejected file still leaves a FAILED document behind.

Analysable formats:
- Word (.docx) using python-docx
- Anything else not on the denylist is decoded as plain text

Max file size: 5MB (max_upload_mb)
"""

import io
from typing import Tuple
from fastapi import UploadFile, HTTPException

from docx import Document

from skillsync.core.config import get_settings

# Formats the model can't read as text. The analyzer has no PDF text layer.
UNSUPPORTED_EXTENSIONS = {
    '.pdf', '.png', '.jpg', '.jpeg', '.gif', '.bmp', '.webp', '.tiff', '.heic',
    '.zip', '.rar', '.7z', '.tar', '.gz', '.exe', '.dll', '.bin', '.dmg', '.iso',
    '.mp3', '.mp4', '.mov', '.avi', '.wav', '.doc', '.xls', '.xlsx', '.ppt', '.pptx',
}


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension."""
    if '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


def is_supported_format(filename: str) -> bool:
    return get_file_extension(filename) not in UNSUPPORTED_EXTENSIONS


def unsupported_format_message(filename: str) -> str:
    ext = get_file_extension(filename)
    if ext == '.pdf':
        return "PDF files are not supported. Please upload a text file."
    return f"Files of type '{ext}' are not supported. Please upload a text or Word file."


async def read_upload(file: UploadFile) -> Tuple[bytes, str]:
    """
    Read an uploaded file into memory.

    Returns:
        Tuple of (content, filename)

    Raises:
        HTTPException on missing filename, empty or oversized files
    """
    settings = get_settings()

    if not file.filename:
        raise HTTPException(status_code=400, detail="No file provided")

    # One byte past the limit is enough to reject the upload
    content = await file.read(settings.max_upload_bytes + 1)

    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    if len(content) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {settings.max_upload_mb}MB"
        )

    return content, file.filename


def extract_text(content: bytes, filename: str) -> str:
    """Turn stored bytes into text based on the file extension."""
    if get_file_extension(filename) == '.docx':
        return extract_from_docx(content)
    return extract_from_txt(content)


def extract_from_docx(content: bytes) -> str:
    """Extract text from DOCX bytes."""
    doc = Document(io.BytesIO(content))
    text_parts = []

    # Extract paragraphs
    for para in doc.paragraphs:
        if para.text.strip():
            text_parts.append(para.text)

    # Extract tables
    for table in doc.tables:
        for row in table.rows:
            row_text = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if row_text:
                text_parts.append(' | '.join(row_text))

    return '\n'.join(text_parts)


def extract_from_txt(content: bytes) -> str:
    """Extract text from TXT bytes."""
    for encoding in ['utf-8', 'cp1252']:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    # latin-1 maps every byte, so this always succeeds
    return content.decode('latin-1')
