"""
Resume parsing pipeline.

Sequences text extraction, document storage, entity extraction and
confidence scoring into one parse, and maps the result onto a candidate
creation payload.
"""

import time
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Optional

from resume_pipeline.core.scoring import ConfidenceScorer
from resume_pipeline.data.models import (
    CandidateCreate,
    CandidateOverrides,
    ParsedResume,
    ParseResponse,
    ParseResponseData,
    ParseResult,
    SupportedTypes,
)
from resume_pipeline.errors import InsufficientTextError, ResumePipelineError, StorageError
from resume_pipeline.nlp import DocumentTextExtractor, EntityExtractor
from resume_pipeline.nlp.ruleset import Ruleset, load_ruleset
from resume_pipeline.services.storage import DocumentStorage, get_document_storage
from resume_pipeline.utils.config import AppSettings, get_settings
from resume_pipeline.utils.constants import (
    DEFAULT_OWNER_KEY,
    DEFAULT_SOURCE_TYPE,
    FALLBACK_MIME_TYPE,
    MIME_TYPE_BY_EXTENSION,
    AuditAction,
)
from resume_pipeline.utils.logger import audit_log, get_logger

logger = get_logger(__name__)

# Number of skills copied into candidate tags
CANDIDATE_TAG_COUNT = 10

MESSAGE_PARSED = "Resume parsed successfully"
MESSAGE_NEEDS_REVIEW = "Resume parsed successfully but requires manual review"


def media_type_for_filename(filename: str) -> str:
    """Media type implied by a filename's extension, or ``application/octet-stream``."""
    return MIME_TYPE_BY_EXTENSION.get(PurePosixPath(filename).suffix.lower(), FALLBACK_MIME_TYPE)


class ResumeParsingPipeline:
    """
    End-to-end resume parser.

    Pipeline stages, in order:
    1. Text extraction (validation, format-specific parsing, normalization)
    2. Minimum text length check
    3. Original document storage
    4. Entity extraction
    5. Confidence scoring, review decision and quality report

    The pipeline holds only immutable rules and the storage client, so
    concurrent parses share no mutable state.

    Example:
        pipeline = ResumeParsingPipeline()
        result = await pipeline.parse(content, "application/pdf", "resume.pdf")
        print(result.parsed_resume.confidence.overall)
    """

    def __init__(
        self,
        storage: Optional[DocumentStorage] = None,
        ruleset: Optional[Ruleset] = None,
        settings: Optional[AppSettings] = None,
    ):
        self.settings = settings or get_settings()
        parser_settings = self.settings.parser

        self.ruleset = ruleset or load_ruleset(parser_settings.ruleset_path)
        self.min_text_length = parser_settings.min_text_length

        self.storage = storage or get_document_storage(self.settings)
        self.text_extractor = DocumentTextExtractor(max_size_bytes=parser_settings.max_file_size_bytes)
        self.entity_extractor = EntityExtractor(self.ruleset.parsing)
        self.scorer = ConfidenceScorer(self.ruleset.scoring)

    async def parse(
        self,
        content: bytes,
        media_type: str,
        filename: str,
        owner_key: Optional[str] = None,
    ) -> ParseResult:
        """
        Parse an uploaded resume.

        Args:
            content: Raw document bytes
            media_type: Declared media type
            filename: Original filename
            owner_key: Candidate the document belongs to, if known

        Returns:
            ParseResult with the parsed resume, stored document URL and
            quality report

        Raises:
            InvalidDocumentError: The upload failed validation
            ExtractionFailedError: No usable text could be extracted
            StorageError: The original document could not be stored
        """
        start_time = time.time()
        logger.info(f"Starting resume parsing for file: {filename}")

        try:
            logger.info("Step 1: Extracting text from file")
            extracted = self.text_extractor.extract(content, media_type, filename)
            text = extracted.text

            if len(text) < self.min_text_length:
                raise InsufficientTextError(len(text), self.min_text_length)

            logger.info("Step 2: Uploading file to storage")
            try:
                document_url = await self.storage.put(
                    content, media_type, owner_key or DEFAULT_OWNER_KEY, filename
                )
            except StorageError:
                raise
            except Exception as e:
                raise StorageError(f"File upload failed: {e}") from e

            logger.info("Step 3: Extracting structured data")
            entities = self.entity_extractor.extract(text)

            logger.info("Step 4: Calculating confidence scores")
            confidence = self.scorer.score(entities)
            needs_review = self.scorer.needs_review(confidence)
            quality_report = self.scorer.quality_report(entities, confidence)

        except ResumePipelineError as e:
            logger.error(f"Resume parsing failed for {filename}: {e}")
            raise

        parsed = ParsedResume(
            personal_info=entities.personal_info,
            work_experience=entities.work_experience,
            education=entities.education,
            skills=entities.skills,
            certifications=entities.certifications,
            summary=entities.summary,
            raw_text=text,
            confidence=confidence,
            needs_manual_review=needs_review,
        )

        elapsed_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"Resume parsing completed in {elapsed_ms}ms. "
            f"Confidence: {confidence.overall}, Manual review: {needs_review}"
        )

        audit_details = {
            "filename": filename,
            "document_url": document_url,
            "overall_confidence": confidence.overall,
        }
        audit_log(AuditAction.RESUME_PARSED.value, audit_details)
        if needs_review:
            audit_log(
                AuditAction.RESUME_FLAGGED.value,
                {**audit_details, "issues": quality_report.issues},
            )

        return ParseResult(
            parsed_resume=parsed,
            document_url=document_url,
            quality_report=quality_report,
        )

    async def reparse(self, document_url: str) -> ParsedResume:
        """
        Parse a previously stored document again.

        The media type is inferred from the stored key's extension and the
        key's last path segment is used as the filename. The new copy is
        stored under the same owner.

        Raises:
            InvalidDocumentUrlError: The URL does not belong to the storage
            DocumentNotFoundError: Nothing is stored under the URL
            ResumePipelineError: Any failure of the underlying parse
        """
        logger.info(f"Re-parsing resume from URL: {document_url}")

        key = self.storage.extract_key_from_url(document_url)
        content = await self.storage.get(key)

        parts = PurePosixPath(key).parts
        filename = parts[-1] if parts else "resume.pdf"
        owner_key = parts[1] if len(parts) >= 3 else None

        result = await self.parse(content, media_type_for_filename(key), filename, owner_key)

        audit_log(
            AuditAction.RESUME_REPARSED.value,
            {"source_url": document_url, "document_url": result.document_url},
        )
        return result.parsed_resume

    def map_to_candidate_payload(
        self,
        parsed: ParsedResume,
        overrides: Optional[CandidateOverrides] = None,
    ) -> CandidateCreate:
        """
        Build a candidate creation payload from a parsed resume.

        The current job (first marked current, else the first listed)
        supplies company and title; the first skills become tags. Parsed
        data wins over caller custom fields on the keys it sets.
        """
        overrides = overrides or CandidateOverrides()
        info = parsed.personal_info
        location = info.location
        current_job = parsed.current_job

        source_details = {
            **overrides.source_details,
            "resume_parsed": True,
            "parsing_confidence": parsed.confidence.overall,
            "parsed_at": datetime.now(timezone.utc).isoformat(),
        }

        custom_fields = {
            **overrides.custom_fields,
            "skills": list(parsed.skills),
            "work_experience": [entry.to_wire() for entry in parsed.work_experience],
            "education": [entry.to_wire() for entry in parsed.education],
            "certifications": [entry.to_wire() for entry in parsed.certifications],
            "summary": parsed.summary,
        }

        return CandidateCreate(
            email=info.email,
            first_name=info.first_name,
            last_name=info.last_name,
            phone=info.phone,
            location_city=location.city if location else None,
            location_state=location.state if location else None,
            location_country=location.country if location else None,
            current_company=current_job.company if current_job else None,
            current_title=current_job.title if current_job else None,
            linkedin_url=info.linkedin_url,
            github_url=info.github_url,
            portfolio_url=info.portfolio_url,
            tags=parsed.skills[:CANDIDATE_TAG_COUNT],
            source_type=overrides.source_type or DEFAULT_SOURCE_TYPE,
            source_details=source_details,
            gdpr_consent=bool(overrides.gdpr_consent),
            custom_fields=custom_fields,
        )

    def supported_types(self) -> SupportedTypes:
        """Accepted extensions and media types."""
        return SupportedTypes(
            extensions=self.text_extractor.supported_extensions(),
            mime_types=self.text_extractor.supported_media_types(),
        )

    def can_parse(self, media_type: str) -> bool:
        """Check if a media type is accepted."""
        return self.text_extractor.is_supported_media_type(media_type)

    @staticmethod
    def build_parse_response(result: ParseResult) -> ParseResponse:
        """Wrap a parse result in the response envelope returned to callers."""
        parsed = result.parsed_resume
        return ParseResponse(
            success=True,
            data=ParseResponseData(
                parsed_data=parsed,
                file_url=result.document_url,
                quality_report=result.quality_report,
            ),
            message=MESSAGE_NEEDS_REVIEW if parsed.needs_manual_review else MESSAGE_PARSED,
        )


# Global pipeline instance
_pipeline: Optional[ResumeParsingPipeline] = None


def get_resume_pipeline() -> ResumeParsingPipeline:
    """Get the resume pipeline singleton instance."""
    global _pipeline
    if _pipeline is None:
        _pipeline = ResumeParsingPipeline()
    return _pipeline
