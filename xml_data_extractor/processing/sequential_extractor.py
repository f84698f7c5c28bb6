"""
Sequential document extraction.

Runs one XmlDataExtractor over a list of documents in the main process. A
failing document is recorded and skipped; it never affects the documents
around it.
"""

import logging
import time
from typing import List, Tuple

from ..exceptions import XMLExtractionError, XMLParsingError
from ..interfaces import BatchProcessorInterface
from ..mapping.schema_interpreter import XmlDataExtractor
from ..models import ProcessingResult


class SequentialExtractor(BatchProcessorInterface):
    """
    Single-threaded extractor for a batch of XML documents.

    Each document goes through the same pipeline (well-formedness check,
    parse, extract). Failures are captured per document with the stage they
    happened in.
    """

    def __init__(self, extractor: XmlDataExtractor):
        """
        Args:
            extractor: Configured extractor (schema + modifiers) applied to every document
        """
        self.logger = logging.getLogger(__name__)
        self.extractor = extractor

    def process_documents(self, documents: List[Tuple[str, str]]) -> ProcessingResult:
        """
        Extract a batch of documents sequentially.

        Args:
            documents: List of (document_id, xml_content) tuples

        Returns:
            ProcessingResult with outputs for successful documents and failure records
        """
        result = ProcessingResult()
        if not documents:
            return result

        self.logger.info(f"Starting sequential extraction of {len(documents)} document(s)")

        for sequence, (document_id, xml_content) in enumerate(documents, 1):
            result.records_processed += 1

            if not self.extractor.parser.validate_xml_structure(xml_content):
                self._record_failure(result, document_id, 'validation', "XML is empty or not well-formed")
                continue

            try:
                result.results[document_id] = self.extractor.parse(xml_content, source_record_id=document_id)
            except XMLParsingError as e:
                self._record_failure(result, document_id, 'parsing', str(e))
                continue
            except XMLExtractionError as e:
                self._record_failure(result, document_id, 'extraction', str(e))
                continue

            result.records_successful += 1
            self.logger.info(f"Sequence {sequence}, Document {document_id}: Successfully extracted")

        result.processing_time_seconds = time.time() - result.start_time

        self.logger.info(
            f"Sequential extraction complete - "
            f"Success: {result.records_successful}, Failed: {result.records_failed}, "
            f"Time: {result.processing_time_seconds:.2f}s"
        )
        return result

    def _record_failure(self, result: ProcessingResult, document_id: str, stage: str, error: str) -> None:
        self.logger.error(f"Document {document_id}: {stage} failed: {error}")
        result.records_failed += 1
        result.errors.append(f"{document_id}: {error}")
        result.failed_items.append({
            'document_id': document_id,
            'error_stage': stage,
            'error': error
        })
