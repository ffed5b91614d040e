# src/editor/controllers/edit_controller.py
from __future__ import annotations

import logging
from typing import List, Optional

from editor.dom.catalog_builder import ComponentCatalogBuilder
from editor.model import (
    ChangeLogEntry,
    ChannelData,
    ComponentCatalogEntry,
    DesignTokenSet,
    EditOutcome,
    NO_DIRECT_EDIT,
)
from editor.services.edit_apply_service import EditApplyService
from editor.services.edit_validate_service import EditValidateService, DRIFT_TOLERANCE
from editor.services.intent_parse_service import (
    IntentParseService,
    CONFIDENCE_THRESHOLD,
    KEYWORD_THRESHOLD,
)
from editor.services.prompt_service import PromptService
from editor.services.token_extract_service import TokenExtractService

logger = logging.getLogger(__name__)

# Terminal states of one editing turn
PARSE_FAILED = "ParseFailed"
PARSED = "Parsed"  # parsed, but handed over as a prompt instead of applied
APPLY_FAILED = "ApplyFailed"
VALIDATION_FAILED = "ValidationFailed"
COMMITTED = "Committed"


class EditController:
    """
    Runs one editing turn:
    Parsing -> Applying -> Validating -> Committed, stopping at the first failure.

    The controller never mutates the document it is given. A committed outcome
    carries the new document; replacing the stored page is the caller's step.
    Failed turns are not retried; a retry is a new turn with revised input.
    """

    def __init__(
            self,
            *,
            confidence_threshold: float = CONFIDENCE_THRESHOLD,
            keyword_threshold: float = KEYWORD_THRESHOLD,
            drift_tolerance: int = DRIFT_TOLERANCE,
            source_file: str = "index.html",
    ) -> None:
        self.source_file = source_file
        self.catalog_builder = ComponentCatalogBuilder()
        self.token_extractor = TokenExtractService()
        self.parser = IntentParseService(
            confidence_threshold=confidence_threshold,
            keyword_threshold=keyword_threshold,
        )
        self.applier = EditApplyService()
        self.validator = EditValidateService(drift_tolerance=drift_tolerance)
        self.prompts = PromptService()

    def run_turn(
            self,
            user_text: str,
            html: str,
            catalog: Optional[List[ComponentCatalogEntry]] = None,
            tokens: Optional[DesignTokenSet] = None,
            channel: Optional[ChannelData] = None,
    ) -> EditOutcome:
        """
        Executes one editing turn against the given document.

        Args:
            user_text (str): The raw chat message.
            html (str): The current document.
            catalog: A fresh catalog of `html`; built here when omitted.
            tokens: Design tokens; taken from the inline <style> blocks when omitted.
            channel: Channel data quoted in the fallback prompt.

        Returns:
            EditOutcome: The terminal state with either the new document or a
                         reason and suggestions.
        """
        if catalog is None:
            catalog = self.catalog_builder.build_catalog(html, source_file=self.source_file)
        if tokens is None:
            tokens = self.token_extractor.extract_tokens_from_html(html)

        # --- Parsing ---
        parsed = self.parser.parse(user_text, catalog, tokens)
        if not parsed.success:
            logger.info("Edit rejected while parsing (%s): %r", parsed.reason, user_text)
            return EditOutcome(
                success=False, state=PARSE_FAILED, reason=parsed.reason,
                error=parsed.error, suggestions=parsed.suggestions,
            )
        intent = parsed.intent

        if intent.updates.is_empty:
            # Nothing the DOM editor can do directly; hand over a targeted prompt.
            return EditOutcome(
                success=False, state=PARSED, reason=NO_DIRECT_EDIT, intent=intent,
                error=f"No direct edit could be derived for a {intent.action} request.",
                suggestions=[
                    "Describe a concrete change such as a color, size, text or highlight",
                    "Or send the generated prompt to the AI model",
                ],
                prompt=self.prompts.generate_targeted_prompt(intent, channel, html, user_request=user_text),
            )

        # --- Applying ---
        applied = self.applier.apply(intent, html)
        if not applied.success:
            return EditOutcome(
                success=False, state=APPLY_FAILED, reason=applied.reason, error=applied.error,
                intent=intent,
                suggestions=[
                    "Rebuild the component catalog; the page may have changed",
                    "Name the component by an id that exists in the page",
                ],
            )

        document = self.applier.splice_into_document(html, applied.modified_fragment, intent.target_component_id)

        # --- Validating ---
        validation = self.validator.validate_detailed(html, document)
        if not validation.valid:
            return EditOutcome(
                success=False, state=VALIDATION_FAILED, reason=validation.reason,
                error=validation.message, intent=intent,
                fragment=applied.modified_fragment, change_summary=applied.change_summary,
                suggestions=["Rephrase the request so it touches a single component"],
            )

        entry = ChangeLogEntry(
            action=intent.action,
            component_id=intent.target_component_id,
            user_request=user_text,
            details=applied.change_summary,
        )
        logger.info("Committed %s on '%s': %s", intent.action, intent.target_component_id, applied.change_summary)
        return EditOutcome(
            success=True, state=COMMITTED, intent=intent,
            fragment=applied.modified_fragment, change_summary=applied.change_summary,
            document=document, change_log_entry=entry,
        )
