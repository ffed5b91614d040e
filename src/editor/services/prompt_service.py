# src/editor/services/prompt_service.py
import json
from typing import List, Optional

from editor.model import ChannelData, ComponentCatalogEntry, DesignTokenSet, EditIntent

CODE_CONTEXT_CHARS = 800

BASE_PRESERVATION_RULES = (
    "🔒 Preserve all existing HTML structure outside target element",
    "🔒 Maintain current CSS styling and responsive design",
    "🔒 Keep all JavaScript functionality intact",
    "🔒 Preserve YouTube channel data integration",
    "🔒 Maintain existing color schemes and typography",
    "🔒 Keep navigation and footer sections unchanged",
)

# (marker in the current code, extra rule)
CONDITIONAL_RULES = (
    ("navbar", "🔒 Preserve navigation bar structure and styling"),
    ("video-gallery", "🔒 Keep video gallery layout and functionality"),
    ("stats", "🔒 Maintain statistics section with real data"),
)


class PromptService:
    """
    Renders the precision-editing prompt handed to a language model when an
    instruction cannot be applied as a direct DOM edit.
    """

    def create_preservation_rules(self, current_code: str) -> List[str]:
        rules = list(BASE_PRESERVATION_RULES)
        for marker, rule in CONDITIONAL_RULES:
            if current_code and marker in current_code:
                rules.append(rule)
        return rules

    def get_component_rules(self, entry: ComponentCatalogEntry, tokens: DesignTokenSet) -> List[str]:
        """Rules scoped to a single catalog component."""
        colors = {"primary": tokens.primary_color, "secondary": tokens.secondary_color}
        return [
            f"🚫 NEVER modify components other than {entry.component_id}",
            "🚫 NEVER change overall page layout or structure",
            f"🚫 NEVER alter design tokens: {json.dumps(colors)}",
            f"🚫 NEVER modify CSS classes unrelated to {entry.dom_selector_hint}",
            "🚫 NEVER remove YouTube integration or channel data",
            f"✅ ONLY modify the {entry.semantic_type} component with selector {entry.dom_selector_hint}",
            "✅ USE existing design tokens for any new styles",
        ]

    def generate_targeted_prompt(
            self,
            intent: EditIntent,
            channel: Optional[ChannelData] = None,
            current_code: str = "",
            user_request: str = "",
    ) -> str:
        """
        Builds the targeted prompt for one intent.

        Args:
            intent (EditIntent): The parsed intent.
            channel (Optional[ChannelData]): Channel data the page is built from.
            current_code (str): The current document; only the head of it is quoted.
            user_request (str): The original chat text, quoted verbatim when given.

        Returns:
            str: A markdown prompt.
        """
        updates = intent.updates.model_dump(exclude_none=True, exclude_defaults=True)
        changes = "\n".join(
            f"- {key}: {json.dumps(value) if isinstance(value, dict) else value}"
            for key, value in updates.items()
        ) or f"- {intent.action} (describe the change in the component markup)"

        if channel:
            channel_block = (
                f"- Channel: {channel.title}\n"
                f"- Subscribers: {channel.subscriber_count:,}\n"
                f"- Videos: {channel.video_count:,}"
            )
        else:
            channel_block = "No channel data"

        rules = "\n".join(self.create_preservation_rules(current_code))
        request_line = f'**Original Request**: "{user_request}"\n\n' if user_request else ""
        code = (current_code or "")[:CODE_CONTEXT_CHARS]

        return (
            "# 🎯 PRECISION COMPONENT EDITING\n\n"
            f"{request_line}"
            "## COMPONENT TARGET\n"
            f"- **ID**: {intent.target_component_id}\n"
            f"- **Type**: {intent.target_component_type}\n"
            f"- **File**: {intent.source_file}\n"
            f"- **Action**: {intent.action}\n"
            f"- **Scope**: {intent.preservation_scope}\n"
            f"- **Confidence**: {round(intent.confidence * 100)}%\n\n"
            "## MODIFICATION SCOPE\n"
            f"**CRITICAL**: Edit ONLY the {intent.target_component_type} component "
            f"with ID \"{intent.target_component_id}\"\n\n"
            "## SPECIFIC CHANGES REQUESTED\n"
            f"{changes}\n\n"
            "## PRESERVATION RULES\n"
            f"{rules}\n\n"
            "## CHANNEL DATA (preserve)\n"
            f"{channel_block}\n\n"
            "## CURRENT CODE CONTEXT\n"
            f"```html\n{code}...\n```\n\n"
            "## OUTPUT REQUIREMENT\n"
            "Return ONLY the modified component code, preserving all existing functionality and design.\n"
        )


prompt_service = PromptService()
