"""Template response composer used when no LLM is configured."""

from typing import Any, Dict, List
from pydantic import BaseModel, Field

from memory.models import ConversationContext
from schemas.intent import Intent, IntentType
from utils.helpers import format_large_number, truncate_text


class GenerationContext(BaseModel):
    """Everything a composer needs to answer one query."""
    query: str
    intent: Intent
    conversation: ConversationContext = Field(default_factory=ConversationContext)
    analytics: Dict[str, Any] = Field(default_factory=dict)


class TemplateResponseComposer:
    """Composes deterministic markdown answers from analytics data."""

    HEADINGS = {
        IntentType.WALLET_ANALYSIS: "## Wallet Analysis",
        IntentType.COLLECTION_ANALYSIS: "## Collection Analysis",
        IntentType.MARKET_INSIGHTS: "## Market Insights",
        IntentType.RISK_ASSESSMENT: "## Risk Assessment",
        IntentType.GENERAL_QUESTION: "## NFT Intelligence",
    }

    def compose(self, context: GenerationContext) -> str:
        """
        Compose a response for the given context.

        Args:
            context: Query, intent, conversation context and analytics data

        Returns:
            Markdown response text
        """
        parts = [self.HEADINGS[context.intent.type]]

        if context.conversation.has_history and context.conversation.top_topics:
            parts.append(
                f"_Picking up from our earlier chats about "
                f"{', '.join(context.conversation.top_topics[:3])}._"
            )

        if not context.analytics:
            parts.append(self._no_data_message(context))
        else:
            for section, data in context.analytics.items():
                parts.append(f"\n### {section.replace('_', ' ').title()}")
                parts.extend(self._format_data(data))

        parts.append("\n" + self._next_steps(context.intent.type))
        return "\n".join(parts)

    def _no_data_message(self, context: GenerationContext) -> str:
        intent_type = context.intent.type
        if intent_type == IntentType.WALLET_ANALYSIS:
            return "Share a full wallet address (0x followed by 40 hex characters) and I'll pull its profile."
        if intent_type == IntentType.COLLECTION_ANALYSIS:
            return "Share the collection's contract address and I'll pull its floor, volume and holder figures."
        if intent_type == IntentType.RISK_ASSESSMENT:
            return "I need a wallet or collection address to score risk."
        if intent_type == IntentType.MARKET_INSIGHTS:
            return "Market data is unavailable right now. Please try again shortly."
        return (
            f"I can analyze wallets, collections, market trends and risk. "
            f"You asked: \"{truncate_text(context.query, 80)}\""
        )

    def _format_data(self, data: Any, indent: str = "") -> List[str]:
        lines = []
        if isinstance(data, dict):
            for key, value in data.items():
                if key == "demo":
                    continue
                label = key.replace("_", " ")
                if isinstance(value, (dict, list)):
                    lines.append(f"{indent}- **{label}**:")
                    lines.extend(self._format_data(value, indent + "  "))
                else:
                    lines.append(f"{indent}- **{label}**: {self._format_value(value)}")
        elif isinstance(data, list):
            for item in data[:5]:
                if isinstance(item, dict):
                    summary = ", ".join(f"{k}: {self._format_value(v)}" for k, v in item.items())
                    lines.append(f"{indent}- {summary}")
                else:
                    lines.append(f"{indent}- {self._format_value(item)}")
            if len(data) > 5:
                lines.append(f"{indent}- ... and {len(data) - 5} more")
        else:
            lines.append(f"{indent}- {self._format_value(data)}")
        return lines

    @staticmethod
    def _format_value(value: Any) -> str:
        if isinstance(value, bool) or value is None:
            return str(value)
        if isinstance(value, (int, float)):
            return format_large_number(value)
        return truncate_text(str(value), 120)

    @staticmethod
    def _next_steps(intent_type: IntentType) -> str:
        if intent_type == IntentType.RISK_ASSESSMENT:
            return "**Next steps**: verify contract addresses and never sign transactions you don't understand."
        if intent_type == IntentType.WALLET_ANALYSIS:
            return "**Next steps**: ask for a risk assessment of this wallet or one of its collections."
        if intent_type == IntentType.COLLECTION_ANALYSIS:
            return "**Next steps**: compare against market-wide volume to judge relative strength."
        return "**Next steps**: ask about a specific wallet or collection for a deeper look."
