"""LLM-based composer for personalised NFT analysis responses."""

import json
import logging
from typing import List, Optional

from llm.base_client import BaseLLMClient, LLMError, Message
from memory.context_manager import ConversationContextManager
from schemas.intent import IntentType
from .composer import GenerationContext

logger = logging.getLogger(__name__)


class LLMResponseComposer:
    """
    LLM-based response composer.

    Combines the user's question, the analytics gathered for it and the
    conversation profile into a single prompt. Provider errors are not caught
    here; the orchestrator decides whether to retry or apologise.
    """

    BASE_SYSTEM_PROMPT = """You are NFT Intelligence, an analyst for NFT markets, collections and wallets.

## Response Quality Standards
1. Answer the user's question directly first
2. Ground every figure in the analytics data provided; never invent numbers
3. Say so plainly when the data needed is missing
4. Explain blockchain concepts in simple terms
5. Be encouraging but realistic about risk

## Structure Guidelines
- Direct answer
- Supporting analysis with the relevant metrics
- Actionable next steps

Data marked "demo": true is illustrative only; say so if you use it."""

    INTENT_PROMPTS = {
        IntentType.WALLET_ANALYSIS: """
## Task: Wallet Analysis
- Behaviour, activity level and holding patterns of the wallet
- Notable holdings and collection diversity
- Signs of sophisticated trading or potential issues""",

        IntentType.COLLECTION_ANALYSIS: """
## Task: Collection Analysis
- Floor price and volume trends
- Holder distribution and liquidity
- Risks and opportunities relative to similar collections""",

        IntentType.MARKET_INSIGHTS: """
## Task: Market Insights
- Overall sentiment and notable movements
- Sector performance where the data allows
- Timing considerations and market conditions""",

        IntentType.RISK_ASSESSMENT: """
## Task: Risk Assessment
- Red flags and their likely impact
- Market, liquidity and smart contract risks
- Concrete mitigation steps""",

        IntentType.GENERAL_QUESTION: """
## Task: General Question
- Clear, educational explanation
- Real-world examples
- Encourage responsible participation""",
    }

    MAX_DATA_CHARS = 6000

    def __init__(
        self,
        llm_client: BaseLLMClient,
        context_manager: Optional[ConversationContextManager] = None
    ):
        """
        Initialize LLM composer.

        Args:
            llm_client: LLM client for generation
            context_manager: Formats conversation memory for prompts
        """
        self.llm_client = llm_client
        self.context_manager = context_manager

    def compose(self, context: GenerationContext) -> str:
        """
        Compose a response using the LLM.

        Raises:
            LLMError: If the provider call fails or returns no text
        """
        messages = [Message(role="system", content=self._build_system_prompt(context))]
        if self.context_manager:
            messages.extend(self.context_manager.replay_messages(context.conversation))
        messages.append(Message(role="user", content=self._build_user_prompt(context)))

        response = self.llm_client.chat(
            messages=messages,
            temperature=0.7,
            max_tokens=1000
        )
        content = response.content.strip()
        if not content:
            raise LLMError(f"Empty response (finish_reason={response.finish_reason})")
        return content

    def _build_system_prompt(self, context: GenerationContext) -> str:
        prompt = self.BASE_SYSTEM_PROMPT + self.INTENT_PROMPTS[context.intent.type]

        if self.context_manager and context.conversation.has_history:
            prompt += "\n\n" + self.context_manager.summarize(context.conversation)
        return prompt

    def _build_user_prompt(self, context: GenerationContext) -> str:
        parts: List[str] = []

        if context.intent.entities:
            entities = ", ".join(f"{k}={v}" for k, v in context.intent.entities.items())
            parts.append(f"## Detected Entities\n{entities}")

        if not self.context_manager and context.conversation.recent_interactions:
            recent = context.conversation.recent_interactions[-3:]
            parts.append("## Recent Questions\n" + "\n".join(
                f"- {i.user_query}" for i in recent
            ))

        parts.append("## Analytics Data")
        if context.analytics:
            data_str = json.dumps(context.analytics, indent=2, default=str)
            if len(data_str) > self.MAX_DATA_CHARS:
                data_str = data_str[:self.MAX_DATA_CHARS] + "\n... (data truncated)"
            parts.append(data_str)
        else:
            parts.append("No analytics data was retrieved for this question.")

        parts.append(f"## User Query\n{context.query}")
        return "\n\n".join(parts)
