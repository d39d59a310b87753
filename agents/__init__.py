"""Agents for the NFT Intelligence Assistant."""

from .classifier import ClassifierMode, IntentClassifier, create_intent_classifier
from .router import KeywordIntentClassifier
from .llm_router import LLMIntentClassifier
from .composer import GenerationContext, TemplateResponseComposer
from .llm_composer import LLMResponseComposer

__all__ = [
    "ClassifierMode",
    "IntentClassifier",
    "create_intent_classifier",
    "KeywordIntentClassifier",
    "LLMIntentClassifier",
    "GenerationContext",
    "TemplateResponseComposer",
    "LLMResponseComposer",
]
