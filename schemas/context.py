"""Conversation channel schemas."""

from enum import Enum
from typing import Union


class Platform(str, Enum):
    """Front-end a conversation arrives from."""
    WEB = "web"
    DISCORD = "discord"
    TELEGRAM = "telegram"
    CLI = "cli"


def platform_value(platform: Union[Platform, str]) -> str:
    """Normalise a platform to its plain string form.

    Unknown platform names are kept as-is; keys are opaque identifiers.
    """
    if isinstance(platform, Platform):
        return platform.value
    return str(platform)
