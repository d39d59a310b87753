"""Text helpers shared by classifiers, analytics and composers."""

import re
from typing import List, Optional

ADDRESS_PATTERN = re.compile(r"0x[a-fA-F0-9]{40}")
_FULL_ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")

# Canonical collection name -> regex for the ways people refer to it
COLLECTION_PATTERNS = {
    "Bored Ape Yacht Club": r"bored ape yacht club|bored apes?|\bbayc\b",
    "Mutant Ape Yacht Club": r"mutant apes?|\bmayc\b",
    "CryptoPunks": r"crypto ?punks?",
    "Azuki": r"\bazuki\b",
    "Doodles": r"\bdoodles\b",
    "Moonbirds": r"\bmoonbirds?\b",
    "CloneX": r"clone ?x",
    "Meebits": r"\bmeebits\b",
    "Cool Cats": r"\bcool cats\b",
    "World of Women": r"world of women",
    "Pudgy Penguins": r"pudgy penguins?",
    "Otherdeed": r"\botherdeed\b",
}


def is_valid_address(address: Optional[str]) -> bool:
    """Check for a 0x-prefixed 20-byte hex address."""
    if not address or not isinstance(address, str):
        return False
    return bool(_FULL_ADDRESS_PATTERN.match(address))


def normalize_address(address: Optional[str]) -> Optional[str]:
    """Trim and lowercase an address; None if it is not a valid address."""
    if not address or not isinstance(address, str):
        return None
    normalized = address.strip().lower()
    return normalized if is_valid_address(normalized) else None


def extract_addresses(text: Optional[str]) -> List[str]:
    """All distinct addresses in text, lowercased, in order of appearance."""
    if not text:
        return []
    addresses = []
    for match in ADDRESS_PATTERN.findall(text):
        address = match.lower()
        if address not in addresses:
            addresses.append(address)
    return addresses


def extract_collection_names(text: Optional[str]) -> List[str]:
    """Canonical names of well-known collections mentioned in text."""
    if not text:
        return []
    text_lower = text.lower()
    return [
        name for name, pattern in COLLECTION_PATTERNS.items()
        if re.search(pattern, text_lower)
    ]


def format_large_number(value) -> str:
    """Format a number with K/M/B suffixes ("N/A" when not numeric)."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "N/A"

    for threshold, suffix in ((1e9, "B"), (1e6, "M"), (1e3, "K")):
        if abs(number) >= threshold:
            return f"{number / threshold:.1f}{suffix}"
    if number.is_integer():
        return str(int(number))
    return f"{number:.2f}"


def truncate_text(text: Optional[str], max_length: int = 100) -> str:
    """Shorten text to max_length characters, ending with an ellipsis."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."
