"""Tests for text helpers."""

from utils.helpers import (
    extract_addresses,
    extract_collection_names,
    format_large_number,
    is_valid_address,
    normalize_address,
    truncate_text,
)

WALLET = "0x742d35Cc6634C0532925a3b8D4C9db96C4b4d8b6"


class TestAddressHelpers:
    """Test address validation and extraction."""

    def test_is_valid_address(self):
        """Test full 0x-prefixed 40-hex addresses are valid."""
        assert is_valid_address(WALLET) is True
        assert is_valid_address("0x123") is False
        assert is_valid_address("742d35Cc6634C0532925a3b8D4C9db96C4b4d8b6") is False
        assert is_valid_address(None) is False

    def test_normalize_address(self):
        """Test addresses are trimmed and lowercased."""
        assert normalize_address(f"  {WALLET} ") == WALLET.lower()
        assert normalize_address("not an address") is None
        assert normalize_address("") is None
        assert normalize_address(123) is None
        assert normalize_address([WALLET]) is None

    def test_extract_addresses(self):
        """Test distinct addresses are extracted in order."""
        other = "0x" + "ab" * 20
        text = f"Compare {WALLET} with {other} and {WALLET.lower()}"

        assert extract_addresses(text) == [WALLET.lower(), other]
        assert extract_addresses("no addresses here") == []

    def test_extract_collection_names(self):
        """Test well-known collection aliases map to canonical names."""
        assert extract_collection_names("how are bored apes doing") == ["Bored Ape Yacht Club"]
        assert extract_collection_names("BAYC vs MAYC") == [
            "Bored Ape Yacht Club", "Mutant Ape Yacht Club"
        ]
        assert extract_collection_names("cryptopunk prices") == ["CryptoPunks"]
        assert extract_collection_names("nothing here") == []


class TestFormatting:
    """Test number and text formatting."""

    def test_format_large_number(self):
        """Test K/M/B suffixes."""
        assert format_large_number(1_500) == "1.5K"
        assert format_large_number(2_000_000) == "2.0M"
        assert format_large_number(3_100_000_000) == "3.1B"
        assert format_large_number(42) == "42"
        assert format_large_number(0.25) == "0.25"
        assert format_large_number("abc") == "N/A"

    def test_truncate_text(self):
        """Test long text is cut with an ellipsis."""
        assert truncate_text("short", 10) == "short"
        assert truncate_text("a" * 20, 10) == "a" * 7 + "..."
        assert truncate_text(None) == ""
