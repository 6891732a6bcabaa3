"""
Tests for utils/formatting.py and core helpers used by the admin views.
"""

import logging
import pytest

from app.core.auth import hash_password, verify_password, create_access_token, decode_token
from app.core.logging import configure_logging
from app.utils.formatting import score_band, format_experience_duration, split_certifications


class TestScoreBand:
    """Test colour bands."""

    @pytest.mark.parametrize("score,band", [
        (100, "high"), (70, "high"), (69, "medium"), (50, "medium"), (49, "low"), (0, "low"), (None, None),
    ])
    def test_bands(self, score, band):
        assert score_band(score) == band


class TestExperienceDuration:
    """Test total experience text."""

    @pytest.mark.parametrize("months,text", [
        (0, "None"),
        (1, "1 month"),
        (5, "5 months"),
        (12, "1 year"),
        (13, "1 year, 1 month"),
        (24, "2 years"),
        (27, "2 years, 3 months"),
    ])
    def test_format(self, months, text):
        assert format_experience_duration(months) == text


class TestSplitCertifications:
    """Test certification list parsing."""

    def test_split(self):
        assert split_certifications("CompTIA A+, ITIL ,, AWS") == ["CompTIA A+", "ITIL", "AWS"]

    def test_empty(self):
        assert split_certifications("") == []
        assert split_certifications(None) == []


class TestAuthHelpers:
    """Test password hashing and tokens."""

    def test_password_roundtrip(self):
        hashed = hash_password("s3cret-pass")

        assert hashed != "s3cret-pass"
        assert verify_password("s3cret-pass", hashed)
        assert not verify_password("other", hashed)

    def test_token_payload(self):
        token = create_access_token({"sub": "7", "role": "admin"})
        payload = decode_token(token)

        assert payload["sub"] == "7"
        assert "exp" in payload

    def test_tampered_token(self):
        header, body, signature = create_access_token({"sub": "7"}).split(".")
        assert decode_token(f"{header}.{body}.{'A' * len(signature)}") is None


class TestLogging:
    """Test logging setup."""

    def test_configure_logging_replaces_handlers(self):
        logger = configure_logging("DEBUG")
        configure_logging("DEBUG")

        assert logger.name == "app"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

        configure_logging("INFO")
