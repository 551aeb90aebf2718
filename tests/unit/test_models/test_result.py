"""Tests for advisory.models.result and advisory.models.identifiers."""

import pytest
from pydantic import ValidationError

from advisory.models import AnalysisResult, ExtractedIdentifiers, PendingIdentifiers


class TestAnalysisResult:
    def test_clean_success(self):
        assert AnalysisResult(error=False, status=200).is_clean_success

    @pytest.mark.parametrize(
        ("error", "status"),
        [(True, 200), (None, 200), (False, 201), (False, None)],
    )
    def test_not_clean(self, error, status):
        assert not AnalysisResult(error=error, status=status).is_clean_success

    def test_extra_fields_allowed(self):
        result = AnalysisResult.model_validate({"name": "R.pdf", "run_id": "abc"})
        assert result.name == "R.pdf"
        assert result.model_extra == {"run_id": "abc"}

    def test_non_string_link_fields_dropped(self):
        result = AnalysisResult.model_validate({"name": 42, "url": ["https://x"]})
        assert result.name is None
        assert result.url is None

    def test_error_kept_as_sent(self):
        result = AnalysisResult.model_validate({"error": "false", "status": 200})
        assert result.error == "false"
        assert not result.is_clean_success


class TestExtractedIdentifiers:
    def test_complete(self):
        ids = ExtractedIdentifiers(company_id="C1", user_id="U1")
        assert ids.is_complete
        assert ids.missing_fields == []

    def test_missing(self):
        ids = ExtractedIdentifiers(company_id="C1")
        assert not ids.is_complete
        assert ids.missing_fields == ["user_id"]

    def test_empty(self):
        assert ExtractedIdentifiers().missing_fields == ["company_id", "user_id"]


class TestPendingIdentifiers:
    def test_rejects_empty_text(self):
        with pytest.raises(ValidationError):
            PendingIdentifiers(pending_message_text="")
