"""Tests for step normalization, validation, and structured errors."""

import pytest

from browser_controller.intents import (
    NoMatchError,
    WebExecutionError,
    normalize_steps,
    validate_step,
    validate_steps,
)


class TestNormalizeSteps:
    """Test suite for normalize_steps."""

    def test_list_payload(self):
        """Test a plain list of steps."""
        steps = [{"intent": "switch_tab", "query": "x"}, "junk"]
        assert normalize_steps(steps) == [{"intent": "switch_tab", "query": "x"}]

    def test_wrapped_payload(self):
        """Test a payload wrapped in "steps"."""
        payload = {"steps": [{"intent": "navigate", "input": "github"}]}
        assert normalize_steps(payload) == payload["steps"]

    def test_single_step_payload(self):
        """Test a single step dict."""
        step = {"intent": "navigate", "input": "github"}
        assert normalize_steps(step) == [step]

    @pytest.mark.parametrize("payload", [None, "text", 3, {"other": 1}])
    def test_garbage(self, payload):
        """Test payloads that contain no steps."""
        assert normalize_steps(payload) == []


class TestValidateStep:
    """Test suite for step validation."""

    def test_switch_tab(self):
        """Test a valid switch_tab step."""
        assert validate_step({"intent": " switch_tab ", "query": "  git hub "}) == {
            "intent": "switch_tab",
            "query": "git hub",
        }

    @pytest.mark.parametrize("query", [None, "", "   "])
    def test_switch_tab_requires_query(self, query):
        """Test that switch_tab needs a query."""
        with pytest.raises(ValueError, match="requires 'query'"):
            validate_step({"intent": "switch_tab", "query": query})

    def test_navigate(self):
        """Test a valid navigate step."""
        assert validate_step({"intent": "navigate", "input": "github", "tab_id": "4"}) == {
            "intent": "navigate",
            "input": "github",
            "tab_id": 4,
        }

    def test_navigate_accepts_url_alias(self):
        """Test that url is accepted in place of input."""
        cleaned = validate_step({"intent": "navigate", "url": "https://example.com"})
        assert cleaned["input"] == "https://example.com"

    def test_navigate_requires_input(self):
        """Test that navigate needs input."""
        with pytest.raises(ValueError, match="requires 'input'"):
            validate_step({"intent": "navigate", "input": " "})

    def test_navigate_rejects_bad_tab_id(self):
        """Test that a non-integer tab_id is rejected."""
        with pytest.raises(ValueError, match="tab_id"):
            validate_step({"intent": "navigate", "input": "github", "tab_id": "first"})

    def test_unknown_intent(self):
        """Test that unknown intents are rejected."""
        with pytest.raises(ValueError, match="Unsupported intent 'click'"):
            validate_step({"intent": "click"})

    def test_validate_steps_fails_on_any_bad_step(self):
        """Test that one bad step fails the whole list."""
        with pytest.raises(ValueError):
            validate_steps([{"intent": "switch_tab", "query": "a"}, {"intent": "bogus"}])


class TestErrors:
    """Test suite for resolver errors."""

    def test_no_match_error_without_tabs(self):
        """Test the message when there are no tabs."""
        exc = NoMatchError("docs")
        assert isinstance(exc, WebExecutionError)
        assert exc.code == "TAB_NO_MATCH"
        assert exc.best_score is None
        assert "No open tabs" in str(exc)

    def test_no_match_error_with_score(self):
        """Test the message carrying the best score."""
        exc = NoMatchError("docs", 12.345)
        assert exc.query == "docs"
        assert "12.3" in str(exc)

    def test_web_execution_error_code(self):
        """Test that WebExecutionError keeps its code."""
        exc = WebExecutionError(code="WEB_UNSAFE_URL", message="nope")
        assert exc.code == "WEB_UNSAFE_URL"
        assert str(exc) == "nope"
