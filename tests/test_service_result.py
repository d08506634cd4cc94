"""Tests for the ServiceResult union."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from sellerhub.models.service_result import Error, Loading, Success, is_terminal


class TestVariants:
    """Each variant carries only what it should."""

    def test_loading_defaults_to_in_flight(self):
        assert Loading().is_loading is True
        assert Loading().data is None

    def test_success_carries_payload(self):
        assert Success(data=[1, 2]).data == [1, 2]

    def test_success_payload_may_be_absent(self):
        assert Success().data is None

    def test_error_never_carries_data(self):
        error = Error(message="boom")
        assert error.message == "boom"
        assert error.data is None

    def test_error_tag_is_fixed(self):
        with pytest.raises(ValidationError):
            Error(message="boom", kind="success")

    def test_variants_are_frozen(self):
        result = Success(data="x")
        with pytest.raises(ValidationError):
            result.data = "y"

    def test_tags_are_distinct(self):
        assert {Loading().kind, Success().kind, Error().kind} == {
            "loading", "success", "error",
        }


class TestFromException:
    """Error.from_exception always produces a usable message."""

    def test_uses_exception_text(self):
        assert Error.from_exception(ConnectionError("no route")).message == "no route"

    def test_falls_back_to_exception_type(self):
        assert Error.from_exception(TimeoutError()).message == "TimeoutError"


class TestIsTerminal:

    @pytest.mark.parametrize(
        "result, expected",
        [
            (Loading(is_loading=True), False),
            (Loading(is_loading=False), True),
            (Success(data=[]), False),
            (Error(message="x"), True),
        ],
    )
    def test_terminal_states(self, result, expected):
        assert is_terminal(result) is expected


class TestExhaustiveMatch:

    @staticmethod
    def describe(result) -> str:
        match result:
            case Loading(is_loading=flag):
                return f"loading:{flag}"
            case Success(data=data):
                return f"success:{data}"
            case Error(message=message):
                return f"error:{message}"
        raise AssertionError("unreachable")

    def test_every_variant_matches_its_case(self):
        assert self.describe(Loading(is_loading=False)) == "loading:False"
        assert self.describe(Success(data=3)) == "success:3"
        assert self.describe(Error(message="m")) == "error:m"
