"""Tests for claim validation."""

import logging
import math

import pytest

from scoregate.core.errors import RejectionCode, SubmissionRejected
from scoregate.services.validation import ScoreClaim, ScoreValidator


@pytest.fixture()
def validator() -> ScoreValidator:
    return ScoreValidator()


def _claim(**overrides) -> ScoreClaim:
    values = {"device_id": "device-1", "player_name": "Ann", "score": 120}
    values.update(overrides)
    return ScoreClaim(**values)


def _code(validator: ScoreValidator, claim: ScoreClaim) -> RejectionCode:
    with pytest.raises(SubmissionRejected) as excinfo:
        validator.validate(claim)
    return excinfo.value.code


def test_valid_claim_is_normalized(validator) -> None:
    result = validator.validate(
        _claim(player_name="  Ann  ", device_id=" device-1 ", contact="  ann@example.com ")
    )

    assert result.player_name == "Ann"
    assert result.device_id == "device-1"
    assert result.contact == "ann@example.com"
    assert result.mode == "solo"
    assert result.score == 120


def test_fields_are_truncated(validator) -> None:
    result = validator.validate(
        _claim(player_name="n" * 40, device_id="d" * 80, contact="c" * 200)
    )

    assert len(result.player_name) == 32
    assert len(result.device_id) == 64
    assert len(result.contact) == 128


@pytest.mark.parametrize(("mode", "expected"), [("versus", "versus"), ("solo", "solo"), (None, "solo"), ("coop", "solo")])
def test_mode_defaults_to_solo(validator, mode, expected) -> None:
    assert validator.validate(_claim(mode=mode)).mode == expected


@pytest.mark.parametrize("contact", [None, "", "   "])
def test_blank_contact_is_absent(validator, contact) -> None:
    assert validator.validate(_claim(contact=contact)).contact is None


@pytest.mark.parametrize("name", [None, "", "   ", 7])
def test_missing_name_is_invalid(validator, name) -> None:
    assert _code(validator, _claim(player_name=name)) is RejectionCode.INVALID_INPUT


@pytest.mark.parametrize("device_id", [None, "", "  ", ["d"]])
def test_missing_device_is_invalid(validator, device_id) -> None:
    assert _code(validator, _claim(device_id=device_id)) is RejectionCode.INVALID_INPUT


@pytest.mark.parametrize("score", [None, "120", -1, math.nan, math.inf, True])
def test_non_numeric_or_negative_score_is_invalid(validator, score) -> None:
    assert _code(validator, _claim(score=score)) is RejectionCode.INVALID_INPUT


def test_ceiling_is_inclusive(validator) -> None:
    assert validator.validate(_claim(score=9999)).score == 9999
    assert validator.validate(_claim(score=0)).score == 0


def test_implausible_score_is_rejected_and_logged(validator, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="scoregate.services.validation"):
        assert _code(validator, _claim(score=10000)) is RejectionCode.SCORE_INVALID

    assert any("[anti-cheat]" in record.getMessage() for record in caplog.records)


def test_huge_integer_score_is_rejected_as_implausible(validator, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="scoregate.services.validation"):
        assert _code(validator, _claim(score=10**400)) is RejectionCode.SCORE_INVALID

    assert any("bits>" in record.getMessage() for record in caplog.records)


def test_huge_negative_integer_is_invalid(validator) -> None:
    assert _code(validator, _claim(score=-(10**400))) is RejectionCode.INVALID_INPUT


def test_structural_failure_wins_over_ceiling(validator) -> None:
    assert _code(validator, _claim(player_name="", score=10000)) is RejectionCode.INVALID_INPUT


def test_validate_identity(validator) -> None:
    identity = validator.validate_identity(player_name=" Bo ", device_id="dev", contact=" x ")
    assert (identity.player_name, identity.device_id, identity.contact) == ("Bo", "dev", "x")
