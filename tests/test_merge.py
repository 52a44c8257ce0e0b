"""Tests for merging accepted scores into player records."""

import pytest

from scoregate.core.errors import RejectionCode, SubmissionRejected
from scoregate.services.merge import ScoreMerger, round_score
from scoregate.services.validation import PlayerIdentity, ValidatedScore


@pytest.fixture()
def merger() -> ScoreMerger:
    return ScoreMerger()


def _score(**overrides) -> ValidatedScore:
    values = {"device_id": "D1", "player_name": "Ann", "score": 120, "mode": "solo"}
    values.update(overrides)
    return ValidatedScore(**values)


def test_round_score_rounds_half_up() -> None:
    assert round_score(12.5) == 13
    assert round_score(12.49) == 12
    assert round_score(0) == 0


def test_first_submission_creates_record(merger, memory_store) -> None:
    result = merger.merge(memory_store, _score(score=119.6, contact="ann@example.com"))

    assert result.created is True
    assert result.record.device_id == "D1"
    assert result.record.score == 120
    assert result.record.play_count == 1
    assert result.record.contact == "ann@example.com"


def test_lower_score_keeps_best_and_counts_play(merger, memory_store) -> None:
    merger.merge(memory_store, _score(score=120))
    result = merger.merge(memory_store, _score(score=90))

    assert result.created is False
    assert result.record.score == 120
    assert result.record.play_count == 2


def test_higher_score_replaces_best(merger, memory_store) -> None:
    merger.merge(memory_store, _score(score=120))
    assert merger.merge(memory_store, _score(score=300)).record.score == 300


def test_name_follows_latest_claim_and_contact_is_never_cleared(merger, memory_store) -> None:
    merger.merge(memory_store, _score(contact="ann@example.com"))
    result = merger.merge(memory_store, _score(player_name="Annie", contact=None))

    assert result.record.player_name == "Annie"
    assert result.record.contact == "ann@example.com"
    assert memory_store.find_by_name("Ann") is None


def test_modes_are_tracked_separately(merger, memory_store) -> None:
    merger.merge(memory_store, _score(mode="solo", score=50))
    merger.merge(memory_store, _score(mode="versus", score=70))

    assert memory_store.find_by_device("D1", "solo").score == 50
    assert memory_store.find_by_device("D1", "versus").score == 70
    assert len(memory_store) == 2


def test_name_owned_by_other_device_is_taken(merger, memory_store) -> None:
    merger.merge(memory_store, _score(device_id="D1"))

    with pytest.raises(SubmissionRejected) as excinfo:
        merger.merge(memory_store, _score(device_id="D2"))

    assert excinfo.value.code is RejectionCode.NAME_TAKEN
    assert memory_store.find_by_device("D2", "solo") is None


def test_contact_owned_by_other_device_is_taken(merger, memory_store) -> None:
    merger.merge(memory_store, _score(device_id="D1", contact="shared@example.com"))

    with pytest.raises(SubmissionRejected) as excinfo:
        merger.merge(
            memory_store,
            _score(device_id="D2", player_name="Bob", contact="shared@example.com"),
        )

    assert excinfo.value.code is RejectionCode.CONTACT_TAKEN
    assert len(memory_store) == 1


def test_register_creates_placeholder(merger, memory_store) -> None:
    result = merger.register(memory_store, PlayerIdentity(device_id="D1", player_name="Ann"))

    assert result.created is True
    assert result.record.score == 0
    assert result.record.play_count == 0
    assert result.record.mode == "solo"


def test_register_updates_existing_record_without_touching_score(merger, memory_store) -> None:
    merger.merge(memory_store, _score(mode="versus", score=88))

    result = merger.register(
        memory_store, PlayerIdentity(device_id="D1", player_name="Ann2", contact="a@b.c")
    )

    assert result.created is False
    assert result.record.mode == "versus"
    assert result.record.score == 88
    assert result.record.play_count == 1
    assert result.record.player_name == "Ann2"
    assert result.record.contact == "a@b.c"


def test_register_respects_name_ownership(merger, memory_store) -> None:
    merger.register(memory_store, PlayerIdentity(device_id="D1", player_name="Ann"))

    with pytest.raises(SubmissionRejected) as excinfo:
        merger.register(memory_store, PlayerIdentity(device_id="D2", player_name="Ann"))

    assert excinfo.value.code is RejectionCode.NAME_TAKEN
