"""Unit tests for reddit hot ranking."""

from datetime import timedelta

import pytest

from ballot.domain.ranking import EPOCH, reddit_hot


class TestRedditHot:
    """Tests for reddit_hot."""

    def test_zero_score_at_epoch_is_zero(self):
        assert reddit_hot(0, EPOCH) == 0.0

    def test_ten_net_votes_is_one_order(self):
        assert reddit_hot(10, EPOCH) == pytest.approx(1.0)
        assert reddit_hot(-10, EPOCH) == pytest.approx(-1.0)

    def test_every_45000_seconds_is_worth_one_order(self):
        later = EPOCH + timedelta(seconds=45000)
        assert reddit_hot(1, later) == pytest.approx(1.0)
        assert reddit_hot(10, EPOCH) == pytest.approx(reddit_hot(1, later))

    def test_newer_item_beats_older_with_same_score(self):
        created = EPOCH + timedelta(days=6000)
        assert reddit_hot(5, created + timedelta(hours=1)) > reddit_hot(5, created)

    def test_naive_datetime_is_treated_as_utc(self):
        created = EPOCH + timedelta(days=10)
        naive = created.replace(tzinfo=None)
        assert reddit_hot(3, naive) == reddit_hot(3, created)

    def test_negative_score_ranks_below_positive(self):
        created = EPOCH + timedelta(days=10)
        assert reddit_hot(-5, created) < reddit_hot(0, created) < reddit_hot(5, created)
