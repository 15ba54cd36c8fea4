"""Unit tests for vote tallies and counter deltas."""

from ballot.domain.model import TallyDelta, VoteTally


class TestTallyDelta:
    """Tests for TallyDelta constructors."""

    def test_create_upvote(self):
        delta = TallyDelta.for_create(1)
        assert (delta.count, delta.total, delta.up, delta.down) == (1, 1, 1, 0)

    def test_create_neutral_vote_only_counts(self):
        delta = TallyDelta.for_create(0)
        assert (delta.count, delta.total, delta.up, delta.down) == (1, 0, 0, 0)

    def test_recast_across_sign_moves_up_and_down(self):
        delta = TallyDelta.for_update(1, -1)
        assert (delta.count, delta.total, delta.up, delta.down) == (0, -2, -1, 1)

    def test_recast_within_sign_changes_total_only(self):
        delta = TallyDelta.for_update(1, 3)
        assert (delta.count, delta.total, delta.up, delta.down) == (0, 2, 0, 0)

    def test_recast_to_same_value_is_zero(self):
        assert TallyDelta.for_update(2, 2).is_zero

    def test_delete_reverses_create(self):
        created = TallyDelta.for_create(-3)
        deleted = TallyDelta.for_delete(-3)
        assert VoteTally().apply(created).apply(deleted) == VoteTally()


class TestVoteTally:
    """Tests for VoteTally."""

    def test_from_values(self):
        tally = VoteTally.from_values([1, 1, -1, 0])
        assert tally.total_count == 4
        assert tally.total_value == 1
        assert tally.positive_count == 2
        assert tally.negative_count == 1
        assert tally.plusminus == 1

    def test_percentages(self):
        tally = VoteTally.from_values([1, 1, -1, 0])
        assert tally.percent_for == 50.0
        assert tally.percent_against == 25.0

    def test_percentages_round_to_one_decimal(self):
        tally = VoteTally.from_values([1, 1, 1, 1, 1, -1])
        assert tally.percent_for == 83.3
        assert tally.percent_against == 16.7

    def test_empty_tally_percentages_are_zero(self):
        assert VoteTally().percent_for == 0.0
        assert VoteTally().percent_against == 0.0

    def test_applied_deltas_match_recomputation(self):
        """Create 5, recast to -2, add +1, delete the +1."""
        tally = (
            VoteTally()
            .apply(TallyDelta.for_create(5))
            .apply(TallyDelta.for_update(5, -2))
            .apply(TallyDelta.for_create(1))
            .apply(TallyDelta.for_delete(1))
        )
        assert tally == VoteTally.from_values([-2])

    def test_addition(self):
        combined = VoteTally.from_values([1, -1]) + VoteTally.from_values([2])
        assert combined == VoteTally.from_values([1, -1, 2])
