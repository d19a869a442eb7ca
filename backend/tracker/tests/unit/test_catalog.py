import pytest

from tracker.logic.catalog import (
    ADVERSARIES,
    MAX_ADVERSARY_LEVEL,
    SCENARIOS,
    adversary_difficulty,
    find_adversary,
    scenario_difficulty,
)


class TestAdversaries:
    def test_every_adversary_has_all_levels(self):
        for adversary in ADVERSARIES:
            assert [lvl.level for lvl in adversary.levels] == list(range(MAX_ADVERSARY_LEVEL + 1))

    def test_difficulty_never_decreases_with_level(self):
        for adversary in ADVERSARIES:
            difficulties = [lvl.difficulty for lvl in adversary.levels]
            assert difficulties == sorted(difficulties), adversary.name

    def test_names_are_unique(self):
        names = [a.name for a in ADVERSARIES]
        assert len(names) == len(set(names))

    def test_find_adversary(self):
        england = find_adversary("The Kingdom of England")
        assert england is not None
        assert england.label == "England"
        assert find_adversary("The Kingdom of Atlantis") is None


class TestAdversaryDifficulty:
    def test_known_levels(self):
        assert adversary_difficulty("The Kingdom of England", 0) == 1
        assert adversary_difficulty("The Kingdom of England", 6) == 11
        assert adversary_difficulty("The Kingdom of France (Plantation Colony)", 0) == 2

    def test_unknown_adversary_rejected(self):
        with pytest.raises(ValueError, match="Unknown adversary"):
            adversary_difficulty("The Kingdom of Atlantis", 1)

    @pytest.mark.parametrize("level", [-1, MAX_ADVERSARY_LEVEL + 1])
    def test_level_out_of_range_rejected(self, level):
        with pytest.raises(ValueError, match="between 0 and 6"):
            adversary_difficulty("The Kingdom of Sweden", level)


class TestScenarioDifficulty:
    def test_known_scenarios(self):
        assert scenario_difficulty("Blitz") == 0
        assert scenario_difficulty("Dahan Insurrection") == 4

    def test_negative_difficulty(self):
        assert scenario_difficulty("Destiny Unfolds") == -1

    def test_unknown_scenario_rejected(self):
        with pytest.raises(ValueError, match="Unknown scenario"):
            scenario_difficulty("Picnic")

    def test_names_are_unique(self):
        names = [s.name for s in SCENARIOS]
        assert len(names) == len(set(names))
