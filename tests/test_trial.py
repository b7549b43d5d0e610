"""Tests for the single-trial breeding loop."""

import pytest

from hatchery.core.breeding import BreedingEngine
from hatchery.core.config import ExperimentConfig
from hatchery.core.errors import DidNotConverge
from hatchery.core.fitness import average_quality, maxed_locus_score
from hatchery.core.individual import LOCI, Individual, Sex
from hatchery.core.termination import either_near_maxed
from hatchery.core.trial import run_trial

TEN = 10 / 32


def _uniform(value, sex):
    return Individual.from_loci(sex, {name: value for name in LOCI})


def _never_breed(male, female, male_probability, rng):
    raise AssertionError("breeding should not happen")


def _never_finish(male, female):
    return False


class TestImmediateFinish:
    def test_seeded_pair_already_near_maxed(self, scripted):
        # Just below 0.5 -> male, exactly 0.5 -> female; every locus rolls 31
        src = scripted([0.4999] + [0.999] * 6 + [0.5] + [0.999] * 6)
        eggs = run_trial(0.5, either_near_maxed, maxed_locus_score, _never_breed, rng=src)
        assert eggs == 0
        assert src.remaining == 0


class TestSafetyCap:
    def test_did_not_converge_after_cap(self, rng):
        breed = BreedingEngine(ExperimentConfig()).get_operator("partial_inheritance_5")
        calls = []

        def counting_breed(male, female, male_probability, r):
            calls.append(1)
            return breed(male, female, male_probability, r)

        with pytest.raises(DidNotConverge) as exc_info:
            run_trial(
                0.502, _never_finish, maxed_locus_score, counting_breed,
                rng=rng, max_eggs=1000, configuration="always false",
            )
        assert exc_info.value.egg_count == 1000
        assert exc_info.value.configuration == "always false"
        assert len(calls) == 1000

    def test_unreachable_female_reported_as_non_convergence(self, rng):
        with pytest.raises(DidNotConverge) as exc_info:
            run_trial(1.0, either_near_maxed, maxed_locus_score, _never_breed,
                      rng=rng, max_eggs=100)
        assert exc_info.value.egg_count == 0

    def test_founders_do_not_count_against_cap(self, scripted):
        # Two males before the first female; all three roll 31 on every locus
        src = scripted(
            [0.1] + [0.999] * 6 + [0.1] + [0.999] * 6 + [0.9] + [0.999] * 6
        )
        eggs = run_trial(0.5, either_near_maxed, maxed_locus_score, _never_breed,
                         rng=src, max_eggs=2)
        assert eggs == 0
        assert src.remaining == 0

    def test_all_male_seeding_stops_at_cap(self, scripted):
        src = scripted([], then=0.1)
        with pytest.raises(DidNotConverge):
            run_trial(1.0, either_near_maxed, maxed_locus_score, _never_breed,
                      rng=src, max_eggs=3)
        assert src.calls == 3 * 7


class TestReplacement:
    def test_only_strict_improvements_replace(self, scripted):
        # Seed one male and one female with every locus at 10
        src = scripted([0.1] + [TEN] * 6 + [0.9] + [TEN] * 6)
        eggs = iter([
            _uniform(5, Sex.MALE),      # worse: discarded
            _uniform(20, Sex.FEMALE),   # better: replaces female
            _uniform(10, Sex.MALE),     # equal: discarded
            _uniform(31, Sex.MALE),     # better: replaces male
        ])
        seen = []

        def breed(male, female, male_probability, rng):
            return next(eggs)

        def finish(male, female):
            seen.append((male.values()[0], female.values()[0]))
            return male.maxed_locus_count() == 6

        count = run_trial(0.5, finish, average_quality, breed, rng=src)
        assert count == 4
        assert seen == [(10, 10), (10, 10), (10, 20), (10, 20), (31, 20)]

    def test_breed_receives_current_parents(self, scripted):
        src = scripted([0.1] + [TEN] * 6 + [0.9] + [TEN] * 6)
        received = []

        def breed(male, female, male_probability, rng):
            received.append((male.sex, female.sex, male_probability))
            return _uniform(31, Sex.FEMALE)

        run_trial(0.5, either_near_maxed, maxed_locus_score, breed, rng=src)
        assert received == [(Sex.MALE, Sex.FEMALE, 0.5)]


class TestRealRuns:
    @pytest.mark.parametrize("operator", [
        "partial_inheritance_5",
        "adaptive_partial_inheritance",
    ])
    def test_converges_with_seeded_rng(self, operator, rng):
        breed = BreedingEngine(ExperimentConfig()).get_operator(operator)
        eggs = run_trial(0.502, either_near_maxed, maxed_locus_score, breed,
                         rng=rng, max_eggs=1_000_000)
        assert eggs >= 0

    def test_default_rng(self):
        breed = BreedingEngine(ExperimentConfig()).get_operator("partial_inheritance_5")
        eggs = run_trial(0.502, either_near_maxed, maxed_locus_score, breed)
        assert isinstance(eggs, int)


class TestValidation:
    @pytest.mark.parametrize("p", [0.0, -0.1, 1.5])
    def test_male_probability_bounds(self, p):
        with pytest.raises(ValueError, match="Male probability"):
            run_trial(p, either_near_maxed, maxed_locus_score, _never_breed)
