"""Tests for sampling statistics and SweepCollector."""

import json

import pytest

from hatchery.core.errors import InsufficientSamples
from hatchery.metrics.collector import (
    ConfigurationResult,
    SampleStatistics,
    SweepCollector,
    aggregate,
)


def _result(p=0.502, fitness="maxed_locus", finish="either_maxed",
            operator="partial_inheritance_5", stats=None, error=None):
    return ConfigurationResult(
        male_probability=p,
        fitness_function=fitness,
        finish_condition=finish,
        breeding_operator=operator,
        trial_count=3,
        statistics=stats,
        error=error,
    )


class TestAggregate:
    def test_mean_and_sample_std(self):
        stats = aggregate([1, 2, 3])
        assert stats.mean == 2.0
        assert stats.std_dev == 1.0

    def test_unpacks_as_pair(self):
        mean, std_dev = aggregate([4, 4, 4, 4])
        assert mean == 4.0
        assert std_dev == 0.0

    def test_bessel_correction(self):
        stats = aggregate([2, 4, 4, 4, 5, 5, 7, 9])
        # Population std is 2.0; sample std divides by n - 1
        assert stats.std_dev == pytest.approx((32 / 7) ** 0.5)

    def test_empty_raises(self):
        with pytest.raises(InsufficientSamples):
            aggregate([])

    def test_single_sample_raises(self):
        with pytest.raises(InsufficientSamples, match="at least 2"):
            aggregate([5])

    def test_insufficient_samples_is_value_error(self):
        with pytest.raises(ValueError):
            aggregate([])


class TestConfigurationResult:
    def test_summary_format(self):
        r = _result(stats=SampleStatistics(2.0, 1.0))
        assert r.converged
        assert r.summary() == "2.0 std dev 1.0"

    def test_failed_summary(self):
        r = _result(error="did not converge after 10 eggs")
        assert not r.converged
        assert r.summary() == "did not converge after 10 eggs"

    def test_label(self):
        assert _result().label == "0.502, maxed_locus, either_maxed, partial_inheritance_5"


class TestSweepCollector:
    def test_four_level_report(self):
        c = SweepCollector()
        c.record(_result(stats=SampleStatistics(10.0, 2.5)))
        c.record(_result(operator="independent_locus_mutation",
                         stats=SampleStatistics(30.0, 4.0)))
        c.record(_result(p=0.249, error="did not converge after 5 eggs"))

        report = c.to_report()
        assert report["0.502"]["maxed_locus"]["either_maxed"] == {
            "partial_inheritance_5": "10.0 std dev 2.5",
            "independent_locus_mutation": "30.0 std dev 4.0",
        }
        assert (
            report["0.249"]["maxed_locus"]["either_maxed"]["partial_inheritance_5"]
            == "did not converge after 5 eggs"
        )
        assert len(c) == 3
        assert len(c.failures) == 1

    def test_to_json(self):
        c = SweepCollector()
        c.record(_result(stats=SampleStatistics(1.5, 0.5)))
        parsed = json.loads(c.to_json())
        assert parsed["0.502"]["maxed_locus"]["either_maxed"]["partial_inheritance_5"] == (
            "1.5 std dev 0.5"
        )

    def test_get(self):
        c = SweepCollector()
        r = _result(stats=SampleStatistics(1.0, 0.0))
        c.record(r)
        assert c.get(0.502, "maxed_locus", "either_maxed", "partial_inheritance_5") is r
        with pytest.raises(KeyError):
            c.get(0.249, "maxed_locus", "either_maxed", "partial_inheritance_5")
