"""Tests for the detection algorithms."""

from collections.abc import Callable

import pytest

from outlier_finder.core.detectors import (
    find_outliers_dixon_q,
    find_outliers_esd,
    find_outliers_grubbs,
    find_outliers_iqr,
    find_outliers_modified_zscore,
    find_outliers_peirce,
    find_outliers_zscore,
    iqr_bounds,
)
from outlier_finder.core.statistics import compute_statistics
from outlier_finder.core.thresholds import dixon_critical_value

ALL_DETECTORS = [
    find_outliers_iqr,
    find_outliers_zscore,
    find_outliers_modified_zscore,
    find_outliers_grubbs,
    find_outliers_esd,
    find_outliers_dixon_q,
    find_outliers_peirce,
]


class TestDegenerateColumns:
    """Tests shared by every detector."""

    @pytest.mark.parametrize("detector", ALL_DETECTORS)
    def test_constant_column_flags_nothing(
        self, detector: Callable, make_column: Callable, constant_values: list[float]
    ) -> None:
        """Test that a column with no variation has no outliers."""
        assert detector(make_column(constant_values)) == []

    @pytest.mark.parametrize("detector", ALL_DETECTORS)
    def test_long_constant_column_flags_nothing(
        self, detector: Callable, make_column: Callable
    ) -> None:
        """Test a constant column longer than Dixon's range."""
        assert detector(make_column([-3.0] * 40)) == []

    @pytest.mark.parametrize("detector", ALL_DETECTORS)
    def test_empty_column(self, detector: Callable) -> None:
        """Test that an empty column is handled without error."""
        assert detector([]) == []

    @pytest.mark.parametrize("detector", ALL_DETECTORS)
    def test_injected_value_flagged(
        self, detector: Callable, make_column: Callable, injected_values: list[float]
    ) -> None:
        """Test a single extreme value among 25 regular values."""
        assert detector(make_column(injected_values)) == [25]


class TestIQR:
    """Tests for the IQR detector."""

    def test_flags_spike(self, make_column: Callable, spike_values: list[float]) -> None:
        """Test the spike at index 5 lies above the upper fence."""
        assert find_outliers_iqr(make_column(spike_values)) == [5]

    def test_flags_low_values(self, make_column: Callable) -> None:
        """Test values below the lower fence are flagged."""
        assert find_outliers_iqr(make_column([-100, 10, 11, 12, 13, 14])) == [0]

    @pytest.mark.parametrize(
        "values",
        [
            [1, 2, 3, 4],
            [10, 12, 11, 13, 12, 100],
            [5, 5, 5],
            [-7.5, 0.1, 2.2, 100.0, 3.3],
        ],
    )
    def test_bounds_enclose_quartiles(self, make_column: Callable, values: list[float]) -> None:
        """Test lower <= q1 <= q3 <= upper."""
        lower, upper = iqr_bounds(make_column(values))
        stats = compute_statistics(values)
        assert lower <= stats.q1 <= stats.q3 <= upper

    def test_zero_iqr_flags_any_other_value(self, make_column: Callable) -> None:
        """Test that with q1 == q3 the fences collapse onto the quartiles."""
        assert find_outliers_iqr(make_column([5, 5, 5, 5, 5, 5, 5, 6])) == [7]

    def test_custom_multiplier(self, make_column: Callable) -> None:
        """Test a wider fence flags less."""
        column = make_column([1, 2, 3, 4, 5, 6, 7, 8, 9, 20])
        assert find_outliers_iqr(column) == [9]
        assert find_outliers_iqr(column, multiplier=3.0) == []


class TestZScore:
    """Tests for the Z-score detector."""

    def test_small_sample_masks_spike(self, make_column: Callable, spike_values: list[float]) -> None:
        """Test the spike's z-score (~2.24) stays below 3."""
        assert find_outliers_zscore(make_column(spike_values)) == []

    def test_lower_threshold(self, make_column: Callable, spike_values: list[float]) -> None:
        """Test a threshold of 2.0 catches the spike."""
        assert find_outliers_zscore(make_column(spike_values), threshold=2.0) == [5]

    def test_large_sample(self, make_column: Callable) -> None:
        """Test an extreme value among many identical ones is flagged."""
        assert find_outliers_zscore(make_column([10] * 20 + [100])) == [20]


class TestModifiedZScore:
    """Tests for the modified Z-score detector."""

    def test_flags_spike(self, make_column: Callable, spike_values: list[float]) -> None:
        """Test the robust score catches what the plain z-score misses."""
        assert find_outliers_modified_zscore(make_column(spike_values)) == [5]

    def test_zero_mad(self, make_column: Callable) -> None:
        """Test that a zero MAD (majority identical) returns nothing."""
        column = make_column([1, 1, 1, 1, 1, 2, 1000])
        assert compute_statistics([e.value for e in column]).mad == 0
        assert find_outliers_modified_zscore(column) == []


class TestPeirce:
    """Tests for the Peirce proxy."""

    def test_matches_modified_zscore_at_four(self, make_column: Callable) -> None:
        """Test Peirce equals modified Z-score with threshold 4.0."""
        column = make_column([0, 1, 2, 3, 4, 5, 6, 7, 8, 14.5, 16])
        assert find_outliers_peirce(column) == find_outliers_modified_zscore(
            column, threshold=4.0
        )

    def test_stricter_than_modified_zscore(self, make_column: Callable) -> None:
        """Test a value between 3.5 and 4.0 is flagged only by the modified Z-score."""
        # median 5, mad 3: 0.6745 * 17 / 3 = 3.82
        column = make_column([0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 22])
        assert find_outliers_modified_zscore(column) == [10]
        assert find_outliers_peirce(column) == []


class TestGrubbs:
    """Tests for Grubbs' test."""

    def test_flags_spike(self, make_column: Callable, spike_values: list[float]) -> None:
        """Test max deviation 2.24 exceeds the fixed critical value 2.0."""
        assert find_outliers_grubbs(make_column(spike_values)) == [5]

    def test_too_few_samples(self, make_column: Callable) -> None:
        """Test that fewer than 3 values returns nothing."""
        assert find_outliers_grubbs(make_column([1, 1000])) == []

    def test_only_one_point_flagged(self, make_column: Callable) -> None:
        """Test Grubbs reports a single point even when several deviate."""
        flagged = find_outliers_grubbs(make_column([0] * 30 + [100, 120]))
        assert flagged == [31]

    def test_first_of_tied_extremes(self, make_column: Callable) -> None:
        """Test ties resolve to the first point in column order."""
        # mean 1, std 3, both 10s deviate by exactly 3
        assert find_outliers_grubbs(make_column([0] * 18 + [10, 10])) == [18]

    def test_deviation_at_critical_value(self, make_column: Callable) -> None:
        """Test a deviation equal to the critical value is not flagged."""
        # mean 2, std 4, the 10s deviate by exactly 2
        assert find_outliers_grubbs(make_column([0] * 8 + [10, 10])) == []


class TestESD:
    """Tests for the generalized ESD test."""

    def test_too_few_samples(self, make_column: Callable) -> None:
        """Test that fewer than 5 values returns nothing."""
        assert find_outliers_esd(make_column([1, 1, 1, 100])) == []

    def test_spike_column_has_no_budget(self, make_column: Callable, spike_values: list[float]) -> None:
        """Test floor(6 * 0.1) == 0 allows no removals."""
        assert find_outliers_esd(make_column(spike_values)) == []

    def test_removal_order(self, make_column: Callable) -> None:
        """Test outliers are reported in the order they are removed."""
        assert find_outliers_esd(make_column([10] * 18 + [50, 100])) == [19, 18]

    def test_respects_max_outliers(self, make_column: Callable) -> None:
        """Test no more than floor(n * 0.1) points are flagged."""
        column = make_column([10] * 8 + [100, 200])
        assert find_outliers_esd(column) == [9]

    @pytest.mark.parametrize("n", [5, 9, 10, 19, 20, 31, 57])
    def test_never_exceeds_budget(self, make_column: Callable, n: int) -> None:
        """Test the flagged count against floor(n * 0.1) for heavy-tailed data."""
        values = [float(i % 3) for i in range(n - 3)] + [1e3, 1e4, 1e5]
        assert len(find_outliers_esd(make_column(values))) <= n // 10

    def test_stops_when_remaining_is_constant(self, make_column: Callable) -> None:
        """Test iteration ends once the remaining values have no spread."""
        assert find_outliers_esd(make_column([10] * 19 + [100])) == [19]

    def test_custom_fraction(self, make_column: Callable) -> None:
        """Test the outlier budget follows max_outlier_fraction."""
        column = make_column([10] * 18 + [50, 100])
        assert find_outliers_esd(column, max_outlier_fraction=0.05) == [19]


class TestDixonQ:
    """Tests for Dixon's Q test."""

    @pytest.mark.parametrize(
        ("n", "expected"),
        [
            (2, 0.970),
            (3, 0.970),
            (4, 0.829),
            (10, 0.466),
            (12, 0.466),
            (14, 0.466),
            (15, 0.338),
            (19, 0.338),
            (20, 0.298),
            (26, 0.298),
            (29, 0.298),
            (30, 0.239),
        ],
    )
    def test_critical_value_brackets(self, n: int, expected: float) -> None:
        """Test the largest bracket not exceeding n is used."""
        assert dixon_critical_value(n) == expected

    def test_out_of_range_sizes(self, make_column: Callable) -> None:
        """Test n < 3 and n > 30 return nothing."""
        assert find_outliers_dixon_q(make_column([1, 100])) == []
        assert find_outliers_dixon_q(make_column([1.0] * 30 + [1000.0])) == []

    def test_below_critical_value(self, make_column: Callable) -> None:
        """Test a gap ratio of 0.889 does not beat 0.970 at n=3."""
        assert find_outliers_dixon_q(make_column([1, 2, 10])) == []

    def test_flags_high(self, make_column: Callable) -> None:
        """Test the maximum is flagged when its gap ratio exceeds Q crit."""
        assert find_outliers_dixon_q(make_column([1, 2, 3, 50])) == [3]

    def test_flags_low(self, make_column: Callable) -> None:
        """Test the minimum is flagged when its gap ratio exceeds Q crit."""
        assert find_outliers_dixon_q(make_column([50, -100, 51, 52, 53])) == [1]

    def test_flags_both_extremes(self, make_column: Callable) -> None:
        """Test both ends fire independently, low first."""
        values = [100.0] + [50.0] * 28 + [0.0]
        assert find_outliers_dixon_q(make_column(values)) == [29, 0]

    def test_spike_column(self, make_column: Callable, spike_values: list[float]) -> None:
        """Test qHigh = 87/90 beats 0.625 at n=6."""
        assert find_outliers_dixon_q(make_column(spike_values)) == [5]
