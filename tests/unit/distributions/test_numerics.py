from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import norm, poisson

from pysatl_distributions.distributions.numerics import (
    as_scalar_or_array,
    discrete_ppf_from_cdf,
    integer_mask,
    ppf_from_cdf,
    vectorize_quantile,
)
from pysatl_distributions.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_distributions.exceptions import ConvergenceWarning


class TestHelpers:
    def test_as_scalar_or_array_returns_float_for_scalar_input(self):
        result = as_scalar_or_array(np.array([2.5]), 1.0)
        assert isinstance(result, float)
        assert result == 2.5

    def test_as_scalar_or_array_keeps_arrays(self):
        values = np.array([1.0, 2.0])
        assert as_scalar_or_array(values, [0.0, 0.0]) is values

    def test_integer_mask(self):
        x = np.array([0.0, 1.5, -2.0, np.inf, np.nan, 3.0])
        assert integer_mask(x).tolist() == [True, False, True, False, False, True]


class TestPpfFromCdf:
    @pytest.mark.parametrize("q", [1e-6, 0.025, 0.3, 0.5, 0.9, 0.999999])
    def test_inverts_normal_cdf(self, q):
        result = ppf_from_cdf(lambda x: float(norm.cdf(x)), q, x0=5.0, init_step=0.5)
        assert result == pytest.approx(norm.ppf(q), abs=1e-8)

    def test_respects_lower_bound(self):
        def cdf(x: float) -> float:
            return 1.0 - math.exp(-x) if x > 0.0 else 0.0

        result = ppf_from_cdf(cdf, 0.5, x0=0.0, init_step=10.0, lower=0.0)
        assert result == pytest.approx(math.log(2.0), abs=1e-9)

    @pytest.mark.parametrize("q, expected", [(0.0, -3.0), (-1.0, -3.0), (1.0, 7.0), (2.0, 7.0)])
    def test_bounds_outside_open_unit_interval(self, q, expected):
        assert ppf_from_cdf(lambda x: 0.5, q, lower=-3.0, upper=7.0) == expected

    def test_bisection_cap_warns(self):
        with pytest.warns(ConvergenceWarning):
            ppf_from_cdf(lambda x: float(norm.cdf(x)), 0.3, max_iter=2)

    def test_bracket_cap_warns_and_returns_nan(self):
        with pytest.warns(ConvergenceWarning):
            result = ppf_from_cdf(lambda x: 0.0, 0.5, max_expand=3)
        assert math.isnan(result)


class TestDiscretePpfFromCdf:
    def setup_method(self):
        self.support = IntegerLatticeDiscreteSupport(min_k=0)
        self.rate = 4.0

    def cdf(self, k: int) -> float:
        return float(poisson.cdf(k, self.rate))

    @pytest.mark.parametrize("q", [0.01, 0.2, 0.5, 0.8, 0.999])
    def test_matches_scipy(self, q):
        assert discrete_ppf_from_cdf(self.cdf, q, self.support, start=4) == poisson.ppf(
            q, self.rate
        )

    def test_leftmost_point_reaching_level(self):
        q = float(poisson.cdf(3, self.rate))
        assert discrete_ppf_from_cdf(self.cdf, q, self.support) == 3.0

    def test_limits(self):
        assert discrete_ppf_from_cdf(self.cdf, 0.0, self.support) == 0.0
        assert discrete_ppf_from_cdf(self.cdf, 1.0, self.support) == math.inf

    def test_bounded_lattice(self):
        support = IntegerLatticeDiscreteSupport(min_k=2, max_k=6)

        def cdf(k: int) -> float:
            return (k - 1) / 5.0

        assert discrete_ppf_from_cdf(cdf, 1.0, support) == 6.0
        assert discrete_ppf_from_cdf(cdf, 0.5, support) == 4.0
        assert discrete_ppf_from_cdf(cdf, 0.1, support) == 2.0

    def test_left_unbounded_lattice_raises(self):
        with pytest.raises(RuntimeError):
            discrete_ppf_from_cdf(self.cdf, 0.5, IntegerLatticeDiscreteSupport())

    def test_expansion_cap_warns(self):
        with pytest.warns(ConvergenceWarning):
            result = discrete_ppf_from_cdf(lambda k: 0.0, 0.5, self.support, max_expand=4)
        assert result == math.inf


def test_vectorize_quantile_keeps_shape():
    values = vectorize_quantile(lambda q: 2.0 * q, np.array([[0.1, 0.2], [0.3, 0.4]]))
    np.testing.assert_allclose(values, [[0.2, 0.4], [0.6, 0.8]])
    assert vectorize_quantile(lambda q: 2.0 * q, 0.25) == 0.5
