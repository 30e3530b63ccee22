import logging
import math
import warnings

import numpy as np
import pytest

from logistic_sgd.errors import InvalidInputError, NumericDegeneracyWarning
from logistic_sgd.losses import EPSILON, mean_squared_error, negative_log_likelihood, sigmoid


def test_sigmoid_of_zero_is_exactly_half():
    assert sigmoid(0.0) == 0.5
    assert sigmoid(0) == 0.5


def test_sigmoid_stays_in_open_interval_for_moderate_scores():
    for z in np.linspace(-30, 30, 61):
        p = sigmoid(z)
        assert 0.0 < p < 1.0


def test_sigmoid_saturates_without_overflow():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert sigmoid(-800.0) == 0.0
        assert sigmoid(800.0) == 1.0
        out = sigmoid(np.array([-800.0, 0.0, 800.0]))
    np.testing.assert_array_equal(out, [0.0, 0.5, 1.0])


def test_sigmoid_is_symmetric():
    z = np.array([-3.0, -0.5, 0.25, 2.0, 7.0])
    np.testing.assert_allclose(sigmoid(-z), 1.0 - sigmoid(z))


def test_mse_is_zero_iff_predictions_equal_labels():
    assert mean_squared_error([0, 1, 1], [0.0, 1.0, 1.0]) == 0.0
    assert mean_squared_error([0, 1, 1], [0.0, 1.0, 0.999]) > 0.0


def test_mse_value():
    assert mean_squared_error([1, 0], [0.5, 0.5]) == pytest.approx(0.25)


def test_mse_length_mismatch():
    with pytest.raises(InvalidInputError, match="length mismatch"):
        mean_squared_error([0, 1, 1], [0.5, 0.5])


def test_losses_reject_empty_input():
    with pytest.raises(InvalidInputError):
        mean_squared_error([], [])
    with pytest.raises(InvalidInputError):
        negative_log_likelihood([], [])


def test_nll_value():
    assert negative_log_likelihood([1, 0], [0.5, 0.5]) == pytest.approx(2 * math.log(2))


def test_nll_length_mismatch():
    with pytest.raises(InvalidInputError):
        negative_log_likelihood([1], [0.5, 0.5])


def test_nll_clamps_probability_of_zero_for_positive_label(caplog):
    with caplog.at_level(logging.WARNING, logger="logistic_sgd.losses"):
        value = negative_log_likelihood([1], [0.0])
    assert math.isfinite(value)
    assert value == pytest.approx(-math.log(EPSILON))
    assert NumericDegeneracyWarning.__name__ in caplog.text
    assert "1 predicted probabilities saturated" in caplog.text


def test_nll_clamps_probability_of_one_for_negative_label(caplog):
    with caplog.at_level(logging.WARNING, logger="logistic_sgd.losses"):
        value = negative_log_likelihood([0, 1], [1.0, 0.9])
    assert math.isfinite(value)
    assert value == pytest.approx(-math.log(EPSILON) - math.log(0.9), rel=0.01)
    assert NumericDegeneracyWarning.__name__ in caplog.text


def test_nll_clamp_is_not_raised_under_error_filter():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        value = negative_log_likelihood([1, 0], [0.0, 1.0])
    assert math.isfinite(value)


def test_nll_does_not_log_for_interior_probabilities(caplog):
    with caplog.at_level(logging.WARNING, logger="logistic_sgd.losses"):
        negative_log_likelihood([0, 1, 1], [0.1, 0.8, 0.999])
    assert caplog.records == []


def test_losses_are_non_negative():
    rng = np.random.default_rng(0)
    for _ in range(20):
        y = rng.integers(0, 2, size=15)
        p = rng.uniform(0.001, 0.999, size=15)
        assert mean_squared_error(y, p) >= 0.0
        assert negative_log_likelihood(y, p) >= 0.0
