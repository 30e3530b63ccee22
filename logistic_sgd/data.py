import numpy as np

from .errors import InvalidConfigurationError
from .losses import sigmoid

TRUE_COEFFICIENTS = (3.0, 1.0, -2.0)


def make_logistic_dataset(n_samples=100, coefficients=TRUE_COEFFICIENTS, low=-5.0, high=5.0, seed=0):
    """
    Synthetic data from a known logistic model.

    Features are uniform in [low, high), one column per non-intercept
    coefficient, with a leading column of 1.0 for the intercept. Labels are
    Bernoulli(sigmoid(X @ coefficients)) draws.

    Returns (X, y): X is (n_samples, len(coefficients)) float64, y is int 0/1.
    """
    if n_samples < 1:
        raise InvalidConfigurationError(f"n_samples must be >= 1, got {n_samples}")
    if low >= high:
        raise InvalidConfigurationError(f"low ({low}) must be below high ({high})")
    beta = np.asarray(coefficients, dtype=np.float64)
    if beta.ndim != 1 or beta.shape[0] < 1:
        raise InvalidConfigurationError("coefficients must be a non-empty 1-D sequence")

    rng = np.random.default_rng(seed)
    features = rng.uniform(low, high, size=(n_samples, beta.shape[0] - 1))
    X = np.hstack([np.ones((n_samples, 1)), features])

    p = sigmoid(X @ beta)
    y = (rng.uniform(size=n_samples) < p).astype(int)
    return X, y
