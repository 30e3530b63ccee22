import logging

import numpy as np

from .errors import InvalidInputError, NumericDegeneracyWarning

logger = logging.getLogger(__name__)

# Probabilities are clamped to [EPSILON, 1 - EPSILON] before taking logs, so a
# single row contributes at most -log(1e-15) ~= 34.54 to the NLL.
EPSILON = 1e-15


def sigmoid(z):
    """
    Logistic transform 1 / (1 + exp(-z)).

    Negative scores go through exp(z) / (1 + exp(z)) so exp never overflows.
    Scalars in, float out; arrays in, float64 array out.
    """
    if np.ndim(z) == 0:
        z = float(z)
        if z >= 0:
            return float(1.0 / (1.0 + np.exp(-z)))
        ez = np.exp(z)
        return float(ez / (1.0 + ez))

    z = np.asarray(z, dtype=np.float64)
    out = np.empty_like(z)
    pos = z >= 0
    out[pos] = 1.0 / (1.0 + np.exp(-z[pos]))
    ez = np.exp(z[~pos])
    out[~pos] = ez / (1.0 + ez)
    return out


def _paired(y_true, y_pred):
    y_true = np.asarray(y_true, dtype=np.float64).reshape(-1)
    y_pred = np.asarray(y_pred, dtype=np.float64).reshape(-1)
    if y_true.shape[0] != y_pred.shape[0]:
        raise InvalidInputError(
            f"length mismatch: {y_true.shape[0]} labels vs {y_pred.shape[0]} predictions"
        )
    if y_true.shape[0] == 0:
        raise InvalidInputError("loss of an empty sequence is undefined")
    return y_true, y_pred


def mean_squared_error(y_true, y_pred) -> float:
    y_true, y_pred = _paired(y_true, y_pred)
    return float(np.mean((y_true - y_pred) ** 2))


def negative_log_likelihood(y_true, y_pred) -> float:
    """
    -sum(y * log(p) + (1 - y) * log(1 - p)) over paired elements.

    Probabilities of exactly 0 or 1 are clamped to EPSILON / 1 - EPSILON and a
    NumericDegeneracyWarning record is logged; nothing is raised and the result
    is always finite.
    """
    y_true, p = _paired(y_true, y_pred)

    saturated = (p <= 0.0) | (p >= 1.0)
    if saturated.any():
        logger.warning(
            "%s: %d predicted probabilities saturated at 0 or 1, clamped to [%g, 1 - %g]",
            NumericDegeneracyWarning.__name__,
            int(saturated.sum()),
            EPSILON,
            EPSILON,
        )

    p = np.clip(p, EPSILON, 1.0 - EPSILON)
    return float(-np.sum(y_true * np.log(p) + (1.0 - y_true) * np.log(1.0 - p)))
