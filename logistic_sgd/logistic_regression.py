"""
Logistic regression fitted by online (row-by-row) stochastic gradient descent.

Each row's update is applied before the next row is scored, so the losses
reported per epoch follow the coefficient trajectory rather than the
coefficients left at the end of the epoch.
"""

import logging
import math
import numbers
from typing import Callable, List, NamedTuple, Optional

import numpy as np

from .errors import InvalidConfigurationError, InvalidInputError
from .losses import mean_squared_error, negative_log_likelihood, sigmoid

logger = logging.getLogger(__name__)

INITIALIZERS = ("zeros", "random")


class EpochReport(NamedTuple):
    epoch: int  # 1-based
    mse: float
    nll: float


def _as_design_matrix(X) -> np.ndarray:
    if not isinstance(X, np.ndarray):
        X = list(X)
        if not X:
            raise InvalidInputError("design matrix has no rows")
        try:
            widths = [len(row) for row in X]
        except TypeError as e:
            raise InvalidInputError("every row must be a sequence of numbers") from e
        for i, width in enumerate(widths):
            if width != widths[0]:
                raise InvalidInputError(
                    f"row {i} has {width} values, expected {widths[0]} (width of row 0)"
                )
    try:
        X = np.asarray(X, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"design matrix is not numeric: {e}") from e

    if X.ndim != 2:
        raise InvalidInputError(f"design matrix must be 2-D (rows x features), got {X.ndim}-D")
    if X.shape[0] == 0:
        raise InvalidInputError("design matrix has no rows")
    if X.shape[1] == 0:
        raise InvalidInputError("design matrix has no columns")
    if not np.isfinite(X).all():
        i, k = np.argwhere(~np.isfinite(X))[0]
        raise InvalidInputError(f"non-finite value {X[i, k]} at row {i}, column {k}")
    return X


def _as_labels(y, n_rows: int) -> np.ndarray:
    try:
        y = np.asarray(y)
    except ValueError as e:
        raise InvalidInputError(f"labels are not numeric: {e}") from e
    if y.size and y.dtype.kind not in "biuf":
        raise InvalidInputError(f"labels must be numeric 0/1 values, got dtype {y.dtype}")
    y = y.astype(np.float64).reshape(-1)

    if y.shape[0] != n_rows:
        raise InvalidInputError(
            f"design matrix has {n_rows} rows but label vector has {y.shape[0]} values"
        )
    bad = ~np.isin(y, (0.0, 1.0))
    if bad.any():
        i = int(np.argmax(bad))
        raise InvalidInputError(f"label {y[i]!r} at index {i} is not 0 or 1")
    return y


def _check_config(learning_rate, max_epochs, convergence_tolerance):
    if (
        isinstance(learning_rate, bool)
        or not isinstance(learning_rate, numbers.Real)
        or not math.isfinite(learning_rate)
        or learning_rate <= 0
    ):
        raise InvalidConfigurationError(
            f"learning_rate must be a finite number > 0, got {learning_rate!r}"
        )
    if isinstance(max_epochs, bool) or not isinstance(max_epochs, numbers.Integral) or max_epochs < 1:
        raise InvalidConfigurationError(f"max_epochs must be an integer >= 1, got {max_epochs!r}")
    if convergence_tolerance is not None and (
        isinstance(convergence_tolerance, bool)
        or not isinstance(convergence_tolerance, numbers.Real)
        or not math.isfinite(convergence_tolerance)
        or convergence_tolerance < 0
    ):
        raise InvalidConfigurationError(
            f"convergence_tolerance must be None or a finite number >= 0, got {convergence_tolerance!r}"
        )


def _predict_row(row: np.ndarray, coefficients: np.ndarray) -> float:
    return sigmoid(np.dot(row, coefficients))


def predict(row, coefficients) -> float:
    """Probability that `row` belongs to class 1: sigmoid(row . coefficients)."""
    row = np.asarray(row, dtype=np.float64)
    coefficients = np.asarray(coefficients, dtype=np.float64)
    if row.ndim != 1 or coefficients.ndim != 1:
        raise InvalidInputError(
            f"row and coefficients must be 1-D, got {row.ndim}-D and {coefficients.ndim}-D"
        )
    if row.shape[0] != coefficients.shape[0]:
        raise InvalidInputError(
            f"row has {row.shape[0]} features but there are {coefficients.shape[0]} coefficients"
        )
    return _predict_row(row, coefficients)


def train(
    X,
    y,
    learning_rate: float,
    max_epochs: int,
    convergence_tolerance: Optional[float] = None,
    initial_coefficients=None,
    on_epoch: Optional[Callable[[EpochReport], None]] = None,
) -> np.ndarray:
    """
    Fit logistic-regression coefficients by online gradient descent.

    Rows are visited in the order given, every epoch. For row i the update
        coef -= learning_rate * (yhat_i - y_i) * row_i
    is applied immediately, so row i+1 is scored with the updated vector.

    After every epoch an EpochReport(epoch, mse, nll) is logged and passed to
    `on_epoch`. The losses are computed over the yhat_i captured during that
    epoch.

    If `convergence_tolerance` is given, training stops once the epoch NLL
    changes by less than the tolerance between two consecutive epochs.

    Coefficients start at zero unless `initial_coefficients` is given (it is
    copied, never modified). Returns a read-only float64 array.
    """
    _check_config(learning_rate, max_epochs, convergence_tolerance)
    X = _as_design_matrix(X)
    n_rows, n_features = X.shape
    y = _as_labels(y, n_rows)

    if initial_coefficients is None:
        coef = np.zeros(n_features)
    else:
        coef = np.array(initial_coefficients, dtype=np.float64).reshape(-1)
        if coef.shape[0] != n_features:
            raise InvalidInputError(
                f"{coef.shape[0]} initial coefficients for {n_features} features"
            )
        if not np.isfinite(coef).all():
            raise InvalidInputError("initial coefficients must be finite")

    logger.debug(
        "training on %d rows x %d features, lr=%g, max_epochs=%d, tol=%s",
        n_rows, n_features, learning_rate, max_epochs, convergence_tolerance,
    )

    yhat = np.empty(n_rows)
    previous_nll = None
    for epoch in range(1, max_epochs + 1):
        for i in range(n_rows):
            row = X[i]
            yhat[i] = _predict_row(row, coef)
            coef -= learning_rate * (yhat[i] - y[i]) * row

        report = EpochReport(
            epoch=epoch,
            mse=mean_squared_error(y, yhat),
            nll=negative_log_likelihood(y, yhat),
        )
        logger.info("epoch %d/%d  mse=%.6f  nll=%.6f", epoch, max_epochs, report.mse, report.nll)
        if on_epoch is not None:
            on_epoch(report)

        if (
            convergence_tolerance is not None
            and previous_nll is not None
            and abs(report.nll - previous_nll) < convergence_tolerance
        ):
            logger.info(
                "converged after %d epochs (|delta nll| < %g)", epoch, convergence_tolerance
            )
            break
        previous_nll = report.nll

    coef.flags.writeable = False
    return coef


class LogisticRegressionSGD:
    def __init__(self, lr=0.05, epochs=20, tol=None, init="zeros", seed=None):
        if init not in INITIALIZERS:
            raise InvalidConfigurationError(f"init must be one of {INITIALIZERS}, got {init!r}")
        self.lr = lr
        self.epochs = epochs
        self.tol = tol
        self.init = init
        self.seed = seed
        self.coef_ = None
        self.history_: List[EpochReport] = []

    def _initial_coefficients(self, n_features):
        if self.init == "zeros":
            return None
        rng = np.random.default_rng(self.seed)
        return rng.normal(scale=0.01, size=n_features)

    def fit(self, X, y):
        X = _as_design_matrix(X)
        history: List[EpochReport] = []
        self.coef_ = train(
            X,
            y,
            learning_rate=self.lr,
            max_epochs=self.epochs,
            convergence_tolerance=self.tol,
            initial_coefficients=self._initial_coefficients(X.shape[1]),
            on_epoch=history.append,
        )
        self.history_ = history
        return self

    def predict_probas(self, X):
        if self.coef_ is None:
            raise RuntimeError("call fit() before predicting")
        X = _as_design_matrix(X)
        if X.shape[1] != self.coef_.shape[0]:
            raise InvalidInputError(
                f"X has {X.shape[1]} features but the model was fitted on {self.coef_.shape[0]}"
            )
        return sigmoid(X @ self.coef_)

    def predict(self, X, threshold=0.5):
        return (self.predict_probas(X) >= threshold).astype(int)
