"""Logistic regression trained by online stochastic gradient descent.

This package holds the from-scratch trainer and its loss functions, a synthetic
data generator for the worked example, a torch autograd cross-check, and a
small CLI demo.
"""

from .errors import InvalidConfigurationError, InvalidInputError, NumericDegeneracyWarning
from .logistic_regression import EpochReport, LogisticRegressionSGD, predict, train
from .losses import EPSILON, mean_squared_error, negative_log_likelihood, sigmoid
