class InvalidInputError(ValueError):
    """Design matrix, labels or coefficients violate a shape or value invariant."""


class InvalidConfigurationError(ValueError):
    """A hyperparameter is out of range (learning rate, epochs, tolerance, ...)."""


class NumericDegeneracyWarning(RuntimeWarning):
    """A predicted probability hit exactly 0 or 1 and was clamped."""
