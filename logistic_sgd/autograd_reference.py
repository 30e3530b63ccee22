# autograd_reference.py
# The same online logistic-regression SGD, but with the gradient taken by torch
# autograd instead of written out by hand. Used to cross-check train().
# pip install torch

import numpy as np
import torch
import torch.nn.functional as F

from .data import make_logistic_dataset
from .logistic_regression import train


def train_autograd(X, y, learning_rate, max_epochs):
    """
    Row-by-row SGD on binary cross-entropy with logits.

    d/dw BCE(x . w, y) = (sigmoid(x . w) - y) * x, so each optimizer step is the
    hand-written update. float64 throughout to keep the comparison tight.
    """
    X = torch.as_tensor(np.asarray(X, dtype=np.float64))  # [N, M]
    y = torch.as_tensor(np.asarray(y, dtype=np.float64))  # [N]

    w = torch.zeros(X.shape[1], dtype=torch.float64, requires_grad=True)
    optimizer = torch.optim.SGD([w], lr=learning_rate)

    for _ in range(max_epochs):
        for i in range(X.shape[0]):
            optimizer.zero_grad()
            score = X[i] @ w  # scalar
            loss = F.binary_cross_entropy_with_logits(score, y[i])
            loss.backward()
            optimizer.step()

    return w.detach().numpy().copy()


def compare_with_hand_written(learning_rate=0.05, max_epochs=20, seed=0):
    X, y = make_logistic_dataset(seed=seed)

    coef_manual = train(X, y, learning_rate, max_epochs)
    coef_autograd = train_autograd(X, y, learning_rate, max_epochs)

    print("hand-written:", np.round(coef_manual, 6))
    print("autograd:    ", np.round(coef_autograd, 6))
    max_abs_diff = float(np.max(np.abs(coef_manual - coef_autograd)))
    print(f"Max |coef_manual - coef_autograd| = {max_abs_diff:.6e}")
    return max_abs_diff


if __name__ == "__main__":
    compare_with_hand_written()
