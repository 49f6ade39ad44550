import numpy as np

from .base import Optimizer


class SGD(Optimizer):
    def step(self, params: np.ndarray, grad: np.ndarray) -> np.ndarray:
        return params - self.lr * grad
