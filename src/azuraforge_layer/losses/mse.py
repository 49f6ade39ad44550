from typing import Tuple

import numpy as np

from .base import Loss


class MSELoss(Loss):
    """
    Mean Squared Error (Ortalama Karesel Hata) kayıp fonksiyonu.
    Genellikle regresyon ve yeniden yapılandırma (reconstruction) hatası için kullanılır.
    """
    def __call__(self, y_pred: np.ndarray, y_true: np.ndarray) -> Tuple[float, np.ndarray]:
        if y_pred.shape != y_true.shape:
            raise ValueError(f"MSELoss shape mismatch: predictions {y_pred.shape}, labels {y_true.shape}.")
        diff = y_pred - y_true
        return float(np.mean(diff ** 2)), 2.0 * diff / diff.size
