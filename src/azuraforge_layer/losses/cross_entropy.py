from typing import Tuple

import numpy as np

from .base import Loss


class CrossEntropyLoss(Loss):
    """
    LogSoftmax ve NLLLoss'u birleştiren kayıp fonksiyonu.
    Girdi olarak softmax öncesi değerleri (logits) ve one-hot etiketleri bekler.
    """
    def __call__(self, y_pred: np.ndarray, y_true: np.ndarray) -> Tuple[float, np.ndarray]:
        if y_pred.ndim != 2:
            raise ValueError(f"CrossEntropyLoss expects 2D logits, got {y_pred.ndim}D.")
        if y_pred.shape != y_true.shape:
            raise ValueError(f"CrossEntropyLoss expects one-hot labels of shape {y_pred.shape}, got {y_true.shape}.")

        # Sayısal stabilite için Log-Sum-Exp hilesiyle LogSoftmax
        max_logits = np.max(y_pred, axis=1, keepdims=True)
        stable_logits = y_pred - max_logits
        log_sum_exp = np.log(np.sum(np.exp(stable_logits), axis=1, keepdims=True))
        log_probs = stable_logits - log_sum_exp

        num_samples = y_pred.shape[0]
        loss_value = -np.sum(y_true * log_probs) / num_samples

        # Softmax olasılıklarından etiketler çıkarılır
        grad = (np.exp(log_probs) - y_true) / num_samples
        return float(loss_value), grad
