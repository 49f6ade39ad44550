from typing import Tuple

import numpy as np


class Loss:
    """Tüm kayıp fonksiyonlarının miras alacağı soyut temel sınıf."""
    def __call__(self, y_pred: np.ndarray, y_true: np.ndarray) -> Tuple[float, np.ndarray]:
        """Skaler kaybı ve y_pred'e göre gradyanı döndürür."""
        raise NotImplementedError


def get_loss(name: str) -> Loss:
    from .mse import MSELoss
    from .cross_entropy import CrossEntropyLoss

    losses = {"mse": MSELoss, "cross_entropy": CrossEntropyLoss}
    if name not in losses:
        raise ValueError(f"Unknown loss '{name}'. Available: {sorted(losses)}")
    return losses[name]()
