from typing import Dict, NamedTuple, Optional

import numpy as np


class Gradient:
    """
    Parametre ismine göre gradyanları tutar.
    Düzleştirilmiş görünüm, katmanın params() sırasıyla aynı sırayı izler.
    """
    def __init__(self, gradients: Optional[Dict[str, np.ndarray]] = None):
        self.gradient_for_variable: Dict[str, np.ndarray] = dict(gradients or {})

    def set_gradient_for(self, name: str, value: np.ndarray) -> None:
        self.gradient_for_variable[name] = value

    def get_gradient_for(self, name: str) -> Optional[np.ndarray]:
        return self.gradient_for_variable.get(name)

    def gradient(self) -> np.ndarray:
        """Tüm gradyanları tek bir düz vektör olarak döndürür."""
        if not self.gradient_for_variable:
            return np.empty(0)
        return np.concatenate([g.ravel() for g in self.gradient_for_variable.values()])

    def __repr__(self) -> str:
        shapes = {k: v.shape for k, v in self.gradient_for_variable.items()}
        return f"Gradient({shapes})"


class GradientAndScore(NamedTuple):
    gradient: Gradient
    score: float
