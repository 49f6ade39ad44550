# layer/src/azuraforge_layer/activations.py
"""
Katmanların kullandığı aktivasyon fonksiyonları.
Her aktivasyon, isimle kaydedilir ve konfigürasyonda bu isimle seçilir.
"""
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import numpy as np

ArrayFn = Callable[[np.ndarray], np.ndarray]


@dataclass(frozen=True)
class Activation:
    name: str
    fn: ArrayFn
    derivative: Optional[ArrayFn] = None

    def __call__(self, z: np.ndarray) -> np.ndarray:
        return self.fn(z)


def _sigmoid(z: np.ndarray) -> np.ndarray:
    return 1.0 / (1.0 + np.exp(-z))


def _softmax(z: np.ndarray) -> np.ndarray:
    # Satır bazında, taşmayı önlemek için maksimum çıkarılır
    shifted = z - np.max(z, axis=1, keepdims=True)
    e = np.exp(shifted)
    return e / np.sum(e, axis=1, keepdims=True)


_REGISTRY: Dict[str, Activation] = {
    "sigmoid": Activation("sigmoid", _sigmoid, lambda z: _sigmoid(z) * (1.0 - _sigmoid(z))),
    "tanh": Activation("tanh", np.tanh, lambda z: 1.0 - np.tanh(z) ** 2),
    "relu": Activation("relu", lambda z: np.maximum(z, 0.0), lambda z: (z > 0).astype(z.dtype)),
    "linear": Activation("linear", lambda z: z, np.ones_like),
    # Softmax'ın eleman bazlı türevi yok, CrossEntropyLoss ile birlikte kullanılır.
    "softmax": Activation("softmax", _softmax),
}


def get_activation(name: str) -> Activation:
    """Kayıtlı aktivasyonu ismine göre döndürür."""
    try:
        return _REGISTRY[name]
    except KeyError:
        raise ValueError(f"Unknown activation '{name}'. Available: {sorted(_REGISTRY)}") from None


def available_activations():
    return sorted(_REGISTRY)
