from typing import Dict, Optional, Tuple

import numpy as np

from ..activations import get_activation
from ..config import LayerConfig
from ..gradient import Gradient
from ..losses import get_loss
from ..params import BIAS_KEY, WEIGHT_KEY, ParamInitializer
from .base import BaseLayer


class DenseLayer(BaseLayer):
    """
    Tam bağlantılı (fully-connected) denetimli katman.
    Skor, konfigürasyondaki kayıp fonksiyonuyla etiketlere göre hesaplanır.
    loss="cross_entropy" softmax çıktısı varsayar ve logits üzerinde çalışır.
    """
    def __init__(self, conf: LayerConfig, input: Optional[np.ndarray] = None,
                 labels: Optional[np.ndarray] = None, param_initializer: Optional[ParamInitializer] = None):
        super().__init__(conf, input, param_initializer)
        self.labels = labels

    @classmethod
    def duplicate_with(cls, conf: LayerConfig, weight: np.ndarray, bias: np.ndarray,
                       input: Optional[np.ndarray] = None) -> 'DenseLayer':
        layer = cls(conf, input)
        layer.set_param(WEIGHT_KEY, weight)
        layer.set_param(BIAS_KEY, bias)
        return layer

    def clone(self) -> Optional['DenseLayer']:
        """Etiketler de kopyalanır; klon ayrı bir worker'da doğrudan fit() edilebilir."""
        layer = super().clone()
        if layer is not None and self.labels is not None:
            layer.labels = self.labels.copy()
        return layer

    def set_labels(self, labels: Optional[np.ndarray]) -> None:
        self.labels = labels

    def fit(self, x: Optional[np.ndarray] = None, labels: Optional[np.ndarray] = None) -> Dict[str, list]:
        if labels is not None:
            self.labels = labels
        self._require_labels()
        return super().fit(x)

    def compute_gradient_and_score(self) -> Tuple[Gradient, float]:
        # Dropout girdinin bir kopyasına uygulanır, saklanan girdi değişmez.
        x = self._require_input().copy()
        labels = self._require_labels()
        self.apply_dropout_if_necessary(x)

        W, b = self._weight_and_bias()
        self._check_forward_shapes(x, W, b)
        score, delta = self._score_and_delta(x @ W + b, labels)

        grads = {
            WEIGHT_KEY: x.T @ delta,
            BIAS_KEY: delta.sum(axis=0).reshape(b.shape),
        }
        # Gradyan sırası params() sırasıyla aynı olmalı
        gradient = Gradient({name: grads.get(name, np.zeros_like(value))
                             for name, value in self.param_table().items()})
        return gradient, score

    def score(self) -> float:
        score, _ = self._score_and_delta(self.activation_mean(), self._require_labels())
        return score

    def _score_and_delta(self, z: np.ndarray, labels: np.ndarray) -> Tuple[float, np.ndarray]:
        loss = get_loss(self.conf.loss)
        if self.conf.loss == "cross_entropy":
            return loss(z, labels)

        activation = get_activation(self.conf.activation)
        if activation.derivative is None:
            raise ValueError(f"Activation '{activation.name}' has no elementwise derivative; use loss='cross_entropy'.")
        score, grad_out = loss(activation(z), labels)
        return score, grad_out * activation.derivative(z)

    def _require_labels(self) -> np.ndarray:
        if self.labels is None:
            raise RuntimeError("DenseLayer has no labels; pass them to fit() or set_labels().")
        return self.labels
