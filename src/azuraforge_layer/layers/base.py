# layer/src/azuraforge_layer/layers/base.py
"""
Bias ve aktivasyon fonksiyonu olan, eğitilebilir tek bir ileri beslemeli katmanın
soyut temel sınıfı. Parametre yönetimi, ileri geçiş, dropout, mini-batch
ortalaması (merge), klonlama ve transpoz burada tanımlanır. Gradyan hesabı ve
çoğaltma yapıcısı (duplicate_with) somut alt sınıfların sorumluluğundadır.
"""
import logging
from typing import Dict, Optional, Tuple

import numpy as np

from ..activations import get_activation
from ..config import LayerConfig
from ..gradient import Gradient, GradientAndScore
from ..params import BIAS_KEY, WEIGHT_KEY, DefaultParamInitializer, ParamInitializer
from ..solver import Solver
from ..transforms import stabilize


class BaseLayer:
    """Tüm katmanların miras alacağı soyut temel sınıf."""

    def __init__(self, conf: LayerConfig, input: Optional[np.ndarray] = None,
                 param_initializer: Optional[ParamInitializer] = None):
        self.conf = conf
        self.input = input
        self.dropout_mask: Optional[np.ndarray] = None
        self.rng = np.random.default_rng(conf.seed)
        self.param_initializer = param_initializer or DefaultParamInitializer(self.rng)
        self.logger = logging.getLogger(self.__class__.__name__)
        self._params: Dict[str, np.ndarray] = {}

    # --- Çoğaltma sözleşmesi ---

    @classmethod
    def duplicate_with(cls, conf: LayerConfig, weight: np.ndarray, bias: np.ndarray,
                       input: Optional[np.ndarray] = None) -> 'BaseLayer':
        """
        Verilen konfigürasyon ve dizilerle aynı türden yeni bir katman oluşturur.
        clone() ve transpose() bu yapıcıyı kullanır; diziler kopyalanmış olarak gelir.
        """
        raise NotImplementedError(f"{cls.__name__} does not implement duplicate_with().")

    # --- Konfigürasyon ve girdi ---

    def set_conf(self, conf: LayerConfig) -> None:
        self.conf = conf

    def set_input(self, input: Optional[np.ndarray]) -> None:
        self.input = input

    def batch_size(self) -> int:
        return self._require_input().shape[0]

    # --- Parametre yönetimi ---

    def set_param(self, name: str, value: np.ndarray) -> None:
        """Parametreyi ekler veya üzerine yazar. Şekil kontrolü ileri geçişte yapılır."""
        self._params[name] = value

    def get_param(self, name: str) -> Optional[np.ndarray]:
        return self._params.get(name)

    def param_table(self) -> Dict[str, np.ndarray]:
        return self._params

    def set_param_table(self, param_table: Dict[str, np.ndarray]) -> None:
        """
        Tüm parametre tablosunu değiştirir. Sözlük kopyalanmaz: sahipliği katmana
        geçer, çağıran taraf katman kullanımdayken onu değiştirmemelidir.
        """
        self._params = param_table

    def params(self) -> np.ndarray:
        """Tüm parametreleri kayıt sırasıyla düzleştirip tek bir vektörde birleştirir."""
        if not self._params:
            return np.empty(0)
        return np.concatenate([p.ravel() for p in self._params.values()])

    def set_params(self, params: np.ndarray) -> None:
        """
        params() ile aynı sırada düzleştirilmiş bir vektörü parametre tablosuna geri yazar.
        Uzunluk uyuşmazsa hiçbir parametre değiştirilmeden ValueError yükseltilir.
        """
        flat = np.asarray(params).ravel()
        expected = self.num_params()
        if flat.size != expected:
            raise ValueError(f"Expected a parameter vector of length {expected}, got {flat.size}.")

        updated = {}
        offset = 0
        for name, value in self._params.items():
            updated[name] = flat[offset:offset + value.size].reshape(value.shape).copy()
            offset += value.size
        self._params.update(updated)

    def num_params(self) -> int:
        return sum(p.size for p in self._params.values())

    def init_params(self) -> None:
        self.param_initializer.init(self._params, self.conf)

    # --- İleri geçiş ---

    def pre_output(self, x: np.ndarray) -> np.ndarray:
        """
        Afin dönüşümü (x @ W) hesaplar ve bias'ı ekler; concat_biases açıksa bias
        sütunları yatay olarak eklenir. x kopyalanmadan yeni girdi olarak saklanır.
        """
        if x is None or np.size(x) == 0:
            raise ValueError("No null or empty input allowed.")

        W, b = self._weight_and_bias()
        self._check_forward_shapes(x, W, b)
        self.input = x

        ret = x @ W
        if self.conf.concat_biases:
            return np.hstack((ret, np.broadcast_to(b, (ret.shape[0], b.shape[-1]))))
        return ret + b

    def activate(self, x: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Aktivasyonu hesaplar. x verilirse önce sayısal olarak stabilize edilip girdi
        olarak saklanır; verilmezse mevcut girdi kullanılır.
        """
        if x is not None:
            self.input = stabilize(x, 1)
        activation = get_activation(self.conf.activation)
        return activation(self.activation_mean())

    def activation_mean(self) -> np.ndarray:
        """Aktivasyon uygulanmamış ön-aktivasyon (input @ W + b)."""
        x = self._require_input()
        W, b = self._weight_and_bias()
        self._check_forward_shapes(x, W, b)
        return x @ W + b

    def __call__(self, x: Optional[np.ndarray] = None) -> np.ndarray:
        return self.activate(x)

    # --- Dropout ---

    def apply_dropout_if_necessary(self, x: np.ndarray) -> np.ndarray:
        """
        Her çağrıda yeni bir dropout maskesi üretir ve x'e YERİNDE uygular.
        Maske x ile aynı şekildedir; dropout 0 ise birlerden oluşur.
        """
        if self.conf.dropout > 0:
            self.dropout_mask = (self.rng.random(x.shape) > self.conf.dropout).astype(x.dtype)
        else:
            self.dropout_mask = np.ones_like(x)

        x *= self.dropout_mask
        return x

    # --- Yapısal işlemler ---

    def merge(self, other: 'BaseLayer', batch_size: int) -> None:
        """Diğer katmanın parametrelerini 1/batch_size ağırlığıyla bu katmana ekler."""
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}.")
        mine, theirs = self.params(), other.params()
        if mine.size != theirs.size:
            raise ValueError(f"Cannot merge layers with {mine.size} and {theirs.size} parameters.")
        self.set_params(mine + theirs / batch_size)

    def clone(self) -> Optional['BaseLayer']:
        W, b = self._weight_and_bias()
        try:
            return type(self).duplicate_with(
                self.conf, W.copy(), b.copy(),
                self.input.copy() if self.input is not None else None,
            )
        except (NotImplementedError, TypeError, ValueError) as e:
            self.logger.error(f"Could not clone {type(self).__name__}: {e}", exc_info=True)
            return None

    def transpose(self) -> Optional['BaseLayer']:
        """
        Bağlı ağırlıklı (tied-weight) mimariler için transpoz katman üretir:
        n_in/n_out yer değiştirir, W, b ve girdi transpoz edilip kopyalanır.
        """
        W, b = self._weight_and_bias()
        try:
            conf = self.conf.with_widths(n_in=self.conf.n_out, n_out=self.conf.n_in)
            return type(self).duplicate_with(
                conf, W.T.copy(), b.T.copy(),
                self.input.T.copy() if self.input is not None else None,
            )
        except (NotImplementedError, TypeError, ValueError) as e:
            self.logger.error(f"Could not transpose {type(self).__name__}: {e}", exc_info=True)
            return None

    # --- Eğitim ---

    def fit(self, x: Optional[np.ndarray] = None) -> Dict[str, list]:
        if x is not None:
            self.input = x
        solver = Solver.builder().model(self).configure(self.conf).listeners(self.conf.listeners).build()
        return solver.optimize()

    def gradient_and_score(self) -> GradientAndScore:
        gradient, score = self.compute_gradient_and_score()
        return GradientAndScore(gradient, float(score))

    def compute_gradient_and_score(self) -> Tuple[Gradient, float]:
        """Alt sınıflar gradyanı ve skaler skoru birlikte hesaplamalıdır."""
        raise NotImplementedError

    def score(self) -> float:
        raise NotImplementedError

    # --- Yardımcılar ---

    def _require_input(self) -> np.ndarray:
        if self.input is None:
            raise RuntimeError(f"{type(self).__name__} has no input; call pre_output() or set_input() first.")
        return self.input

    def _weight_and_bias(self) -> Tuple[np.ndarray, np.ndarray]:
        W = self.get_param(WEIGHT_KEY)
        b = self.get_param(BIAS_KEY)
        missing = [k for k, v in ((WEIGHT_KEY, W), (BIAS_KEY, b)) if v is None]
        if missing:
            raise RuntimeError(f"Missing required parameters {missing}; call init_params() or set_param() first.")
        return W, b

    @staticmethod
    def _check_forward_shapes(x: np.ndarray, W: np.ndarray, b: np.ndarray) -> None:
        if x.ndim != 2:
            raise ValueError(f"Expected a 2D input (examples, features), got {x.ndim}D.")
        if x.shape[1] != W.shape[0]:
            raise RuntimeError(f"Input has {x.shape[1]} columns but weight has {W.shape[0]} rows.")
        if b.shape[-1] != W.shape[1]:
            raise RuntimeError(f"Bias has {b.shape[-1]} columns but transformed output has {W.shape[1]}.")
