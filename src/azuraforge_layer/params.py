import logging
from typing import Dict, Optional

import numpy as np

from .config import LayerConfig

WEIGHT_KEY = "W"
BIAS_KEY = "b"


class ParamInitializer:
    """Parametre tablosunu konfigürasyona göre dolduran soyut temel sınıf."""
    def init(self, params: Dict[str, np.ndarray], conf: LayerConfig) -> None:
        raise NotImplementedError


class DefaultParamInitializer(ParamInitializer):
    """
    Ağırlık (n_in, n_out) ve bias (1, n_out) parametrelerini oluşturur.
    Tablo yerinde güncellenir; önce ağırlık, sonra bias eklenir.
    """
    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.logger = logging.getLogger(self.__class__.__name__)

    def init(self, params: Dict[str, np.ndarray], conf: LayerConfig) -> None:
        n_in, n_out = conf.n_in, conf.n_out
        if n_in <= 0 or n_out <= 0:
            raise ValueError(f"Layer widths must be positive, got n_in={n_in}, n_out={n_out}.")

        params[WEIGHT_KEY] = self._init_weights(n_in, n_out, conf.weight_init)
        params[BIAS_KEY] = np.zeros((1, n_out))
        self.logger.debug(f"Initialized {conf.weight_init} weights of shape ({n_in}, {n_out}).")

    def _init_weights(self, n_in: int, n_out: int, scheme: str) -> np.ndarray:
        if scheme == "xavier":
            # Xavier/Glorot başlatması
            limit = np.sqrt(6.0 / (n_in + n_out))
            return self.rng.uniform(-limit, limit, (n_in, n_out))
        if scheme == "he":
            # He/Kaiming başlatması
            return self.rng.standard_normal((n_in, n_out)) * np.sqrt(2.0 / n_in)
        if scheme == "uniform":
            limit = 1.0 / np.sqrt(n_in)
            return self.rng.uniform(-limit, limit, (n_in, n_out))
        if scheme == "zero":
            return np.zeros((n_in, n_out))
        raise ValueError(f"Unknown weight init scheme '{scheme}'.")
