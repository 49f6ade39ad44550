# Bu dosya, tüm katmanları tek bir yerden kolayca import etmeyi sağlar.
from .base import BaseLayer
from .dense import DenseLayer

__all__ = ["BaseLayer", "DenseLayer"]
