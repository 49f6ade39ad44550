# layer/src/azuraforge_layer/__init__.py
"""
AzuraForge Layer kütüphanesinin ana paketi.
Eğitilebilir ileri beslemeli katman çekirdeğini ve onu eğiten bileşenleri dışa aktarır.
"""
from .events import Event
from .callbacks import Callback, ScoreIterationListener, EarlyStopping
from .config import LayerConfig, build_config
from .activations import Activation, get_activation
from .gradient import Gradient, GradientAndScore
from .params import ParamInitializer, DefaultParamInitializer, WEIGHT_KEY, BIAS_KEY
from .losses import Loss, MSELoss, CrossEntropyLoss
from .optimizers import Optimizer, SGD, Adam
from .solver import Solver
from .layers import BaseLayer, DenseLayer
from .transforms import stabilize


__all__ = [
    "Event", "Callback", "ScoreIterationListener", "EarlyStopping",
    "LayerConfig", "build_config",
    "Activation", "get_activation",
    "Gradient", "GradientAndScore",
    "ParamInitializer", "DefaultParamInitializer", "WEIGHT_KEY", "BIAS_KEY",
    "Loss", "MSELoss", "CrossEntropyLoss",
    "Optimizer", "SGD", "Adam",
    "Solver",
    "BaseLayer", "DenseLayer",
    "stabilize",
]
