from .base import Optimizer
from .sgd import SGD
from .adam import Adam

__all__ = ["Optimizer", "SGD", "Adam", "get_optimizer"]


def get_optimizer(name: str, lr: float) -> Optimizer:
    optimizers = {"sgd": SGD, "adam": Adam}
    if name not in optimizers:
        raise ValueError(f"Unknown optimizer '{name}'. Available: {sorted(optimizers)}")
    return optimizers[name](lr=lr)
