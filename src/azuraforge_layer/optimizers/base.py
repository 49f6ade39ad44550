import numpy as np


class Optimizer:
    """
    Düzleştirilmiş parametre vektörü üzerinde çalışan optimizatörlerin temel sınıfı.
    step() yeni bir parametre vektörü döndürür; modele yazmak çağıranın işidir.
    """
    def __init__(self, lr: float):
        self.lr = lr

    def step(self, params: np.ndarray, grad: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def reset(self) -> None:
        pass

    def clip_gradients(self, grad: np.ndarray, max_norm: float) -> np.ndarray:
        """
        Gradyan patlamasını önlemek için gradyanları kırpar.
        L2 normu max_norm'u aşarsa, gradyan orantılı olarak küçültülür.
        """
        total_norm = np.sqrt(np.sum(grad ** 2))
        if total_norm > max_norm:
            clip_coef = max_norm / (total_norm + 1e-6)
            return grad * clip_coef
        return grad
