import numpy as np

# log(float32 en küçük normal sayı); exp() bu aralığın dışında taşar/sıfırlanır.
_CUT_OFF = float(-np.log(np.finfo(np.float32).tiny))


def stabilize(x: np.ndarray, k: float = 1.0) -> np.ndarray:
    """
    Girdiyi, k ile çarpıldığında [-cut_off, cut_off] aralığında kalacak şekilde kırpar.
    Üstel tabanlı aktivasyonlardan (sigmoid, softmax) önce sayısal taşmayı önler.
    Yeni bir dizi döndürür, girdiyi değiştirmez.
    """
    if k <= 0:
        raise ValueError(f"Stabilization factor must be positive, got {k}.")
    bound = _CUT_OFF / k
    return np.clip(np.asarray(x, dtype=np.float64), -bound, bound)
