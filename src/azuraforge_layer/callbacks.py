# layer/src/azuraforge_layer/callbacks.py

import logging
import numpy as np
from typing import TYPE_CHECKING, Optional
from .events import Event

# Döngüsel importu önlemek için, sadece tip kontrolü sırasında Solver'ı import et
if TYPE_CHECKING:
    from .solver import Solver

class Callback:
    """
    Tüm dinleyicilerin (listener) temel sınıfı.
    Kendisini çalıştıran Solver'a bir referans tutar.
    """
    def __init__(self):
        self.solver: Optional['Solver'] = None

    def set_solver(self, solver: 'Solver'):
        """Bu metod, Solver tarafından çağrılarak referansı ayarlar."""
        self.solver = solver

    def __call__(self, event: Event):
        """
        Gelen olaya göre ilgili metodu (örn: on_iteration_done) çağırır.
        """
        method = getattr(self, f"on_{event.name}", None)
        if method:
            method(event)

    # Olay metotları
    def on_optimize_begin(self, event: Event) -> None: pass
    def on_optimize_end(self, event: Event) -> None: pass
    def on_iteration_done(self, event: Event) -> None: pass


class ScoreIterationListener(Callback):
    """Her `print_every` iterasyonda bir skoru loglar."""
    def __init__(self, print_every: int = 10):
        super().__init__()
        if print_every < 1:
            raise ValueError(f"print_every must be >= 1, got {print_every}.")
        self.print_every = print_every
        self.logger = logging.getLogger(self.__class__.__name__)
        self.scores = []

    def on_iteration_done(self, event: Event):
        iteration = event.payload.get("iteration", 0)
        score = event.payload.get("score")
        self.scores.append(score)
        if iteration % self.print_every == 0:
            self.logger.info(f"Score at iteration {iteration} is {score:.6f}")


class EarlyStopping(Callback):
    """Skor belirli bir iterasyon sayısı boyunca iyileşmediğinde optimizasyonu durdurur."""
    def __init__(self, patience: int = 10, min_delta: float = 0.0):
        super().__init__()
        self.patience = patience
        self.min_delta = min_delta
        self.wait = 0
        self.best = np.inf
        self.logger = logging.getLogger(self.__class__.__name__)

    def on_optimize_begin(self, event: Event):
        self.wait = 0
        self.best = np.inf

    def on_iteration_done(self, event: Event):
        current = event.payload.get("score")
        if current is None:
            return

        if current < self.best - self.min_delta:
            self.best = current
            self.wait = 0
        else:
            self.wait += 1
            if self.wait >= self.patience:
                self.logger.info(f"EarlyStopping: Stopping optimization. Score did not improve for {self.patience} iterations.")
                if self.solver:
                    self.solver.stop_training = True
