# layer/src/azuraforge_layer/solver.py
import logging
import time
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from .callbacks import Callback
from .config import LayerConfig
from .events import Event
from .optimizers import Optimizer, get_optimizer

if TYPE_CHECKING:
    from .layers import BaseLayer


class Solver:
    """
    Bir modelin parametrelerini optimize eden döngü.
    Model sözleşmesi: params(), set_params(flat) ve gradient_and_score().
    """
    def __init__(self, model: 'BaseLayer', conf: LayerConfig, listeners: Optional[List[Callback]] = None,
                 optimizer: Optional[Optimizer] = None):
        self.model = model
        self.conf = conf
        self.listeners = list(listeners or [])
        self.optimizer = optimizer or get_optimizer(conf.optimizer, conf.lr)
        self.logger = logging.getLogger(self.__class__.__name__)

        for listener in self.listeners:
            listener.set_solver(self)

        self.history: Dict[str, List[float]] = {"score": []}
        self.stop_training: bool = False

    class Builder:
        def __init__(self):
            self._model = None
            self._conf: Optional[LayerConfig] = None
            self._listeners: List[Callback] = []
            self._optimizer: Optional[Optimizer] = None

        def model(self, model: 'BaseLayer') -> 'Solver.Builder':
            self._model = model
            return self

        def configure(self, conf: LayerConfig) -> 'Solver.Builder':
            self._conf = conf
            return self

        def listeners(self, listeners: List[Callback]) -> 'Solver.Builder':
            self._listeners = list(listeners)
            return self

        def optimizer(self, optimizer: Optimizer) -> 'Solver.Builder':
            self._optimizer = optimizer
            return self

        def build(self) -> 'Solver':
            if self._model is None:
                raise ValueError("Cannot build a Solver without a model.")
            conf = self._conf if self._conf is not None else self._model.conf
            return Solver(self._model, conf, self._listeners, self._optimizer)

    @classmethod
    def builder(cls) -> 'Solver.Builder':
        return cls.Builder()

    def _publish(self, event_name: str, payload: Optional[Dict[str, Any]] = None):
        event = Event(name=event_name, solver=self, payload=payload or {})
        for listener in self.listeners:
            listener(event)

    def optimize(self) -> Dict[str, List[float]]:
        num_iterations = self.conf.num_iterations
        self.history = {"score": []}
        self.stop_training = False
        self.optimizer.reset()

        self.logger.info(f"Optimization started: {num_iterations} iterations with {self.optimizer.__class__.__name__}.")
        self._publish("optimize_begin", payload={"num_iterations": num_iterations})
        start = time.time()

        for iteration in range(num_iterations):
            if self.stop_training:
                self.logger.info(f"Optimization stopped early at iteration {iteration}.")
                break

            gradient, score = self.model.gradient_and_score()
            grad = gradient.gradient()
            if self.conf.max_grad_norm is not None:
                grad = self.optimizer.clip_gradients(grad, self.conf.max_grad_norm)

            self.model.set_params(self.optimizer.step(self.model.params(), grad))

            self.history["score"].append(score)
            self._publish("iteration_done", payload={"iteration": iteration, "score": score})

        final_score = self.history["score"][-1] if self.history["score"] else None
        self._publish("optimize_end", payload={"score": final_score, "elapsed": time.time() - start})
        self.logger.info(f"Optimization finished in {time.time() - start:.3f}s, last score: {final_score}")
        return self.history
