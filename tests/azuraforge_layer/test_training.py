import pytest
import numpy as np
from unittest.mock import MagicMock

from azuraforge_layer import (
    Callback, DenseLayer, EarlyStopping, LayerConfig, ScoreIterationListener, Solver,
    SGD, Adam, CrossEntropyLoss, MSELoss, WEIGHT_KEY, BIAS_KEY,
)

X_TRAIN = np.array([[-1.0], [0.0], [1.0], [2.0]])
# y = 2x + 1
Y_TRAIN = np.array([[-1.0], [1.0], [3.0], [5.0]])


def _regression_layer(**conf_kwargs) -> DenseLayer:
    conf = LayerConfig(n_in=1, n_out=1, activation="linear", weight_init="zero", **conf_kwargs)
    layer = DenseLayer(conf, input=X_TRAIN, labels=Y_TRAIN)
    layer.init_params()
    return layer


class RecordingListener(Callback):
    def __init__(self):
        super().__init__()
        self.events = []

    def on_optimize_begin(self, event):
        self.events.append(event.name)

    def on_iteration_done(self, event):
        self.events.append(event.name)

    def on_optimize_end(self, event):
        self.events.append(event.name)


# --- Solver ve Optimizatör Testleri ---

@pytest.mark.parametrize("optimizer_name, lr", [("sgd", 0.1), ("adam", 0.05)])
def test_fit_simple_regression(optimizer_name, lr):
    """Katmanın hem SGD hem de Adam ile basit bir regresyon problemini çözebildiğini test eder."""
    layer = _regression_layer(optimizer=optimizer_name, lr=lr, num_iterations=300)
    initial_score = layer.score()

    history = layer.fit()

    assert len(history["score"]) == 300
    assert layer.score() < initial_score / 10


def test_fit_replaces_input_and_labels():
    layer = _regression_layer(num_iterations=5)
    new_x = X_TRAIN * 2

    layer.fit(new_x, Y_TRAIN)

    assert layer.input is new_x


def test_fit_without_labels_fails():
    layer = DenseLayer(LayerConfig(n_in=1, n_out=1), input=X_TRAIN)
    layer.init_params()
    with pytest.raises(RuntimeError):
        layer.fit()


def test_gradient_matches_numerical_estimate():
    rng = np.random.default_rng(7)
    conf = LayerConfig(n_in=3, n_out=2, activation="sigmoid")
    layer = DenseLayer(conf, input=rng.standard_normal((5, 3)), labels=rng.random((5, 2)))
    layer.init_params()

    gradient, score = layer.gradient_and_score()
    params = layer.params()
    numerical = np.zeros_like(params)
    eps = 1e-6
    for i in range(params.size):
        shifted = params.copy()
        shifted[i] += eps
        layer.set_params(shifted)
        plus = layer.score()
        shifted[i] -= 2 * eps
        layer.set_params(shifted)
        minus = layer.score()
        numerical[i] = (plus - minus) / (2 * eps)
    layer.set_params(params)

    assert isinstance(score, float)
    assert np.allclose(gradient.gradient(), numerical, atol=1e-6)


def test_cross_entropy_gradient_order_follows_params():
    conf = LayerConfig(n_in=2, n_out=3, activation="softmax", loss="cross_entropy")
    layer = DenseLayer(conf, input=np.ones((2, 2)), labels=np.eye(3)[[0, 2]])
    # Bias önce kaydedilir
    layer.set_param(BIAS_KEY, np.zeros((1, 3)))
    layer.set_param(WEIGHT_KEY, np.zeros((2, 3)))

    gradient, score = layer.gradient_and_score()

    assert list(gradient.gradient_for_variable) == [BIAS_KEY, WEIGHT_KEY]
    assert gradient.gradient().size == layer.num_params()
    assert score == pytest.approx(np.log(3))


def test_listeners_receive_events():
    listener = RecordingListener()
    layer = _regression_layer(num_iterations=3, listeners=[listener])

    layer.fit()

    assert listener.events == ["optimize_begin"] + ["iteration_done"] * 3 + ["optimize_end"]
    assert listener.solver is not None


def test_score_iteration_listener_logs(caplog):
    listener = ScoreIterationListener(print_every=2)
    layer = _regression_layer(num_iterations=4, listeners=[listener])

    with caplog.at_level("INFO"):
        layer.fit()

    assert len(listener.scores) == 4
    assert "Score at iteration 0" in caplog.text
    assert "Score at iteration 2" in caplog.text


def test_early_stopping_stops_solver():
    early_stopping = EarlyStopping(patience=2)
    model = MagicMock()
    model.params.return_value = np.zeros(2)
    gradient = MagicMock()
    gradient.gradient.return_value = np.zeros(2)
    # Skor hiç iyileşmez
    model.gradient_and_score.return_value = (gradient, 1.0)

    conf = LayerConfig(n_in=1, n_out=1, num_iterations=50)
    solver = Solver.builder().model(model).configure(conf).listeners([early_stopping]).build()
    history = solver.optimize()

    assert solver.stop_training is True
    assert len(history["score"]) == 3


def test_solver_builder_requires_model():
    with pytest.raises(ValueError):
        Solver.builder().build()


def test_solver_clips_gradients():
    model = MagicMock()
    model.params.return_value = np.zeros(2)
    gradient = MagicMock()
    gradient.gradient.return_value = np.array([30.0, 40.0])
    model.gradient_and_score.return_value = (gradient, 0.5)

    conf = LayerConfig(n_in=1, n_out=1, num_iterations=1, lr=1.0, max_grad_norm=5.0)
    Solver.builder().model(model).configure(conf).optimizer(SGD(lr=1.0)).build().optimize()

    updated = model.set_params.call_args[0][0]
    assert np.linalg.norm(updated) == pytest.approx(5.0, rel=1e-4)


# --- Kayıp ve Optimizatör Testleri ---

def test_mse_loss_value_and_gradient():
    score, grad = MSELoss()(np.array([[1.0, 3.0]]), np.array([[0.0, 1.0]]))
    assert score == pytest.approx(2.5)
    assert np.allclose(grad, [[1.0, 2.0]])


def test_cross_entropy_rejects_bad_shape():
    with pytest.raises(ValueError):
        CrossEntropyLoss()(np.zeros((2, 3)), np.zeros((2, 2)))


def test_adam_moves_against_gradient():
    adam = Adam(lr=0.1)
    updated = adam.step(np.zeros(2), np.array([1.0, -1.0]))
    assert updated[0] < 0 < updated[1]
