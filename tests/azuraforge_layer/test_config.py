import pytest
import numpy as np

from azuraforge_layer import LayerConfig, build_config, DefaultParamInitializer, stabilize, WEIGHT_KEY


def test_build_config_ignores_unknown_keys():
    conf = build_config({"n_in": 4, "n_out": 2, "activation": "tanh", "pipeline_name": "x"})
    assert conf.n_in == 4
    assert conf.activation == "tanh"
    assert conf.dropout == 0.0


@pytest.mark.parametrize("raw, bad_field", [
    ({"n_in": 0, "n_out": 2}, "n_in"),
    ({"n_in": 2, "n_out": 2, "dropout": 1.5}, "dropout"),
    ({"n_in": 2, "n_out": 2, "activation": "swish"}, "activation"),
    ({"n_in": 2, "n_out": 2, "activation": "sigmoid", "loss": "cross_entropy"}, "loss"),
])
def test_build_config_reports_invalid_fields(raw, bad_field):
    with pytest.raises(ValueError) as exc_info:
        build_config(raw)
    assert f"Field '{bad_field}'" in str(exc_info.value)


def test_cross_entropy_with_softmax_is_accepted():
    conf = build_config({"n_in": 2, "n_out": 3, "activation": "softmax", "loss": "cross_entropy"})
    assert conf.loss == "cross_entropy"


def test_with_widths_returns_copy():
    listeners = [object()]
    conf = LayerConfig(n_in=3, n_out=5, listeners=listeners)

    swapped = conf.with_widths(n_in=5, n_out=3)

    assert (swapped.n_in, swapped.n_out) == (5, 3)
    assert (conf.n_in, conf.n_out) == (3, 5)
    assert swapped.listeners[0] is listeners[0]


@pytest.mark.parametrize("scheme", ["xavier", "he", "uniform", "zero"])
def test_default_initializer_schemes(scheme):
    conf = LayerConfig(n_in=6, n_out=4, weight_init=scheme)
    table = {}

    DefaultParamInitializer(np.random.default_rng(0)).init(table, conf)

    assert list(table) == ["W", "b"]
    assert table[WEIGHT_KEY].shape == (6, 4)
    if scheme == "zero":
        assert np.all(table[WEIGHT_KEY] == 0)


def test_default_initializer_rejects_non_positive_widths():
    conf = LayerConfig.model_construct(n_in=0, n_out=2, weight_init="xavier")
    with pytest.raises(ValueError):
        DefaultParamInitializer().init({}, conf)


def test_stabilize_clamps_extremes():
    out = stabilize(np.array([-1e9, 0.5, 1e9]), 1)
    assert out[1] == 0.5
    assert out[0] == pytest.approx(-87.3365, rel=1e-4)
    assert out[2] == pytest.approx(87.3365, rel=1e-4)
    assert stabilize(np.array([1e9]), 2)[0] == pytest.approx(87.3365 / 2, rel=1e-4)
