import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from agents.neural.neural_network import NeuralNetwork


def _network(layers=(3, 4, 1), seed=0):
    return NeuralNetwork(list(layers), ['a', 'b', 'c'], rng=np.random.default_rng(seed))


def test_weight_shapes_follow_layer_sizes():
    network = _network((3, 4, 2, 1))
    assert [w.shape for w in network.weights] == [(3, 4), (4, 2), (2, 1)]
    assert [b.shape for b in network.biases] == [(4,), (2,), (1,)]


def test_output_is_bounded_by_tanh():
    network = _network()
    output = network.feed_forward([100.0, -100.0, 50.0])
    assert len(output) == 1
    assert -1 < output[0] < 1


def test_wrong_input_size_is_rejected():
    network = _network()
    with pytest.raises(ValueError):
        network.feed_forward([1.0, 2.0])
    with pytest.raises(ValueError):
        network.backpropagate([1.0, 2.0], [0.5], 0.1)


def test_backpropagation_moves_output_towards_target():
    network = _network()
    inputs = [0.2, -0.4, 0.9]
    target = 0.8
    before = abs(target - network.feed_forward(inputs)[0])
    for _ in range(50):
        network.backpropagate(inputs, [target], 0.1)
    after = abs(target - network.feed_forward(inputs)[0])
    assert after < before


def test_clone_shares_no_arrays():
    network = _network()
    copy = network.clone()
    assert copy == network

    copy.backpropagate([1.0, 1.0, 1.0], [1.0], 0.5)
    assert copy != network
    assert not np.array_equal(copy.weights[0], network.weights[0])


def test_serialization_preserves_network():
    network = _network((3, 5, 1))
    restored = NeuralNetwork.from_dict(network.to_dict())
    assert restored == network
    assert restored.feed_forward([0.1, 0.2, 0.3]) == pytest.approx(network.feed_forward([0.1, 0.2, 0.3]))


def test_input_layer_weights_are_keyed_by_neuron_name():
    influence = _network().get_input_layer_weights()
    assert set(influence) == {'a', 'b', 'c'}
    assert all(value >= 0 for value in influence.values())


def test_network_needs_two_layers():
    with pytest.raises(ValueError):
        NeuralNetwork([3])
