"""Fixed-topology feed-forward network trained by online backpropagation.

Used by the hyper-complex trading agents and by each stock's corporate AI.
Every layer, including the output layer, uses tanh, so scores live in
(-1, 1). Training is a single-sample gradient step: no momentum, no
regularization.
"""
from typing import Dict, List, Optional, Sequence

import numpy as np

INIT_WEIGHT_RANGE = 0.1


def dtanh(y: np.ndarray) -> np.ndarray:
    """Derivative of tanh expressed through its output y = tanh(x)."""
    return 1.0 - y * y


class NeuralNetwork:
    """Feed-forward network with per-layer weight matrices and bias vectors.

    ``weights[i]`` has shape ``(layer_sizes[i], layer_sizes[i + 1])``.
    """

    def __init__(self,
                 layer_sizes: Sequence[int],
                 input_neuron_names: Optional[Sequence[str]] = None,
                 rng: Optional[np.random.Generator] = None):
        if len(layer_sizes) < 2:
            raise ValueError("A network needs at least an input and an output layer")
        self.layer_sizes: List[int] = [int(size) for size in layer_sizes]
        self.input_neuron_names: List[str] = list(input_neuron_names or [])
        rng = rng if rng is not None else np.random.default_rng()

        self.weights: List[np.ndarray] = []
        self.biases: List[np.ndarray] = []
        for input_size, output_size in zip(self.layer_sizes[:-1], self.layer_sizes[1:]):
            self.weights.append(
                rng.uniform(-INIT_WEIGHT_RANGE, INIT_WEIGHT_RANGE, size=(input_size, output_size))
            )
            self.biases.append(
                rng.uniform(-INIT_WEIGHT_RANGE, INIT_WEIGHT_RANGE, size=output_size)
            )

    @property
    def input_size(self) -> int:
        return self.layer_sizes[0]

    def _check_inputs(self, inputs: Sequence[float]) -> np.ndarray:
        values = np.asarray(inputs, dtype=float)
        if values.ndim != 1 or values.shape[0] != self.input_size:
            raise ValueError(
                f"Expected {self.input_size} inputs, got {values.shape[0] if values.ndim == 1 else values.shape}"
            )
        return values

    def _forward_layers(self, inputs: np.ndarray) -> List[np.ndarray]:
        activations = [inputs]
        current = inputs
        for weight_matrix, bias_vector in zip(self.weights, self.biases):
            current = np.tanh(current @ weight_matrix + bias_vector)
            activations.append(current)
        return activations

    def feed_forward(self, inputs: Sequence[float]) -> List[float]:
        """Propagate inputs through every layer and return the output activations."""
        values = self._check_inputs(inputs)
        return self._forward_layers(values)[-1].tolist()

    def backpropagate(self, inputs: Sequence[float], targets: Sequence[float], learning_rate: float) -> None:
        """Apply one gradient-descent step towards ``targets`` in place."""
        values = self._check_inputs(inputs)
        target_values = np.asarray(targets, dtype=float)
        if target_values.shape[0] != self.layer_sizes[-1]:
            raise ValueError(f"Expected {self.layer_sizes[-1]} targets, got {target_values.shape[0]}")

        layer_activations = self._forward_layers(values)
        errors = target_values - layer_activations[-1]

        for i in range(len(self.weights) - 1, -1, -1):
            previous = layer_activations[i]
            gradients = errors * dtanh(layer_activations[i + 1])
            # Errors for the previous layer go through the weights before this update
            next_errors = self.weights[i] @ gradients
            self.weights[i] += learning_rate * np.outer(previous, gradients)
            self.biases[i] += learning_rate * gradients
            errors = next_errors

    def get_input_layer_weights(self) -> Dict[str, float]:
        """Mean absolute outgoing weight per named input neuron."""
        if not self.input_neuron_names or not self.weights:
            return {}
        input_weights = self.weights[0]
        influence = {}
        for i, name in enumerate(self.input_neuron_names):
            if i < input_weights.shape[0]:
                influence[name] = float(np.mean(np.abs(input_weights[i])))
        return influence

    def get_output_layer_weights(self) -> Dict[str, float]:
        """Raw weights from the last hidden layer into the (first) output neuron."""
        if len(self.layer_sizes) < 2 or not self.weights:
            return {}
        last_hidden_index = len(self.layer_sizes) - 2
        last_weights = self.weights[-1]
        return {
            f"H{last_hidden_index}_{i + 1}": float(last_weights[i][0])
            for i in range(last_weights.shape[0])
        }

    def clone(self) -> 'NeuralNetwork':
        """Independent copy; no array is shared with the original."""
        copy = NeuralNetwork.__new__(NeuralNetwork)
        copy.layer_sizes = list(self.layer_sizes)
        copy.input_neuron_names = list(self.input_neuron_names)
        copy.weights = [w.copy() for w in self.weights]
        copy.biases = [b.copy() for b in self.biases]
        return copy

    def to_dict(self) -> dict:
        return {
            'layer_sizes': list(self.layer_sizes),
            'input_neuron_names': list(self.input_neuron_names),
            'weights': [w.tolist() for w in self.weights],
            'biases': [b.tolist() for b in self.biases],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'NeuralNetwork':
        network = cls.__new__(cls)
        network.layer_sizes = list(data['layer_sizes'])
        network.input_neuron_names = list(data.get('input_neuron_names', []))
        network.weights = [np.asarray(w, dtype=float) for w in data['weights']]
        network.biases = [np.asarray(b, dtype=float) for b in data['biases']]
        return network

    def __eq__(self, other) -> bool:
        if not isinstance(other, NeuralNetwork):
            return NotImplemented
        return (
            self.layer_sizes == other.layer_sizes
            and self.input_neuron_names == other.input_neuron_names
            and all(np.array_equal(a, b) for a, b in zip(self.weights, other.weights))
            and all(np.array_equal(a, b) for a, b in zip(self.biases, other.biases))
        )

    def __repr__(self) -> str:
        return f"NeuralNetwork(layer_sizes={self.layer_sizes})"
