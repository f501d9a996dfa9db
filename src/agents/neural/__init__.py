from agents.neural.neural_network import NeuralNetwork

__all__ = ['NeuralNetwork']
