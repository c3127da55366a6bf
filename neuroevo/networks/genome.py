"""
Neural network genome.

A NetworkGenome is a fixed-topology feed-forward network whose genes are
its weights: the flattened concatenation of every weight matrix,
row-major, layer by layer. All genomes of one type share the same
architecture and therefore the same genotype length.
"""
from typing import Any, Dict, Optional, Type

import numpy as np
import torch

from ..evolution.genome import Genome
from .architectures import feed_forward_architecture
from .builder import DynamicNetwork, NetworkBuilder


class NetworkGenome(Genome):
    """
    Genome wrapping a DynamicNetwork.

    Weights are drawn uniformly from [0, 1) on spawn, and a mutation
    replaces a single weight with a fresh draw from the same range.

    Use with_architecture() to evolve a different topology:

        Wide = NetworkGenome.with_architecture(
            feed_forward_architecture(hidden_sizes=[16])
        )
        pop = Population(Wide)
    """

    architecture: Dict[str, Any] = feed_forward_architecture()
    builder = NetworkBuilder()

    def __init__(self, network: Optional[DynamicNetwork] = None):
        self.network = network if network is not None else self.builder.from_json(self.architecture)

    @classmethod
    def with_architecture(
        cls,
        architecture: Dict[str, Any],
        name: Optional[str] = None,
    ) -> Type['NetworkGenome']:
        """Create a genome type bound to another architecture."""
        name = name or f"{architecture.get('name', 'Custom')}Genome"
        return type(cls)(name, (cls,), {'architecture': architecture})

    @classmethod
    def genotype_length(cls) -> int:
        """Number of genes (weights) of this genome type."""
        return sum(
            layer['in'] * layer['out']
            + (layer['out'] if layer.get('bias', False) else 0)
            for layer in cls.architecture['layers']
            if layer['type'] == 'linear'
        )

    def serialize(self) -> np.ndarray:
        return self.builder.flatten_weights(self.network)

    @classmethod
    def deserialize(cls, genes: np.ndarray) -> 'NetworkGenome':
        genome = cls()
        cls.builder.load_flat_weights(genome.network, genes)
        return genome

    def mutate(self, rng: np.random.Generator) -> None:
        # Every gene is equally likely, whatever the size of its layer
        index = int(rng.integers(self.builder.parameter_count(self.network)))
        for weights in self.network.parameters():
            if index < weights.numel():
                weights.view(-1)[index] = float(rng.random(dtype=np.float32))
                return
            index -= weights.numel()

    @classmethod
    def spawn(cls, rng: np.random.Generator) -> 'NetworkGenome':
        return cls.deserialize(rng.random(cls.genotype_length(), dtype=np.float32))

    def activate(self, inputs: np.ndarray) -> np.ndarray:
        """
        Run the forward pass.

        Args:
            inputs: Sensor vector of length architecture['input_size'].

        Returns:
            Output vector as a numpy array.
        """
        with torch.no_grad():
            x = torch.as_tensor(np.asarray(inputs, dtype=np.float32))
            return self.network(x).numpy()
