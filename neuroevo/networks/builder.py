"""
Network builder for converting between architectures, PyTorch models
and flat weight encodings.

This module provides the infrastructure the network genome relies on:
- Building PyTorch networks from JSON architecture specs
- Flattening all weights into one gene vector (row-major, layer by layer)
- Loading a gene vector back into a network, with a length check
"""
from collections import OrderedDict
from typing import Any, Dict, List, Optional

import numpy as np
import torch
import torch.nn as nn

from ..evolution.crossover import GenotypeLengthError


class DynamicNetwork(nn.Module):
    """
    A PyTorch network built from a JSON architecture specification.

    Attributes:
        architecture: The JSON architecture this network was built from.
    """

    def __init__(self, layers: 'OrderedDict[str, nn.Module]', architecture: Dict[str, Any]):
        super().__init__()
        self.architecture = architecture
        self._layers = nn.ModuleDict(layers)
        self._layer_order = list(layers.keys())

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        """Forward pass through all layers in order."""
        for layer_id in self._layer_order:
            x = self._layers[layer_id](x)
        return x

    def get_layer(self, layer_id: str) -> Optional[nn.Module]:
        """Get a layer by its ID, or None if there is no such layer."""
        return self._layers[layer_id] if layer_id in self._layers else None

    def layer_ids(self) -> List[str]:
        """Return list of layer IDs in order."""
        return self._layer_order.copy()


class NetworkBuilder:
    """
    Build PyTorch networks from JSON architecture specifications.

    Linear layers are created without initialization: every network
    built here is immediately filled from a gene vector, either random
    (spawn) or bred (deserialize).

    Architecture Format:
        {
            "input_size": 7,
            "output_size": 4,
            "layers": [
                {"id": "hidden_0", "type": "linear", "in": 7, "out": 4, "bias": false},
                {"id": "output", "type": "linear", "in": 4, "out": 4, "bias": false}
            ]
        }

    Example:
        builder = NetworkBuilder()
        network = builder.from_json(architecture)
        genes = builder.flatten_weights(network)
        builder.load_flat_weights(network, genes)
    """

    # Supported activation functions
    ACTIVATIONS = {
        'sigmoid': nn.Sigmoid,
        'tanh': nn.Tanh,
        'relu': nn.ReLU,
        'identity': nn.Identity,
    }

    def from_json(self, architecture: Dict[str, Any]) -> DynamicNetwork:
        """
        Build a PyTorch network from a JSON architecture specification.

        Args:
            architecture: Dictionary with 'input_size', 'output_size', and 'layers'.

        Returns:
            A DynamicNetwork instance with uninitialized weights.

        Raises:
            ValueError: If architecture is invalid.
        """
        self._validate_architecture(architecture)

        layers = OrderedDict()

        for layer_spec in architecture['layers']:
            layer_id = layer_spec.get('id', f"layer_{len(layers)}")
            layers[layer_id] = self._build_layer(layer_spec)

        # Weights are evolved, never trained
        return DynamicNetwork(layers, architecture).requires_grad_(False)

    def _build_layer(self, layer_spec: Dict[str, Any]) -> nn.Module:
        """
        Build a single layer from its specification.

        Raises:
            ValueError: If layer type is unknown.
        """
        layer_type = layer_spec.get('type', '')

        if layer_type == 'linear':
            return torch.nn.utils.skip_init(
                nn.Linear,
                layer_spec['in'],
                layer_spec['out'],
                bias=layer_spec.get('bias', False),
            )

        elif layer_type == 'activation':
            fn_name = layer_spec.get('fn', 'identity')
            if fn_name not in self.ACTIVATIONS:
                raise ValueError(f"Unknown activation function: {fn_name}")
            return self.ACTIVATIONS[fn_name]()

        else:
            raise ValueError(f"Unknown layer type: {layer_type}")

    def _validate_architecture(self, architecture: Dict[str, Any]) -> None:
        """Validate that an architecture specification is well-formed."""
        if not isinstance(architecture, dict):
            raise ValueError("Architecture must be a dictionary")

        if 'layers' not in architecture:
            raise ValueError("Architecture must have 'layers' key")

        if not isinstance(architecture['layers'], list):
            raise ValueError("'layers' must be a list")

        expected_input = architecture.get('input_size')
        for i, layer in enumerate(architecture['layers']):
            if not isinstance(layer, dict):
                raise ValueError(f"Layer {i} must be a dictionary")
            if 'type' not in layer:
                raise ValueError(f"Layer {i} must have 'type' key")
            if layer['type'] == 'linear':
                if expected_input is not None and layer['in'] != expected_input:
                    raise ValueError(
                        f"Layer {i} expects {layer['in']} inputs, "
                        f"previous layer gives {expected_input}"
                    )
                expected_input = layer['out']

    @staticmethod
    def parameter_count(network: nn.Module) -> int:
        """Count the weights of a network (its genotype length)."""
        return sum(p.numel() for p in network.parameters())

    @staticmethod
    def flatten_weights(network: nn.Module) -> np.ndarray:
        """
        Concatenate all weights into one float32 vector.

        Each weight matrix is flattened row-major, in layer order.
        """
        with torch.no_grad():
            flat = nn.utils.parameters_to_vector(network.parameters())
        return flat.numpy().copy()

    def load_flat_weights(self, network: nn.Module, genes: np.ndarray) -> None:
        """
        Load a gene vector produced by flatten_weights() into a network.

        Raises:
            GenotypeLengthError: If the vector length does not match.
        """
        expected = self.parameter_count(network)
        if len(genes) != expected:
            raise GenotypeLengthError(
                f"Network has {expected} weights, got {len(genes)} genes"
            )

        vector = torch.tensor(np.asarray(genes), dtype=torch.float32)
        with torch.no_grad():
            nn.utils.vector_to_parameters(vector, network.parameters())
