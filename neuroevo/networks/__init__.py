"""
Neural network genomes for evolved agents.

This module provides:
- NetworkBuilder: Convert between JSON architecture, PyTorch models and
  flat weight vectors
- Preset feed-forward architectures
- NetworkGenome: a network whose weights are evolved by the engine
"""
from .builder import DynamicNetwork, NetworkBuilder
from .architectures import feed_forward_architecture
from .genome import NetworkGenome

__all__ = [
    # Builder
    'DynamicNetwork',
    'NetworkBuilder',

    # Architectures
    'feed_forward_architecture',

    # Genome
    'NetworkGenome',
]
