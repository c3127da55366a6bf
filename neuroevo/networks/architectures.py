"""
Preset network architectures for evolved agents.

Architectures are plain dictionaries so they can be logged, compared
and passed around without touching torch.
"""
from typing import Any, Dict, Optional, Sequence


def feed_forward_architecture(
    input_size: int = 7,
    hidden_sizes: Optional[Sequence[int]] = None,
    output_size: int = 4,
    activation: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Fixed-topology feed-forward network with bias-free linear layers.

    With no activation the forward pass is a chain of matrix products,
    which is all the snake agents need.

    Architecture:
        Input -> [Linear -> (activation)] x N -> Linear -> Output

    Args:
        input_size: Number of sensor inputs.
        hidden_sizes: Hidden layer widths. Default [4, 4].
        output_size: Number of outputs (one per action).
        activation: Optional activation after each hidden layer.

    Returns:
        JSON architecture specification.
    """
    if hidden_sizes is None:
        hidden_sizes = [4, 4]

    layers = []
    prev_size = input_size

    for i, hidden_size in enumerate(hidden_sizes):
        layers.append({
            'id': f'hidden_{i}',
            'type': 'linear',
            'in': prev_size,
            'out': hidden_size,
            'bias': False,
        })
        if activation:
            layers.append({'id': f'act_{i}', 'type': 'activation', 'fn': activation})
        prev_size = hidden_size

    layers.append({
        'id': 'output',
        'type': 'linear',
        'in': prev_size,
        'out': output_size,
        'bias': False,
    })

    return {
        'name': 'FeedForward',
        'input_size': input_size,
        'output_size': output_size,
        'layers': layers,
    }
