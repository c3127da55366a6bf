"""
Neuroevolution of game-playing agents.

Subpackages:
- evolution: genome contract, crossover, selection and the population engine
- networks: feed-forward network genomes built on PyTorch
- environments: the snake game used as a fitness function
"""
