"""
Tests for neuroevo.

This package contains tests for:
- Uniform crossover
- Top-K selection
- The population engine and its generational step
- Network genomes
- The snake fitness environment
"""
