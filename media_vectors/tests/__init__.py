"""
Tests Module: Unit and Integration Tests

Test Coverage:
    - Core types, errors and configuration
    - Distance kernels and the exact index
    - Quantized store, pooling, stats, result cache
    - Engine facade, CLI and structured logging
"""
