"""
Shared utilities for Permix.

This package aggregates cross-cutting building blocks used by the engine:

- config: Engine settings via pydantic-settings
- logging: Structured logging with trace correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses

Nothing here may import from the permix package.
"""
