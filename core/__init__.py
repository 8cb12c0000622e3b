"""
Core module for shared domain infrastructure.

This module contains:
- Domain events, exceptions and value objects
- Infrastructure (event bus, event handlers, database helpers)
- Middleware components
- Metrics, tracing and health views
"""
