"""
sample-app - Structured Logging Demo Service.

A small users API that emits request-correlated JSON logs for an ELK stack,
with Kubernetes probes, Prometheus metrics and a cloud-agnostic greeting
function.
"""

__version__ = "1.0.0"
