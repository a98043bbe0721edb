"""
Utility Scripts.

This package contains development scripts:

- generate_traffic.py: Drive a running instance to produce a realistic log stream

Run scripts with: python -m scripts.<script_name>
"""
