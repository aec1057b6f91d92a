"""Employee Events package.

This package is organized by feature modules (employees, events, attendance,
home) with a thin Flask controller layer over service/repository layers.
"""
