"""Timeclock package.

This package is organized by feature modules (employees, punches, attendance,
reports) with a thin Flask controller layer and service/repository layers.
"""
