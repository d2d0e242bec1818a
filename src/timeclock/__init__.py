"""Timeclock package.

Time-and-attendance backend organized by feature modules (employees,
attendance, requests, time off, overtime, payroll, ...) with a thin Flask
controller layer over service and repository layers.
"""
