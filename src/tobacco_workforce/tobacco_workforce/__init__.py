"""Tobacco Workforce package.

Organized by feature modules (employees, schedules, work_entries, payroll, ...)
with a thin Flask controller layer over service/repository layers.
"""
