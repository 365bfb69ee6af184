"""Weekly time-clock payroll package.

Organized by feature modules (users, time_entries, payroll) with a thin
Flask controller layer over service/repository layers.
"""
