"""Payroll & expense management package.

Organized by feature modules (auth, users, payroll, expenses, dashboard) with
a thin Flask controller layer over service/repository layers.
"""
