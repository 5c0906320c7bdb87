"""Cohort Tracker package.

This package is organized by feature modules (interviews, activeness, attendance,
admins, ...) with a thin Flask controller layer over service/repository layers.
"""
