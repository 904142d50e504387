"""Attendance Tracker package.

This package is organized by feature modules (employees, attendance, reports)
with a thin Flask controller layer on top of service/repository layers.
"""
