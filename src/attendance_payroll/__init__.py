"""Attendance & Payroll core package.

Organized by feature modules (attendance, leaves, payroll, ...) with service
classes on top of per-entity repository interfaces. MySQL and in-memory
repository implementations can be swapped through the container.
"""
