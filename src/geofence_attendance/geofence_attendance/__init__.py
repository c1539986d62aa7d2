"""Geofenced classroom attendance.

Feature modules (sessions, attendance, reports) sit behind a thin Flask
controller layer, with service and repository layers underneath.
"""
