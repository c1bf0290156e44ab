"""Lecture attendance sheet package.

A form for recording per-lecture attendance (course metadata, a fixed-size
student roster and lecturer comments) persisted to MySQL, organized as
repository / service layers with a thin Flask controller.
"""
