"""
models/ - Domain Records
=========================
Plain dataclasses the access layer decodes rows into.
"""
