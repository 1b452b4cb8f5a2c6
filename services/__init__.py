"""
services/ - Business Logic Layer
=================================
Services validate input, apply business rules and coordinate
repositories. Multi-statement changes run inside ``Database.transaction``.
"""
