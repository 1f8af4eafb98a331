"""
Workshop bounded context: domain layer.

Records handled here are plain dictionaries keyed by public field
name. They carry no behavior; validation happens before they reach
the domain and persistence happens behind the repository port.
"""
