"""
Workshop Manager: back office API for an automotive repair shop chain.

Application package root. This is a modular monolith using
hexagonal architecture (ports & adapters).

Bounded contexts:
    - workshop: Appointments, clients, vehicles, mechanics, services,
      opportunities, users, branches and work statuses.

Layers:
    - domain: Records, queries, ports (ABCs), errors.
    - application: Use cases and DTOs.
    - infrastructure: Adapters implementing domain ports.
    - interfaces: FastAPI routers and the per-entity schema registry.
    - shared: Cross-cutting concerns (validation, errors, security, logging).
"""
