"""
SharedBudget: backend for a shared household budgeting application.

Application package root. This is a modular monolith using
hexagonal architecture (ports & adapters) with domain-driven design.

Bounded contexts:
    - budgeting: Groups, profiles, transactions and budgets.

Layers:
    - domain: Pure business logic, entities, ports (ABCs), errors.
    - application: Use cases, DTOs, orchestration.
    - infrastructure: MongoDB adapters implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas, validation.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
