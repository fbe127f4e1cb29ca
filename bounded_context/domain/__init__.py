"""Domain layer - core business logic and interfaces.

This layer contains:
- Domain entities and value objects
- Repository and job enqueuer interfaces
- Fixed-precision decimal rules shared by entities
- Stable error codes and domain exceptions
"""
