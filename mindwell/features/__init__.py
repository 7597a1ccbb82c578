"""
Features Module - Self-contained feature units.

- database: Owner-scoped data access repositories
- journaling: Journal entry annotation workflow
- auth: Passwordless sign-in and token resolution
"""
