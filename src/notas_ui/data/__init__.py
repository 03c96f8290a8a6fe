"""
Static demo data for the Notas Fiscais dashboard.

This package contains fixture data used by the demo services for
development, testing and demonstrations without the webhooks or the auth
service.

Modules:
- demo_invoices: Raw webhook-shaped notas (pending and history)
- demo_members: Raw auth-service user objects
"""
