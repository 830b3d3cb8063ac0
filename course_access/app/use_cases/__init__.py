"""
Use Cases

Organized into domain folders:
- auth/: One-time code login and logout
- access/: Session resolution and gated content
- entitlements/: Grants outside the payment flow
- payments/: Orders and provider callbacks
- progress/: Lesson progress
- admin/: Maintenance
- audit/: Audit logs
"""
