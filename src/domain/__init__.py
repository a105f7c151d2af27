"""
Domain layer for contact form processing.

This layer contains:
- Data models (type-safe structures)
- Field validators and the app version grammar
- Message assembly and the request pipeline
- Result types (explicit success/failure handling)
"""
