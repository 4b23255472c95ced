"""
ProjectHub Backend — Services Layer
=====================================

What:  Integrations with systems outside the database.

Service Inventory:
    - auth_service.py: Google OpenID Connect sign-in (Authlib)
"""
