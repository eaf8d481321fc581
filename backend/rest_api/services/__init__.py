"""
Services module for business logic.

- tenancy/: effective tenant resolution, profile stores, tenant header
- imports/: CSV import templates and dry-run validation
- plans.py: plan lookup and feature gating

Usage:
    from rest_api.services.tenancy import SqlProfileStore, resolve_effective_tenant
    tenant = resolve_effective_tenant(user_id, SqlProfileStore(db), settings.demo_tenant_id)
"""
