"""
Business header (name + short description) for a tenant.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import Tenant

DEFAULT_BIZ_NAME = "Kitchen Biz"


def fetch_tenant_header(db: Session, tenant_id: Optional[str]) -> dict[str, str]:
    if not tenant_id:
        return {"biz_name": DEFAULT_BIZ_NAME, "biz_blurb": ""}

    row = db.execute(
        select(Tenant.business_name, Tenant.business_blurb, Tenant.name).where(
            Tenant.id == tenant_id
        )
    ).first()
    if row is None:
        return {"biz_name": DEFAULT_BIZ_NAME, "biz_blurb": ""}

    return {
        "biz_name": row.business_name or row.name or DEFAULT_BIZ_NAME,
        "biz_blurb": row.business_blurb or "",
    }
