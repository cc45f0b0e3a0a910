# src/wallet_auth/scripts/tokens.py
"""
Cron job purging expired refresh token records.

Expired refresh tokens are already rejected on use; this keeps the
``auth_token`` table from growing without bound.
"""

import logging

from sqlalchemy.orm import Session

from wallet_auth.db.session import SessionLocal
from wallet_auth.db.time import utcnow
from wallet_auth.stores.sql import SqlTokenStore

logger = logging.getLogger(__name__)


def purge_expired_tokens(db: Session) -> int:
    """Delete every token record whose expiry has passed.

    Args:
        db: Database session

    Returns:
        Number of records removed
    """
    removed = SqlTokenStore(db).purge_expired(utcnow())
    logger.info("Purged %d expired token records", removed)
    return removed


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    db = SessionLocal()
    try:
        purge_expired_tokens(db)
    finally:
        db.close()
