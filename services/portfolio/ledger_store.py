# services/portfolio/ledger_store.py
"""
Persistence for the ledger's balance table.

Only balances survive a restart; window layout is rebuilt from defaults.
"""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from models.ledger_balance import LedgerBalance
from services.portfolio.ledger import PortfolioLedger

logger = logging.getLogger(__name__)


def load_ledger(db: Session, ledger: PortfolioLedger) -> int:
    rows = db.execute(select(LedgerBalance)).scalars().all()
    if not rows:
        logger.info("ledger_load no persisted balances, keeping seed")
        return 0

    restored = ledger.restore(
        {
            "symbol": r.symbol,
            "amount": r.amount,
            "price_usd": r.price_usd,
            "purchase_price": r.purchase_price,
        }
        for r in rows
    )
    logger.info("ledger_load restored=%d rows=%d", restored, len(rows))
    return restored


def save_ledger(db: Session, ledger: PortfolioLedger) -> None:
    for snap in ledger.snapshot():
        db.merge(LedgerBalance(**snap))
    db.commit()

