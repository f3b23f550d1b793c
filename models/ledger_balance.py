# models/ledger_balance.py
from database import Base
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Float, DateTime, func


class LedgerBalance(Base):
    __tablename__ = "ledger_balances"

    # e.g. "USDC", "BTC"; the tracked set is closed
    symbol: Mapped[str] = mapped_column(String(16), primary_key=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)

    amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    price_usd: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    # weighted-average cost per unit; stale when amount == 0
    purchase_price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    updated_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
