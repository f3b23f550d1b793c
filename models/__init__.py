from .ledger_balance import LedgerBalance
