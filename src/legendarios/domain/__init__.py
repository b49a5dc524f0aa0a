"""Domain layer for legendarios application."""

_SERVICES = {
    "MemberService": "legendarios.domain.member",
    "DuesService": "legendarios.domain.dues",
    "TransactionService": "legendarios.domain.transaction",
    "LedgerService": "legendarios.domain.ledger",
    "FinanceService": "legendarios.domain.finance",
    "BackupService": "legendarios.domain.backup",
}

__all__ = list(_SERVICES)


# Services import the database layer, which imports domain.entities;
# resolve them lazily so importing entities never cycles back here.
def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
