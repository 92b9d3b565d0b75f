"""Typed failures raised by the ledger and body metrics."""


class LedgerError(Exception):
    """Base class for person/ledger domain errors."""


class InvalidInputError(LedgerError, ValueError):
    """Malformed day key or stored stats payload."""


class EmptyLedgerError(LedgerError):
    """An aggregate was requested over a ledger with no recorded days."""


class DegenerateMeasurementError(LedgerError, ValueError):
    """Body measurement that cannot feed a formula (e.g. zero height)."""
