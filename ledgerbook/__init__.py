"""Ledgerbook: party and expense ledger with aggregated reports."""
