"""Presentation layer: console receipts."""
