"""Utility functions for legendarios."""

from legendarios.utils.date_parser import calendar_day, parse_date
from legendarios.utils.amount_parser import format_brl, parse_amount, to_money

__all__ = ["calendar_day", "parse_date", "format_brl", "parse_amount", "to_money"]
