"""
Invoice Dashboard API Package

This package provides the data-access and mutation layer behind the
invoicing dashboard, reading and writing invoice and customer records
in a Supabase database and shaping them for display.
"""

__version__ = "1.0.0"
__author__ = "Invoice Dashboard Team"
