"""Reporting API package."""

from reporting.api.admin import admin_report_router

__all__ = ["admin_report_router"]
