"""Flange log service: mock flange records over HTTP."""

from .api import create_app
from .generator import demo_flange_records, generate_mock_flange_data

__all__ = ["create_app", "demo_flange_records", "generate_mock_flange_data"]
