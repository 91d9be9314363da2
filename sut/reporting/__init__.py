"""Reporting module - run report model and output."""

from .report import ModuleLineItem, ReportModel, build_report
from .manifest import load_module_manifest, parse_module_manifest
from .json_reporter import JsonReporter

__all__ = [
    "ModuleLineItem",
    "ReportModel",
    "build_report",
    "load_module_manifest",
    "parse_module_manifest",
    "JsonReporter",
]
