"""Parsers for kubectl output."""

from kubepick.controllers.cluster.parsers.pod_parser import PodParser, format_age

__all__ = ["PodParser", "format_age"]
