"""Sink steps for saving records."""

from claimsample.sinks.sink import CSVSink, JSONLSink, ListSink, Sink

__all__ = ["Sink", "CSVSink", "JSONLSink", "ListSink"]
