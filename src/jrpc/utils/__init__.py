"""Support utilities (tracing)."""
