"""Weekly day-part availability and booking service."""
