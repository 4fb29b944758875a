"""Stage parsing, execution and instrumentation."""
