"""Package version."""

PACKAGE_VERSION = "0.1.0"
