"""Command line interface of the admin console."""
